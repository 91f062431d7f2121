# ============================================================================
# src/contract_extraction/constants/scoring.py
# ============================================================================
"""
Classification and Candidate Constants

Fixed parts of the classification contract. Changing any of them changes
every classification result, so they are constants rather than settings.
"""

# Only the start of a document carries title / recital language
HEADER_WINDOW_CHARS = 5000

# Score weights
POSITIVE_CUE_WEIGHT = 10       # per distinct positive cue in header
FILENAME_HINT_BONUS = 5        # once, if any filename hint matches
EXECUTION_MARKER_BONUS = 3     # once, if any execution marker is in header
NEGATIVE_CUE_PENALTY = 15      # per distinct negative cue in header

# Three positive cues is a confident match
CONFIDENCE_DIVISOR = 30.0

# Below this the classification is treated as unreliable
MIN_CLASSIFICATION_CONFIDENCE = 0.3

# Candidate extraction
CONTEXT_WINDOW_CHARS = 50
MAX_CANDIDATES_PER_FIELD = 5

# Used when the registry does not declare its own markers
DEFAULT_EXECUTION_MARKERS = (
    "execution version",
    "executed",
    "duly executed",
    "counterparts",
    "witness whereof",
)
