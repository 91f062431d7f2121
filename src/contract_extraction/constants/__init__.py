# ============================================================================
# src/contract_extraction/constants/__init__.py
# ============================================================================
"""
Convenient imports for all constants
"""

from .document_types import SentinelType, SENTINEL_TYPES, Provenance, is_sentinel_type
from .scoring import (
    HEADER_WINDOW_CHARS,
    POSITIVE_CUE_WEIGHT,
    FILENAME_HINT_BONUS,
    EXECUTION_MARKER_BONUS,
    NEGATIVE_CUE_PENALTY,
    CONFIDENCE_DIVISOR,
    MIN_CLASSIFICATION_CONFIDENCE,
    CONTEXT_WINDOW_CHARS,
    MAX_CANDIDATES_PER_FIELD,
    DEFAULT_EXECUTION_MARKERS,
)
