# ============================================================================
# src/contract_extraction/core/prompt_builder.py
# ============================================================================
"""
Enhanced Prompt Builder

Assembles the LLM instruction string, in this order:

1. Document type block   (only for a reliable, registered classification)
2. Pattern match block   (one entry per field with candidates, max 5 values)
3. The caller's base prompt, unchanged and always last

With neither block 1 nor block 2 the base prompt is returned as-is.
"""

from typing import Dict, List, Sequence

from .context.candidate import Candidate
from .context.classification import ClassificationResult
from ..constants import MAX_CANDIDATES_PER_FIELD, MIN_CLASSIFICATION_CONFIDENCE, is_sentinel_type


DOCUMENT_TYPE_HEADER = "## Current Document"
CANDIDATES_HEADER = "## Pattern Matches Found"
INSTRUCTIONS_HEADER = "## Additional Instructions"

CANDIDATES_PREAMBLE = (
    "The following potential field values were detected by pattern matching. "
    "They are hints only: confirm each one against the document text before using it, "
    "and ignore any that do not fit."
)


def build_enhanced_prompt(
    classification: ClassificationResult,
    candidates: Dict[str, List[Candidate]],
    base_prompt: str,
    expected_fields: Sequence[str] = ()
) -> str:
    """
    Build the prompt sent to the completion service.

    Args:
        classification: Result of DocumentClassifier.classify
        candidates: {field: [Candidate]} from PatternMatcher
        base_prompt: Caller's core extraction instructions
        expected_fields: Registry field keys for the classified type

    Returns:
        Enhanced prompt, or base_prompt unchanged when there is nothing to add
    """
    sections = []

    if _has_reliable_type(classification):
        sections.append(_document_type_block(classification, expected_fields))

    candidate_block = _candidate_block(candidates)
    if candidate_block:
        sections.append(candidate_block)

    if not sections:
        return base_prompt

    sections.append(f"{INSTRUCTIONS_HEADER}\n{base_prompt}")
    return "\n\n".join(sections)


def _has_reliable_type(classification: ClassificationResult) -> bool:
    if classification is None or is_sentinel_type(classification.type):
        return False
    return classification.confidence >= MIN_CLASSIFICATION_CONFIDENCE


def _document_type_block(classification: ClassificationResult, expected_fields: Sequence[str]) -> str:
    lines = [
        DOCUMENT_TYPE_HEADER,
        f"**DOC_TYPE**: {classification.type}",
        f"**Classification Confidence**: {classification.confidence:.2f}",
    ]
    if expected_fields:
        lines.append(f"**Expected Fields**: {', '.join(expected_fields)}")
    return "\n".join(lines)


def _candidate_block(candidates: Dict[str, List[Candidate]]) -> str:
    entries = []
    for field_key, field_candidates in (candidates or {}).items():
        if not field_candidates:
            continue
        lines = [f"**{field_key}**:"]
        for candidate in field_candidates[:MAX_CANDIDATES_PER_FIELD]:
            lines.append(f'- "{candidate.value}" (context: "{_one_line(candidate.context)}")')
        entries.append("\n".join(lines))

    if not entries:
        return ""
    return "\n".join([CANDIDATES_HEADER, CANDIDATES_PREAMBLE, ""]) + "\n" + "\n\n".join(entries)


def _one_line(text: str) -> str:
    return " ".join((text or "").split())
