# ============================================================================
# src/contract_extraction/core/result_merger.py
# ============================================================================
"""
Result Merger

Patterns are hints, the model is authoritative:

    completion supplies a value  -> that value,           provenance "llm"
    else field has a candidate   -> top candidate value,  provenance "pattern"
    else                         -> field absent,         provenance "none"
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

from .context.candidate import Candidate
from .context.extraction_result import CompletionResult
from ..constants import Provenance


@dataclass(frozen=True)
class MergedFields:
    values: Dict[str, Any]
    provenance: Dict[str, str]
    field_confidence: Dict[str, float]


def merge_fields(
    completion: CompletionResult,
    candidates: Dict[str, List[Candidate]],
    expected_fields: Sequence[str] = ()
) -> MergedFields:
    """
    Merge the completion's fields with pattern candidates.

    Field order: expected (registry) fields, then candidate fields, then any
    other field the completion returned.
    """
    values: Dict[str, Any] = {}
    provenance: Dict[str, str] = {}
    field_confidence: Dict[str, float] = {}

    for name in _field_universe(completion, candidates, expected_fields):
        if completion.has_value(name):
            values[name] = completion.fields[name]
            provenance[name] = Provenance.LLM.value
            if name in completion.confidence_per_field:
                field_confidence[name] = completion.confidence_per_field[name]
        elif candidates.get(name):
            values[name] = candidates[name][0].value
            provenance[name] = Provenance.PATTERN.value
        else:
            provenance[name] = Provenance.NONE.value

    return MergedFields(values=values, provenance=provenance, field_confidence=field_confidence)


def _field_universe(
    completion: CompletionResult,
    candidates: Dict[str, List[Candidate]],
    expected_fields: Sequence[str]
) -> List[str]:
    ordered = []
    seen = set()
    for name in [*expected_fields, *candidates.keys(), *completion.fields.keys()]:
        if name not in seen:
            seen.add(name)
            ordered.append(name)
    return ordered
