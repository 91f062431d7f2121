# ============================================================================
# src/contract_extraction/core/context/extraction_result.py
# ============================================================================
"""
Pipeline input/output records
- CompletionResult: normalized answer of the external LLM call
- ExtractionResult: the pipeline's only output artifact, handed to the
  persistence collaborator
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping
import json
import logging
import re

from json_repair import repair_json

from .candidate import Candidate


logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


@dataclass(frozen=True)
class CompletionResult:
    fields: Mapping[str, Any] = field(default_factory=dict)
    confidence_per_field: Mapping[str, float] = field(default_factory=dict)

    @classmethod
    def from_raw(cls, raw: Any) -> "CompletionResult":
        """
        Normalize whatever the completion collaborator returned.

        Accepts a CompletionResult, a mapping shaped like
        {"fields": {...}, "confidencePerField": {...}}, a flat field mapping,
        or the model's raw JSON text (repaired if malformed). Anything else
        becomes an empty result.
        """
        if isinstance(raw, CompletionResult):
            return raw

        data = raw
        if isinstance(raw, (str, bytes)):
            data = _parse_json_text(raw.decode("utf-8") if isinstance(raw, bytes) else raw)

        if not isinstance(data, Mapping):
            logger.warning(
                f"Completion returned {type(data).__name__}, expected a mapping; "
                f"treating as no fields"
            )
            return cls()

        if "fields" in data:
            fields = data.get("fields")
            confidences = data.get("confidencePerField", data.get("confidence_per_field")) or {}
        else:
            fields = data
            confidences = {}

        if not isinstance(fields, Mapping):
            logger.warning("Completion 'fields' is not a mapping; treating as no fields")
            fields = {}
        if not isinstance(confidences, Mapping):
            confidences = {}

        parsed_confidences = {}
        for name, value in confidences.items():
            try:
                parsed_confidences[str(name)] = max(0.0, min(1.0, float(value)))
            except (TypeError, ValueError):
                logger.debug(f"Ignoring non-numeric confidence for '{name}': {value!r}")

        return cls(
            fields={str(k): v for k, v in fields.items()},
            confidence_per_field=parsed_confidences,
        )

    def has_value(self, field_name: str) -> bool:
        """A field counts as supplied unless it is missing, None or blank."""
        value = self.fields.get(field_name)
        if value is None:
            return False
        if isinstance(value, str) and not value.strip():
            return False
        return True


def _parse_json_text(text: str) -> Any:
    cleaned = _CODE_FENCE.sub("", text.strip())
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError:
        logger.debug("Completion text is not valid JSON, attempting repair")
        return repair_json(cleaned, return_objects=True)


@dataclass(frozen=True)
class ExtractionResult:
    document_type: str
    confidence: float
    candidate_summary: Dict[str, List[Candidate]] = field(default_factory=dict)
    merged_fields: Dict[str, Any] = field(default_factory=dict)
    provenance: Dict[str, str] = field(default_factory=dict)
    field_confidence: Dict[str, float] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "documentType": self.document_type,
            "confidence": self.confidence,
            "candidateSummary": {
                name: [c.to_dict() for c in candidates]
                for name, candidates in self.candidate_summary.items()
            },
            "mergedFields": dict(self.merged_fields),
            "provenance": dict(self.provenance),
            "fieldConfidence": dict(self.field_confidence),
            "warnings": list(self.warnings),
        }

    def to_json(self, indent: int = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False, default=str)
