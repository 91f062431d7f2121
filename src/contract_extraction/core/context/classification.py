# ============================================================================
# src/contract_extraction/core/context/classification.py
# ============================================================================
"""
Classification result
- Chosen contract type and confidence
- Cues that matched for the chosen type
- Every other type with its raw score (observability)
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class AlternativeType:
    type: str
    score: int

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "score": self.score}


@dataclass(frozen=True)
class ClassificationResult:
    type: str
    confidence: float = 0.0
    detected_cues: Tuple[str, ...] = ()
    alternative_types: Tuple[AlternativeType, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "confidence": self.confidence,
            "detectedCues": list(self.detected_cues),
            "alternativeTypes": [a.to_dict() for a in self.alternative_types],
        }
