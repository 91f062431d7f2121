# ============================================================================
# src/contract_extraction/core/context/candidate.py
# ============================================================================
"""
Single pattern-matched field value
- Advisory only: the LLM result always wins over a candidate
- Lives for one pipeline run
"""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class Candidate:
    field: str
    value: str
    context: str = ""        # text around the match, ~50 chars each side
    position: int = 0        # match start offset in the document

    def to_dict(self) -> Dict[str, str]:
        # position only orders candidates; it is not part of the output artifact
        return {"field": self.field, "value": self.value, "context": self.context}
