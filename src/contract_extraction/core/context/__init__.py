# src/contract_extraction/core/context/__init__.py

from .classification import ClassificationResult, AlternativeType
from .candidate import Candidate
from .extraction_result import CompletionResult, ExtractionResult

__all__ = [
    "ClassificationResult",
    "AlternativeType",
    "Candidate",
    "CompletionResult",
    "ExtractionResult",
]
