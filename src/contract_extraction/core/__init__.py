# ============================================================================
# src/contract_extraction/core/__init__.py
# ============================================================================
"""
Core pipeline: result types, prompt building, merging, validation.

The orchestrator and service live in `core.orchestrator` / `core.service`
and are imported from there; they depend on the classifier and matcher,
which themselves depend on `core.context`.
"""

from .context import (
    AlternativeType,
    Candidate,
    ClassificationResult,
    CompletionResult,
    ExtractionResult,
)
from .prompt_builder import build_enhanced_prompt
from .result_merger import MergedFields, merge_fields
from .result_validator import ResultValidator

__all__ = [
    "AlternativeType",
    "Candidate",
    "ClassificationResult",
    "CompletionResult",
    "ExtractionResult",
    "build_enhanced_prompt",
    "MergedFields",
    "merge_fields",
    "ResultValidator",
]
