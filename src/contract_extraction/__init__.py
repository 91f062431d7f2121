# ============================================================================
# src/contract_extraction/__init__.py
# ============================================================================
"""
Contract document classification and LLM extraction hints.

Classifies free-text contracts by type, mines likely field values with
registry-driven regex patterns, and enriches the extraction prompt with
them before the LLM call. The LLM's answer stays authoritative.
"""

from .registry import (
    DocumentTypeProfile,
    FieldDefinition,
    RegexPatternSpec,
    TypeRegistry,
    load_registry,
    registry_from_dict,
)
from .classifiers import DocumentClassifier, classify
from .extractors import PatternMatcher, extract_candidates
from .core import (
    Candidate,
    ClassificationResult,
    CompletionResult,
    ExtractionResult,
    build_enhanced_prompt,
    merge_fields,
)
from .core.orchestrator import ExtractionOrchestrator
from .core.service import ContractExtractionService

__version__ = "0.1.0"

__all__ = [
    "DocumentTypeProfile",
    "FieldDefinition",
    "RegexPatternSpec",
    "TypeRegistry",
    "load_registry",
    "registry_from_dict",
    "DocumentClassifier",
    "classify",
    "PatternMatcher",
    "extract_candidates",
    "Candidate",
    "ClassificationResult",
    "CompletionResult",
    "ContractExtractionService",
    "ExtractionOrchestrator",
    "ExtractionResult",
    "build_enhanced_prompt",
    "merge_fields",
]
