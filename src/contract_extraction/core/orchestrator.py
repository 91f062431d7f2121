# ============================================================================
# src/contract_extraction/core/orchestrator.py
# ============================================================================
"""
Extraction Orchestrator

Runs the hint pipeline for one document:

1. Classify document type
2. Extract pattern candidates (reliable classification with fields only)
3. Build the enhanced prompt
4. Call the external completion service (the only async / fallible step)
5. Merge: LLM values win, candidates fill gaps
6. Validate merged fields (warnings only)

Degradation:
- No registry              -> UNAVAILABLE, base prompt passed through
- Confidence below 0.3     -> GENERIC, no candidates, no type block
- A field's pattern fails  -> that field has no candidates
- Completion call fails    -> exception propagates unchanged, no retry

Steps 1-3 are pure, so the same inputs always give the same prompt and,
with a deterministic completion, the same ExtractionResult.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple, Union
import inspect
import logging

from .context.candidate import Candidate
from .context.classification import ClassificationResult
from .context.extraction_result import CompletionResult, ExtractionResult
from .prompt_builder import build_enhanced_prompt
from .result_merger import merge_fields
from .result_validator import ResultValidator
from ..classifiers.document_classifier import DocumentClassifier
from ..extractors.pattern_matcher import PatternMatcher
from ..registry.models import FieldDefinition, TypeRegistry
from ..constants import SentinelType, MIN_CLASSIFICATION_CONFIDENCE
from ..utils.logging import log_performance


logger = logging.getLogger(__name__)

CompletionCallable = Callable[[str], Union[Any, Awaitable[Any]]]


@dataclass(frozen=True)
class PreparedPrompt:
    """Output of the pure steps (1-3)."""
    classification: ClassificationResult
    field_definitions: Tuple[FieldDefinition, ...]
    candidates: Dict[str, List[Candidate]]
    prompt: str

    @property
    def expected_fields(self) -> Tuple[str, ...]:
        return tuple(d.key for d in self.field_definitions)


async def call_completion(call_external_completion: CompletionCallable, prompt: str) -> CompletionResult:
    """Invoke a sync or async completion callable and normalize its answer."""
    raw = call_external_completion(prompt)
    if inspect.isawaitable(raw):
        raw = await raw
    return CompletionResult.from_raw(raw)


class ExtractionOrchestrator:
    """
    Sequences classifier, matcher, prompt builder, completion and merge.

    The registry is injected and never modified; pass None when it failed
    to load to run in pass-through mode.
    """

    def __init__(
        self,
        registry: Optional[TypeRegistry],
        matcher: Optional[PatternMatcher] = None,
        validator: Optional[ResultValidator] = None
    ):
        self.registry = registry
        self.classifier = DocumentClassifier(registry) if registry is not None else None
        self.matcher = matcher or PatternMatcher()
        self.validator = validator or ResultValidator()
        self.logger = logging.getLogger(f"{__name__}.ExtractionOrchestrator")

    def prepare(self, text: str, filename: str, base_prompt: str) -> PreparedPrompt:
        """Steps 1-3: classification, candidates and prompt. No I/O."""
        if self.registry is None:
            self.logger.warning(
                "Registry unavailable, passing base prompt through",
                extra={"document": filename}
            )
            return PreparedPrompt(
                classification=ClassificationResult(
                    type=SentinelType.UNAVAILABLE.value,
                    confidence=0.0
                ),
                field_definitions=(),
                candidates={},
                prompt=base_prompt,
            )

        classification = self.classifier.classify(text, filename)
        definitions = self.registry.fields_for(classification.type)

        candidates: Dict[str, List[Candidate]] = {}
        if classification.confidence >= MIN_CLASSIFICATION_CONFIDENCE and definitions:
            candidates = self.matcher.extract_candidates(text, definitions)
            self.logger.info(
                f"Extracted candidates for {len(candidates)}/{len(definitions)} "
                f"{classification.type} fields",
                extra={"document": filename, "document_type": classification.type}
            )
        elif classification.confidence >= MIN_CLASSIFICATION_CONFIDENCE:
            self.logger.info(f"No field definitions for {classification.type}, skipping pattern matching")

        prompt = build_enhanced_prompt(
            classification,
            candidates,
            base_prompt,
            expected_fields=tuple(d.key for d in definitions),
        )

        return PreparedPrompt(
            classification=classification,
            field_definitions=definitions,
            candidates=candidates,
            prompt=prompt,
        )

    @log_performance(logger, "Structured extraction")
    async def run(
        self,
        text: str,
        filename: str,
        base_prompt: str,
        call_external_completion: CompletionCallable
    ) -> ExtractionResult:
        """
        Run the full pipeline for one document.

        Args:
            text: Document text from the OCR / text extraction step
            filename: Original filename
            base_prompt: Core extraction instructions
            call_external_completion: callable(prompt) returning the model's
                fields (dict, JSON text or CompletionResult); may be async

        Returns:
            ExtractionResult

        Raises:
            Whatever call_external_completion raises, unchanged.
        """
        prepared = self.prepare(text, filename, base_prompt)

        completion = await call_completion(call_external_completion, prepared.prompt)

        merged = merge_fields(completion, prepared.candidates, prepared.expected_fields)
        warnings = self.validator.validate(
            merged.values,
            prepared.field_definitions,
            prepared.classification.type,
        )

        self.logger.info(
            f"Extraction complete: {prepared.classification.type}, "
            f"{len(merged.values)} fields "
            f"({sum(1 for p in merged.provenance.values() if p == 'pattern')} from patterns)",
            extra={"document": filename, "document_type": prepared.classification.type}
        )

        return ExtractionResult(
            document_type=prepared.classification.type,
            confidence=prepared.classification.confidence,
            candidate_summary=prepared.candidates,
            merged_fields=merged.values,
            provenance=merged.provenance,
            field_confidence=merged.field_confidence,
            warnings=warnings,
        )
