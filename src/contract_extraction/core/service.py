# ============================================================================
# src/contract_extraction/core/service.py
# ============================================================================
"""
Contract Extraction Service

Process-level entry point. Loads the registry once, reads the feature flag
once, and routes each document either through the hint pipeline or straight
to the completion service.
"""

from typing import Optional
import logging

from .context.extraction_result import ExtractionResult
from .orchestrator import CompletionCallable, ExtractionOrchestrator, call_completion
from .result_merger import merge_fields
from ..extractors.pattern_matcher import PatternMatcher
from ..registry.loader import load_registry
from ..registry.models import TypeRegistry
from ..config import PipelineSettings, pipeline_settings
from ..constants import SentinelType
from ..utils.exceptions import RegistryError


logger = logging.getLogger(__name__)


class ContractExtractionService:
    """
    Wraps ExtractionOrchestrator with startup concerns.

    Usage:
        service = ContractExtractionService.from_settings()
        result = await service.extract(text, filename, base_prompt, ai_call)
    """

    def __init__(
        self,
        registry: Optional[TypeRegistry],
        settings: Optional[PipelineSettings] = None
    ):
        self.settings = settings or pipeline_settings
        self.enabled = self.settings.CONTRACT_HINTS_ENABLED
        self.registry = registry
        self.orchestrator = ExtractionOrchestrator(
            registry,
            matcher=PatternMatcher(timeout_seconds=self.settings.PATTERN_TIMEOUT_SECONDS),
        )

    @classmethod
    def from_settings(cls, settings: Optional[PipelineSettings] = None) -> "ContractExtractionService":
        """Load the registry from REGISTRY_PATH; a failed load gives pass-through mode."""
        settings = settings or pipeline_settings
        registry = None

        if settings.CONTRACT_HINTS_ENABLED:
            try:
                registry = load_registry(settings.registry_file)
            except RegistryError as e:
                logger.error(f"Registry unavailable, structured hints disabled: {e}")
        else:
            logger.info("Contract hint pipeline disabled by feature flag")

        return cls(registry, settings=settings)

    def is_available(self) -> bool:
        return self.enabled and self.registry is not None

    async def extract(
        self,
        text: str,
        filename: str,
        base_prompt: str,
        call_external_completion: CompletionCallable
    ) -> ExtractionResult:
        if self.enabled:
            return await self.orchestrator.run(text, filename, base_prompt, call_external_completion)

        # Feature flag off: the core is bypassed, the model sees the base prompt only
        completion = await call_completion(call_external_completion, base_prompt)
        merged = merge_fields(completion, {})
        return ExtractionResult(
            document_type=SentinelType.DISABLED.value,
            confidence=0.0,
            candidate_summary={},
            merged_fields=merged.values,
            provenance=merged.provenance,
            field_confidence=merged.field_confidence,
        )
