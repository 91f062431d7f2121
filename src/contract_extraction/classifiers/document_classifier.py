# ============================================================================
# src/contract_extraction/classifiers/document_classifier.py
# ============================================================================
"""
Document Type Classifier

Scores a contract's header text against every registered contract type and
picks the best one.

Scoring (per type, header = first 5000 chars, case-insensitive):

    +10  per distinct positive cue found in the header
    +5   once, if any filename hint appears in the filename
    +3   once, if any execution marker appears in the header
    -15  per distinct negative cue found in the header

confidence = min(1.0, max(0, score) / 30)

Decisions:
- Highest score wins; equal scores go to the type registered first
- Winning confidence below 0.3 -> GENERIC (unreliable, no hints downstream)
- Empty text, empty registry -> GENERIC with confidence 0

Pure function of (text, filename, registry). Never raises.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple
import logging

from ..core.context.classification import AlternativeType, ClassificationResult
from ..registry.models import DocumentTypeProfile, TypeRegistry
from ..constants import (
    SentinelType,
    HEADER_WINDOW_CHARS,
    POSITIVE_CUE_WEIGHT,
    FILENAME_HINT_BONUS,
    EXECUTION_MARKER_BONUS,
    NEGATIVE_CUE_PENALTY,
    CONFIDENCE_DIVISOR,
    MIN_CLASSIFICATION_CONFIDENCE,
)


@dataclass(frozen=True)
class ProfileScore:
    """Score breakdown for one document type."""
    type: str
    score: int
    matched_cues: Tuple[str, ...]
    penalized_by: Tuple[str, ...]
    filename_match: bool
    execution_marker: bool


def score_to_confidence(score: int) -> float:
    return min(1.0, max(0.0, float(score)) / CONFIDENCE_DIVISOR)


class DocumentClassifier:
    """
    Classifies contract documents into registry types.

    The registry is injected and only read; one classifier instance can be
    shared by concurrent callers.
    """

    def __init__(self, registry: TypeRegistry):
        self.registry = registry
        self.logger = logging.getLogger(f"{__name__}.DocumentClassifier")

    def classify(self, text: str, filename: str = "") -> ClassificationResult:
        """
        Classify a document.

        Args:
            text: Full document text (only the header window is examined)
            filename: Original filename, used for filename hints

        Returns:
            ClassificationResult; type is GENERIC when nothing scores well enough
        """
        scores = self.score_all(text, filename)
        if not scores:
            self.logger.info("Registry has no document types, using GENERIC")
            return self._generic_classification(())

        best = self._select_best(scores)
        confidence = score_to_confidence(best.score)

        if confidence < MIN_CLASSIFICATION_CONFIDENCE:
            self.logger.info(
                f"No reliable document type (best: {best.type}, score={best.score}, "
                f"confidence={confidence:.2f}), using GENERIC"
            )
            ranked = self._rank(scores)
            return self._generic_classification(
                tuple(AlternativeType(type=s.type, score=s.score) for s in ranked),
                confidence=confidence,
            )

        alternatives = tuple(
            AlternativeType(type=s.type, score=s.score)
            for s in self._rank(scores)
            if s.type != best.type
        )

        self.logger.info(f"Classified as: {best.type} (confidence: {confidence:.0%})")
        if best.matched_cues:
            self.logger.debug(f"Matched cues: {', '.join(best.matched_cues)}")
        if best.penalized_by:
            self.logger.debug(f"Penalized by: {', '.join(best.penalized_by)}")

        return ClassificationResult(
            type=best.type,
            confidence=confidence,
            detected_cues=best.matched_cues,
            alternative_types=alternatives,
        )

    def score_all(self, text: str, filename: str = "") -> List[ProfileScore]:
        """Score breakdown for every registered type, in registration order."""
        header = (text or "")[:HEADER_WINDOW_CHARS].lower()
        normalized_filename = (filename or "").lower()
        return [
            self._score_profile(profile, header, normalized_filename)
            for profile in self.registry.profiles
        ]

    def _score_profile(
        self,
        profile: DocumentTypeProfile,
        header: str,
        filename: str
    ) -> ProfileScore:
        matched = _distinct_matches(profile.positive_cues, header)
        penalized = _distinct_matches(profile.negative_cues, header)

        filename_match = bool(filename) and any(
            hint.strip() and hint.lower() in filename
            for hint in profile.filename_hints
        )
        execution_marker = any(
            marker.strip() and marker.lower() in header
            for marker in profile.execution_markers
        )

        score = (
            POSITIVE_CUE_WEIGHT * len(matched)
            + (FILENAME_HINT_BONUS if filename_match else 0)
            + (EXECUTION_MARKER_BONUS if execution_marker else 0)
            - NEGATIVE_CUE_PENALTY * len(penalized)
        )

        return ProfileScore(
            type=profile.name,
            score=score,
            matched_cues=matched,
            penalized_by=penalized,
            filename_match=filename_match,
            execution_marker=execution_marker,
        )

    @staticmethod
    def _select_best(scores: List[ProfileScore]) -> ProfileScore:
        # Strict ">" keeps the earliest registered type on ties
        best = scores[0]
        for candidate in scores[1:]:
            if candidate.score > best.score:
                best = candidate
        return best

    @staticmethod
    def _rank(scores: List[ProfileScore]) -> List[ProfileScore]:
        # sorted() is stable, so equal scores stay in registration order
        return sorted(scores, key=lambda s: s.score, reverse=True)

    @staticmethod
    def _generic_classification(
        alternatives: Tuple[AlternativeType, ...],
        confidence: float = 0.0
    ) -> ClassificationResult:
        return ClassificationResult(
            type=SentinelType.GENERIC.value,
            confidence=confidence,
            detected_cues=(),
            alternative_types=alternatives,
        )


def _distinct_matches(cues: Tuple[str, ...], header: str) -> Tuple[str, ...]:
    """Cues found in the header, each counted once (case-insensitive)."""
    seen = set()
    matched = []
    for cue in cues:
        key = cue.strip().lower()
        if not key or key in seen:
            continue
        seen.add(key)
        if key in header:
            matched.append(cue)
    return tuple(matched)


def classify(text: str, filename: str, registry: Optional[TypeRegistry]) -> ClassificationResult:
    """Functional entry point: classify against an explicit registry."""
    if registry is None:
        return ClassificationResult(type=SentinelType.UNAVAILABLE.value, confidence=0.0)
    return DocumentClassifier(registry).classify(text, filename)
