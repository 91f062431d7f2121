# ============================================================================
# src/contract_extraction/extractors/pattern_matcher.py
# ============================================================================
"""
Pattern Matcher

Runs the registry's regex patterns over the full document text to find
candidate field values. Candidates are hints for the LLM prompt, never final
values.

Per field:
1. Run every pattern, in declared order, over the entire text
2. value = the `value` group (first capture group if there is none), stripped
3. context = 50 chars either side of the match, clipped at the text edges
4. Order by position, dedupe on lower-cased / whitespace-collapsed value
   (first occurrence wins), keep the first 5

Patterns come from an editable registry and run against arbitrary text, so
each field gets a time budget. A pattern that fails to compile, errors or
runs out of time empties its own field only; other fields carry on.
"""

from functools import lru_cache
from typing import Dict, Iterable, List, Optional
import logging
import time

import regex

from ..core.context.candidate import Candidate
from ..registry.models import FieldDefinition, RegexPatternSpec
from ..config import pipeline_settings
from ..constants import CONTEXT_WINDOW_CHARS, MAX_CANDIDATES_PER_FIELD
from ..utils.exceptions import FieldPatternError


logger = logging.getLogger(__name__)


@lru_cache(maxsize=1024)
def _compile(pattern: str, ignore_case: bool):
    flags = regex.IGNORECASE if ignore_case else 0
    return regex.compile(pattern, flags)


def normalize_value(value: str) -> str:
    """Dedup key: lower-cased with whitespace runs collapsed."""
    return " ".join(value.lower().split())


class PatternMatcher:
    """
    Extracts candidate values for field definitions.

    Holds no per-document state; safe to share across concurrent runs.
    """

    def __init__(self, timeout_seconds: Optional[float] = None):
        if timeout_seconds is None:
            timeout_seconds = pipeline_settings.PATTERN_TIMEOUT_SECONDS
        self.timeout_seconds = timeout_seconds
        self.logger = logging.getLogger(f"{__name__}.PatternMatcher")

    def extract_candidates(
        self,
        text: str,
        field_definitions: Iterable[FieldDefinition]
    ) -> Dict[str, List[Candidate]]:
        """
        Extract candidate values for each field.

        Args:
            text: Full document text
            field_definitions: Definitions for the classified document type

        Returns:
            {field_key: [Candidate, ...]} in definition order. Fields without
            candidates (or whose patterns failed) are left out.
        """
        candidates: Dict[str, List[Candidate]] = {}
        text = text or ""

        for definition in field_definitions or ():
            try:
                field_candidates = self._extract_field_candidates(text, definition)
            except FieldPatternError as e:
                self.logger.warning(
                    f"Skipping field '{e.field_key}': {e}",
                    extra={"field": e.field_key}
                )
                continue

            if field_candidates:
                candidates[definition.key] = field_candidates

        self.logger.debug(f"Extracted candidates for {len(candidates)} fields")
        return candidates

    def _extract_field_candidates(self, text: str, definition: FieldDefinition) -> List[Candidate]:
        deadline = time.monotonic() + self.timeout_seconds
        raw: List[Candidate] = []

        for spec in definition.patterns:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise FieldPatternError(
                    f"time budget of {self.timeout_seconds}s exhausted",
                    field_key=definition.key,
                    pattern=spec.pattern
                )
            raw.extend(self._run_pattern(text, definition.key, spec, remaining))

        # Position first, then pattern order (sort is stable)
        raw.sort(key=lambda c: c.position)
        return self._deduplicate_candidates(raw)[:MAX_CANDIDATES_PER_FIELD]

    def _run_pattern(
        self,
        text: str,
        field_key: str,
        spec: RegexPatternSpec,
        timeout: float
    ) -> List[Candidate]:
        try:
            compiled = _compile(spec.pattern, spec.ignore_case)
        except regex.error as e:
            raise FieldPatternError(
                f"invalid pattern {spec.pattern!r}: {e}",
                field_key=field_key,
                pattern=spec.pattern
            ) from e

        if "value" in compiled.groupindex:
            group = "value"
        elif compiled.groups >= 1:
            group = 1
        else:
            raise FieldPatternError(
                f"pattern {spec.pattern!r} has no capture group",
                field_key=field_key,
                pattern=spec.pattern
            )

        found = []
        try:
            for match in compiled.finditer(text, timeout=timeout):
                value = match.group(group)
                if value is None or not value.strip():
                    continue

                start, end = match.span()
                context = text[
                    max(0, start - CONTEXT_WINDOW_CHARS):min(len(text), end + CONTEXT_WINDOW_CHARS)
                ].strip()

                found.append(Candidate(
                    field=field_key,
                    value=value.strip(),
                    context=context,
                    position=start,
                ))
        except TimeoutError as e:
            raise FieldPatternError(
                f"pattern {spec.pattern!r} timed out",
                field_key=field_key,
                pattern=spec.pattern
            ) from e
        except Exception as e:
            raise FieldPatternError(
                f"pattern {spec.pattern!r} failed: {e}",
                field_key=field_key,
                pattern=spec.pattern
            ) from e

        return found

    @staticmethod
    def _deduplicate_candidates(candidates: List[Candidate]) -> List[Candidate]:
        unique = []
        seen = set()
        for candidate in candidates:
            key = normalize_value(candidate.value)
            if key not in seen:
                seen.add(key)
                unique.append(candidate)
        return unique

    @staticmethod
    def build_context_snippets(
        candidates: Dict[str, List[Candidate]],
        max_snippets: int = 20
    ) -> List[Dict[str, str]]:
        """
        Flatten candidates into prompt snippets, field by field, capped at
        max_snippets in total.
        """
        snippets = []
        for field_key, field_candidates in candidates.items():
            for candidate in field_candidates:
                if len(snippets) >= max_snippets:
                    return snippets
                snippets.append({
                    "field": field_key,
                    "value": candidate.value,
                    "context": candidate.context,
                })
        return snippets


def extract_candidates(
    text: str,
    field_definitions: Iterable[FieldDefinition],
    timeout_seconds: Optional[float] = None
) -> Dict[str, List[Candidate]]:
    """Functional entry point around PatternMatcher."""
    return PatternMatcher(timeout_seconds=timeout_seconds).extract_candidates(text, field_definitions)
