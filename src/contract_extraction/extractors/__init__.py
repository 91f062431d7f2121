# ============================================================================
# src/contract_extraction/extractors/__init__.py
# ============================================================================

from .pattern_matcher import PatternMatcher, extract_candidates, normalize_value

__all__ = ["PatternMatcher", "extract_candidates", "normalize_value"]
