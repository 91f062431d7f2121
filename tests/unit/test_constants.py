# ============================================================================
# FILE: tests/unit/test_constants.py
# ============================================================================
"""
Unit tests for scoring constants and sentinel types
"""

from src.contract_extraction.constants import (
    CONFIDENCE_DIVISOR,
    MIN_CLASSIFICATION_CONFIDENCE,
    NEGATIVE_CUE_PENALTY,
    POSITIVE_CUE_WEIGHT,
    Provenance,
    SentinelType,
    is_sentinel_type,
)


def test_one_clean_cue_is_reliable():
    """A single positive cue (10/30) clears the 0.3 threshold"""
    assert POSITIVE_CUE_WEIGHT / CONFIDENCE_DIVISOR >= MIN_CLASSIFICATION_CONFIDENCE


def test_negative_cue_drops_two_cues_below_threshold():
    """Two positive cues and one negative cue (score 5) stay below the threshold"""
    score = 2 * POSITIVE_CUE_WEIGHT - NEGATIVE_CUE_PENALTY

    assert max(0, score) / CONFIDENCE_DIVISOR < MIN_CLASSIFICATION_CONFIDENCE


def test_sentinel_types():
    assert is_sentinel_type("GENERIC")
    assert is_sentinel_type(SentinelType.UNAVAILABLE.value)
    assert is_sentinel_type("DISABLED")
    assert not is_sentinel_type("Lease_Supplement")


def test_provenance_values():
    assert [p.value for p in Provenance] == ["llm", "pattern", "none"]
