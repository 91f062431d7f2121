# ============================================================================
# FILE: tests/unit/test_result_merger.py
# ============================================================================
"""
Unit tests for merging completion fields with pattern candidates
"""

from src.contract_extraction.core.result_merger import merge_fields
from src.contract_extraction.core.context.candidate import Candidate
from src.contract_extraction.core.context.extraction_result import CompletionResult


def test_completion_value_wins():
    completion = CompletionResult(fields={"rated_capacity_kw": "54600"})
    candidates = {"rated_capacity_kw": [Candidate("rated_capacity_kw", "54,600")]}

    merged = merge_fields(completion, candidates)

    assert merged.values["rated_capacity_kw"] == "54600"
    assert merged.provenance["rated_capacity_kw"] == "llm"


def test_candidate_fills_gap():
    completion = CompletionResult(fields={"customer_name": "Acme"})
    candidates = {
        "term_years": [Candidate("term_years", "15 years"), Candidate("term_years", "20 years")],
    }

    merged = merge_fields(completion, candidates)

    assert merged.values["term_years"] == "15 years"
    assert merged.provenance["term_years"] == "pattern"


def test_missing_field_has_provenance_none():
    completion = CompletionResult(fields={})

    merged = merge_fields(completion, {}, expected_fields=("effective_date",))

    assert "effective_date" not in merged.values
    assert merged.provenance["effective_date"] == "none"


def test_blank_and_null_completion_values_do_not_count():
    completion = CompletionResult(fields={"a": None, "b": "  ", "c": 0, "d": False})
    candidates = {"b": [Candidate("b", "from pattern")]}

    merged = merge_fields(completion, candidates)

    assert merged.provenance == {"b": "pattern", "a": "none", "c": "llm", "d": "llm"}
    assert merged.values == {"b": "from pattern", "c": 0, "d": False}


def test_field_order():
    """Expected fields first, then candidate fields, then other completion fields"""
    completion = CompletionResult(fields={"extra": "x", "term_years": "15 years"})
    candidates = {"customer_name": [Candidate("customer_name", "Acme")]}

    merged = merge_fields(completion, candidates, expected_fields=("term_years", "effective_date"))

    assert list(merged.provenance) == ["term_years", "effective_date", "customer_name", "extra"]


def test_field_confidence_only_for_llm_values():
    completion = CompletionResult(
        fields={"a": "1", "b": None},
        confidence_per_field={"a": 0.9, "b": 0.4},
    )
    candidates = {"b": [Candidate("b", "2")]}

    merged = merge_fields(completion, candidates)

    assert merged.field_confidence == {"a": 0.9}
