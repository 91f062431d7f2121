# ============================================================================
# FILE: tests/unit/test_context.py
# ============================================================================
"""
Unit tests for pipeline result records
"""

import json

import pytest

from src.contract_extraction.core.context import (
    Candidate,
    CompletionResult,
    ExtractionResult,
)


def test_completion_from_dict_with_fields():
    result = CompletionResult.from_raw({
        "fields": {"customer_name": "Acme"},
        "confidencePerField": {"customer_name": 0.8},
    })

    assert result.fields == {"customer_name": "Acme"}
    assert result.confidence_per_field == {"customer_name": 0.8}


def test_completion_from_flat_dict():
    result = CompletionResult.from_raw({"customer_name": "Acme", "term_years": "15 years"})

    assert result.fields["term_years"] == "15 years"
    assert result.confidence_per_field == {}


def test_completion_snake_case_confidences_are_clamped():
    result = CompletionResult.from_raw({
        "fields": {"a": "1", "b": "2", "c": "3"},
        "confidence_per_field": {"a": 1.7, "b": -0.2, "c": "high"},
    })

    assert result.confidence_per_field == {"a": 1.0, "b": 0.0}


def test_completion_from_json_text():
    text = '```json\n{"fields": {"customer_name": "Acme"}}\n```'

    assert CompletionResult.from_raw(text).fields == {"customer_name": "Acme"}


def test_completion_from_malformed_json_text():
    """Trailing commas and missing braces are repaired"""
    text = '{"customer_name": "Acme", "term_years": "15 years",'

    result = CompletionResult.from_raw(text)

    assert result.fields["customer_name"] == "Acme"
    assert result.fields["term_years"] == "15 years"


@pytest.mark.parametrize("raw", [None, 42, ["a", "b"], "not json at all"])
def test_completion_non_mapping_is_empty(raw):
    result = CompletionResult.from_raw(raw)

    assert result.fields == {}


def test_completion_passthrough():
    original = CompletionResult(fields={"a": 1})

    assert CompletionResult.from_raw(original) is original


def test_extraction_result_to_dict():
    result = ExtractionResult(
        document_type="Lease_Supplement",
        confidence=0.67,
        candidate_summary={"term_years": [Candidate("term_years", "15 years", "Term: 15 years", 42)]},
        merged_fields={"term_years": "15 years"},
        provenance={"term_years": "pattern"},
    )

    data = result.to_dict()

    assert data["documentType"] == "Lease_Supplement"
    assert data["candidateSummary"]["term_years"] == [
        {"field": "term_years", "value": "15 years", "context": "Term: 15 years"}
    ]
    assert data["fieldConfidence"] == {}
    assert data["warnings"] == []
    assert json.loads(result.to_json()) == data
