# ============================================================================
# FILE: tests/unit/test_orchestrator.py
# ============================================================================
"""
Unit tests for the extraction orchestrator
"""

import json

import pytest

from src.contract_extraction.core.orchestrator import ExtractionOrchestrator
from src.contract_extraction.core.prompt_builder import CANDIDATES_HEADER, DOCUMENT_TYPE_HEADER
from src.contract_extraction.core.context import CompletionResult
from src.contract_extraction.registry.models import (
    DocumentTypeProfile,
    FieldDefinition,
    RegexPatternSpec,
    TypeRegistry,
)


class RecordingCompletion:
    """Sync completion stub that remembers the prompts it was given"""

    def __init__(self, response):
        self.response = response
        self.prompts = []

    def __call__(self, prompt):
        self.prompts.append(prompt)
        return self.response


class AsyncRecordingCompletion(RecordingCompletion):
    async def __call__(self, prompt):
        self.prompts.append(prompt)
        return self.response


class CompletionServiceDown(Exception):
    pass


@pytest.mark.asyncio
async def test_reliable_document(sample_registry, lease_supplement_text, base_prompt):
    """Classified lease supplement: hints in prompt, candidates fill gaps"""
    completion = RecordingCompletion({"customer_name": "Acme Data Centers, LLC"})
    orchestrator = ExtractionOrchestrator(sample_registry)

    result = await orchestrator.run(lease_supplement_text, "lease.pdf", base_prompt, completion)

    assert result.document_type == "Lease_Supplement"
    assert result.confidence == pytest.approx(20 / 30)
    assert result.merged_fields == {
        "rated_capacity_kw": "54,600",
        "customer_name": "Acme Data Centers, LLC",
        "term_years": "15 years",
    }
    assert result.provenance == {
        "rated_capacity_kw": "pattern",
        "customer_name": "llm",
        "term_years": "pattern",
    }
    assert [c.value for c in result.candidate_summary["rated_capacity_kw"]] == ["54,600"]
    assert result.warnings == []

    prompt = completion.prompts[0]
    assert "**DOC_TYPE**: Lease_Supplement" in prompt
    assert CANDIDATES_HEADER in prompt
    assert prompt.endswith(base_prompt)


@pytest.mark.asyncio
async def test_low_confidence_document(sample_registry, draft_lease_supplement_text, base_prompt):
    """Draft marker -> GENERIC, no candidates, base prompt untouched"""
    completion = RecordingCompletion({"customer_name": "Acme"})
    orchestrator = ExtractionOrchestrator(sample_registry)

    result = await orchestrator.run(draft_lease_supplement_text, "lease.pdf", base_prompt, completion)

    assert result.document_type == "GENERIC"
    assert result.confidence == pytest.approx(5 / 30)
    assert result.candidate_summary == {}
    assert result.merged_fields == {"customer_name": "Acme"}
    assert result.provenance == {"customer_name": "llm"}
    assert completion.prompts == [base_prompt]


@pytest.mark.asyncio
async def test_registry_unavailable(lease_supplement_text, base_prompt):
    completion = RecordingCompletion({"customer_name": "Acme"})
    orchestrator = ExtractionOrchestrator(None)

    result = await orchestrator.run(lease_supplement_text, "lease.pdf", base_prompt, completion)

    assert result.document_type == "UNAVAILABLE"
    assert result.confidence == 0.0
    assert result.candidate_summary == {}
    assert completion.prompts == [base_prompt]


@pytest.mark.asyncio
async def test_type_without_fields(sample_registry, base_prompt):
    """Reliable type with no field definitions: type block only"""
    text = "SITE LICENSE AGREEMENT. License Fee: $1,000 per month."
    completion = RecordingCompletion({})
    orchestrator = ExtractionOrchestrator(sample_registry)

    result = await orchestrator.run(text, "site.pdf", base_prompt, completion)

    assert result.document_type == "Site_License_Agreement"
    assert result.candidate_summary == {}
    assert DOCUMENT_TYPE_HEADER in completion.prompts[0]
    assert CANDIDATES_HEADER not in completion.prompts[0]


@pytest.mark.asyncio
async def test_broken_field_pattern_does_not_stop_pipeline(base_prompt):
    registry = TypeRegistry(
        profiles=(DocumentTypeProfile("Lease_Supplement", positive_cues=("Lease Supplement", "Customer")),),
        fields=(
            FieldDefinition("broken", ("Lease_Supplement",), (RegexPatternSpec("(?P<value>["),)),
            FieldDefinition("term_years", ("Lease_Supplement",), (RegexPatternSpec(r"Term: (?P<value>\d+ years)"),)),
        ),
    )
    completion = RecordingCompletion({})

    result = await ExtractionOrchestrator(registry).run(
        "Lease Supplement for Customer. Term: 10 years", "", base_prompt, completion
    )

    assert list(result.candidate_summary) == ["term_years"]
    assert result.provenance == {"broken": "none", "term_years": "pattern"}


@pytest.mark.asyncio
async def test_async_completion_and_json_text(sample_registry, lease_supplement_text, base_prompt):
    """Async callables and raw JSON text answers are both accepted"""
    answer = '{"fields": {"term_years": "20 years"}, "confidencePerField": {"term_years": 0.95}}'
    completion = AsyncRecordingCompletion(answer)

    result = await ExtractionOrchestrator(sample_registry).run(
        lease_supplement_text, "lease.pdf", base_prompt, completion
    )

    assert result.merged_fields["term_years"] == "20 years"
    assert result.provenance["term_years"] == "llm"
    assert result.field_confidence == {"term_years": 0.95}


@pytest.mark.asyncio
async def test_completion_result_passthrough(sample_registry, lease_supplement_text, base_prompt):
    completion = RecordingCompletion(CompletionResult(fields={"rated_capacity_kw": "54600"}))

    result = await ExtractionOrchestrator(sample_registry).run(
        lease_supplement_text, "lease.pdf", base_prompt, completion
    )

    assert result.merged_fields["rated_capacity_kw"] == "54600"
    assert result.provenance["rated_capacity_kw"] == "llm"


@pytest.mark.asyncio
async def test_validation_warnings_attached(sample_registry, base_prompt):
    text = "Lease Supplement under the Customer Agreement. Term: 15"
    completion = RecordingCompletion({"term_years": "15"})

    result = await ExtractionOrchestrator(sample_registry).run(text, "", base_prompt, completion)

    assert "Missing required field: rated_capacity_kw (Lease_Supplement)" in result.warnings
    assert "Missing required field: customer_name (Lease_Supplement)" in result.warnings
    assert "Field term_years should include one of: year, years" in result.warnings


@pytest.mark.asyncio
async def test_completion_error_propagates(sample_registry, lease_supplement_text, base_prompt):
    """Failures of the external call are re-raised unchanged"""

    async def failing_completion(prompt):
        raise CompletionServiceDown("503 from completion service")

    with pytest.raises(CompletionServiceDown, match="503"):
        await ExtractionOrchestrator(sample_registry).run(
            lease_supplement_text, "lease.pdf", base_prompt, failing_completion
        )


@pytest.mark.asyncio
async def test_runs_are_deterministic(sample_registry, lease_supplement_text, base_prompt):
    orchestrator = ExtractionOrchestrator(sample_registry)

    first = await orchestrator.run(
        lease_supplement_text, "lease.pdf", base_prompt, RecordingCompletion({"customer_name": "Acme"})
    )
    second = await orchestrator.run(
        lease_supplement_text, "lease.pdf", base_prompt, RecordingCompletion({"customer_name": "Acme"})
    )

    assert first.to_json() == second.to_json()
    assert json.loads(first.to_json())["documentType"] == "Lease_Supplement"


def test_prepare_is_pure(sample_registry, lease_supplement_text, base_prompt):
    orchestrator = ExtractionOrchestrator(sample_registry)

    first = orchestrator.prepare(lease_supplement_text, "lease.pdf", base_prompt)
    second = orchestrator.prepare(lease_supplement_text, "lease.pdf", base_prompt)

    assert first.prompt == second.prompt
    assert first.expected_fields == ("rated_capacity_kw", "customer_name", "term_years")
