# ============================================================================
# FILE: tests/conftest.py
# ============================================================================
"""
Pytest configuration and shared fixtures for testing.
"""

import pytest
from pathlib import Path

from src.contract_extraction.registry.models import (
    DocumentTypeProfile,
    FieldDefinition,
    RegexPatternSpec,
    TypeRegistry,
)


PROJECT_ROOT = Path(__file__).parent.parent

CAPACITY_PATTERN = r"Capacity\s*\(kW\)\s*:\s*(?P<value>\d{1,3}(?:,\d{3})*(?:\.\d+)?)"


@pytest.fixture
def sample_registry():
    """Small registry: three contract types, four fields"""
    profiles = (
        DocumentTypeProfile(
            name="Lease_Supplement",
            positive_cues=("Lease Supplement", "Customer Agreement"),
            negative_cues=("Draft",),
            filename_hints=("leasesupplement",),
            execution_markers=("duly executed",),
        ),
        DocumentTypeProfile(
            name="Power_Purchase_Agreement",
            positive_cues=("Power Purchase Agreement", "Contract Rate"),
            negative_cues=("Draft",),
            filename_hints=("ppa",),
            execution_markers=("duly executed",),
        ),
        DocumentTypeProfile(
            name="Site_License_Agreement",
            positive_cues=("Site License Agreement", "License Fee"),
        ),
    )
    fields = (
        FieldDefinition(
            key="rated_capacity_kw",
            applicable_types=("Lease_Supplement", "Power_Purchase_Agreement"),
            patterns=(RegexPatternSpec(CAPACITY_PATTERN),),
            required=True,
        ),
        FieldDefinition(
            key="customer_name",
            applicable_types=("Lease_Supplement",),
            patterns=(RegexPatternSpec(r"Customer\s*:\s*(?P<value>[A-Z][\w&.\- ]+?)\s*\n"),),
            required=True,
        ),
        FieldDefinition(
            key="term_years",
            applicable_types=("Lease_Supplement",),
            patterns=(RegexPatternSpec(r"term\s*:\s*(?P<value>\d{1,2}\s*years?)", ignore_case=True),),
            required_units=("year", "years"),
        ),
        FieldDefinition(
            key="contract_rate_per_kwh",
            applicable_types=("Power_Purchase_Agreement",),
            patterns=(RegexPatternSpec(r"Contract\s+Rate\s*:\s*(?P<value>\$\d+\.\d+/kWh)"),),
        ),
    )
    return TypeRegistry(profiles=profiles, fields=fields)


@pytest.fixture
def lease_supplement_text():
    """Lease supplement that classifies cleanly (score 20)"""
    return (
        "LEASE SUPPLEMENT NO. 7\n"
        "This Lease Supplement is issued under the Customer Agreement between the parties.\n"
        "Customer: Acme Data Centers LLC\n"
        "Rated Capacity (kW): 54,600\n"
        "Term: 15 years\n"
        "Equipment schedule attached. Rated Capacity (kW): 54,600 as confirmed above.\n"
    )


@pytest.fixture
def draft_lease_supplement_text(lease_supplement_text):
    """Same document marked as a draft (score 5)"""
    return "DRAFT\n" + lease_supplement_text


@pytest.fixture
def unrelated_text():
    """Text that matches no contract type"""
    return "Minutes of the quarterly facilities meeting. Parking lot resurfacing was approved."


@pytest.fixture
def base_prompt():
    return "Extract customer_name, rated_capacity_kw and term_years. Answer with JSON."


@pytest.fixture
def registry_file():
    """Sample registry shipped with the project"""
    return PROJECT_ROOT / "data" / "registry" / "contract_types.yaml"
