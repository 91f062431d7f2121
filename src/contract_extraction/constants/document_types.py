# ============================================================================
# src/contract_extraction/constants/document_types.py
# ============================================================================
"""
Document Types and Provenance
- Sentinel document types produced when no registered type applies
- Where a merged field value came from
"""

from enum import Enum


class SentinelType(str, Enum):
    """
    Document types that are not registry profiles.
    Registered contract types are plain strings taken from the registry.
    """
    GENERIC = "GENERIC"           # classification below threshold
    UNAVAILABLE = "UNAVAILABLE"   # registry could not be loaded
    DISABLED = "DISABLED"         # pipeline switched off by feature flag


SENTINEL_TYPES = frozenset(t.value for t in SentinelType)


class Provenance(str, Enum):
    LLM = "llm"
    PATTERN = "pattern"
    NONE = "none"


def is_sentinel_type(document_type: str) -> bool:
    return document_type in SENTINEL_TYPES
