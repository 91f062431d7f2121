# ============================================================================
# src/contract_extraction/registry/__init__.py
# ============================================================================

from .models import DocumentTypeProfile, RegexPatternSpec, FieldDefinition, TypeRegistry
from .loader import load_registry, registry_from_dict
from .audit import AuditReport, RegistryAuditor

__all__ = [
    "AuditReport",
    "RegistryAuditor",
    "DocumentTypeProfile",
    "RegexPatternSpec",
    "FieldDefinition",
    "TypeRegistry",
    "load_registry",
    "registry_from_dict",
]
