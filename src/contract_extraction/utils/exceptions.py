# ============================================================================
# src/contract_extraction/utils/exceptions.py
# ============================================================================
"""
Custom exceptions for the contract extraction pipeline.

Only failures of the external completion call leave the pipeline; those are
re-raised untouched and are not part of this hierarchy.
"""


class ContractExtractionError(Exception):
    """Base exception for all contract extraction errors."""
    pass


class RegistryError(ContractExtractionError):
    """Error with the document type / field registry."""
    pass


class RegistryUnavailableError(RegistryError):
    """Registry could not be loaded (missing, unreadable or unparsable file)."""
    pass


class RegistryValidationError(RegistryError):
    """Registry document does not match the expected schema."""
    pass


class FieldPatternError(ContractExtractionError):
    """A field's regex pattern failed to compile, match or finish in time."""
    def __init__(self, message: str, field_key: str, pattern: str = ""):
        super().__init__(message)
        self.field_key = field_key
        self.pattern = pattern
