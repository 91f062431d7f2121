# ============================================================================
# src/contract_extraction/utils/__init__.py
# ============================================================================
"""
Utility modules for the contract extraction pipeline.
"""

from .exceptions import (
    ContractExtractionError,
    RegistryError,
    RegistryUnavailableError,
    RegistryValidationError,
    FieldPatternError,
)

from .logging import (
    setup_logging,
    ContextFilter,
    JsonFormatter,
    log_performance,
)

__all__ = [
    # Exceptions
    'ContractExtractionError',
    'RegistryError',
    'RegistryUnavailableError',
    'RegistryValidationError',
    'FieldPatternError',
    # Logging
    'setup_logging',
    'ContextFilter',
    'JsonFormatter',
    'log_performance',
]
