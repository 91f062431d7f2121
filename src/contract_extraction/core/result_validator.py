# ============================================================================
# src/contract_extraction/core/result_validator.py
# ============================================================================
"""
Result Validator

Quality gate over the merged fields:
1. Required fields present
2. Unit-bearing fields mention at least one accepted unit

Produces warnings only. A warning never blocks the result.
"""

from typing import Any, Dict, List, Sequence
import logging

from ..registry.models import FieldDefinition
from ..constants import is_sentinel_type


logger = logging.getLogger(__name__)


class ResultValidator:
    """Checks merged fields against the registry's field definitions."""

    def validate(
        self,
        merged_fields: Dict[str, Any],
        field_definitions: Sequence[FieldDefinition],
        document_type: str
    ) -> List[str]:
        """
        Args:
            merged_fields: {field: value} after merging
            field_definitions: Definitions for document_type
            document_type: Classified type (sentinel types are not validated)

        Returns:
            List of warning messages, in field definition order
        """
        if is_sentinel_type(document_type):
            return []

        warnings = []
        for definition in field_definitions:
            value = merged_fields.get(definition.key)

            if value is None:
                if definition.required:
                    warnings.append(f"Missing required field: {definition.key} ({document_type})")
                continue

            if definition.required_units:
                value_text = value if isinstance(value, str) else str(value)
                if not any(unit.lower() in value_text.lower() for unit in definition.required_units):
                    warnings.append(
                        f"Field {definition.key} should include one of: "
                        f"{', '.join(definition.required_units)}"
                    )

        if warnings:
            logger.info(f"Validation produced {len(warnings)} warnings for {document_type}")
        return warnings
