# ============================================================================
# src/contract_extraction/registry/loader.py
# ============================================================================
"""
Registry Loader

Reads the declarative registry file (YAML or JSON) once at startup and
turns it into an immutable TypeRegistry.

Document layout:

    execution_markers: [...]     # default for profiles without their own
    negative_cues: [...]         # appended to every profile's negatives
    document_types:              # list order = registration order
      - name: Lease_Supplement
        positive_cues: [...]
        negative_cues: [...]
        filename_hints: [...]    # default: positive cues, lower-cased, no spaces
        execution_markers: [...]
    fields:
      - key: rated_capacity_kw
        applicable_types: [...]
        patterns:
          - "Capacity \\(kW\\):\\s*(?P<value>[\\d,.]+)"
          - {pattern: "...", ignore_case: true}

Patterns are kept as strings. They are compiled by the PatternMatcher, so a
broken pattern only costs its own field at match time.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .models import DocumentTypeProfile, FieldDefinition, RegexPatternSpec, TypeRegistry
from ..constants import DEFAULT_EXECUTION_MARKERS
from ..utils.exceptions import RegistryUnavailableError, RegistryValidationError


logger = logging.getLogger(__name__)


# =============================================================================
# File schema
# =============================================================================

class PatternEntry(BaseModel):
    pattern: str
    ignore_case: bool = False


class DocumentTypeEntry(BaseModel):
    name: str = Field(min_length=1)
    positive_cues: List[str] = Field(default_factory=list)
    negative_cues: List[str] = Field(default_factory=list)
    filename_hints: Optional[List[str]] = None
    execution_markers: Optional[List[str]] = None


class FieldEntry(BaseModel):
    key: str = Field(min_length=1)
    applicable_types: List[str] = Field(default_factory=list)
    patterns: List[Union[str, PatternEntry]] = Field(default_factory=list)
    required: bool = False
    required_units: List[str] = Field(default_factory=list)

    @field_validator("patterns")
    @classmethod
    def _no_blank_patterns(cls, patterns):
        for p in patterns:
            text = p if isinstance(p, str) else p.pattern
            if not text.strip():
                raise ValueError("pattern must not be blank")
        return patterns


class RegistryDocument(BaseModel):
    execution_markers: Optional[List[str]] = None
    negative_cues: List[str] = Field(default_factory=list)
    document_types: List[DocumentTypeEntry] = Field(default_factory=list)
    fields: List[FieldEntry] = Field(default_factory=list)


# =============================================================================
# Loading
# =============================================================================

def load_registry(path: Union[str, Path]) -> TypeRegistry:
    """
    Load a registry file.

    Raises:
        RegistryUnavailableError: file missing, unreadable or not YAML/JSON
        RegistryValidationError: content does not match the registry schema
    """
    path = Path(path)
    if not path.exists():
        raise RegistryUnavailableError(f"Registry file not found: {path}")

    try:
        raw_text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise RegistryUnavailableError(f"Could not read registry {path}: {e}") from e

    try:
        if path.suffix.lower() == ".json":
            data = json.loads(raw_text)
        else:
            data = yaml.safe_load(raw_text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise RegistryUnavailableError(f"Could not parse registry {path}: {e}") from e

    registry = registry_from_dict(data or {})
    logger.info(
        f"Loaded registry from {path}: {len(registry.profiles)} document types, "
        f"{len(registry.fields)} fields"
    )
    return registry


def registry_from_dict(data: Dict[str, Any]) -> TypeRegistry:
    """Build a TypeRegistry from an already-parsed registry document."""
    if not isinstance(data, dict):
        raise RegistryValidationError(
            f"Registry document must be a mapping, got {type(data).__name__}"
        )

    try:
        document = RegistryDocument.model_validate(data)
    except ValidationError as e:
        raise RegistryValidationError(f"Invalid registry document: {e}") from e

    default_markers = (
        tuple(document.execution_markers)
        if document.execution_markers is not None
        else DEFAULT_EXECUTION_MARKERS
    )

    profiles = [
        _build_profile(entry, default_markers, document.negative_cues)
        for entry in document.document_types
    ]
    fields = [_build_field(entry) for entry in document.fields]

    return TypeRegistry(profiles=tuple(profiles), fields=tuple(fields))


def _build_profile(
    entry: DocumentTypeEntry,
    default_markers: tuple,
    shared_negative_cues: List[str]
) -> DocumentTypeProfile:
    negatives = list(entry.negative_cues)
    for cue in shared_negative_cues:
        if cue not in negatives:
            negatives.append(cue)

    if entry.filename_hints is not None:
        filename_hints = entry.filename_hints
    else:
        # "Lease Supplement" -> "leasesupplement"
        filename_hints = [
            "".join(cue.lower().split())
            for cue in entry.positive_cues
            if cue.strip()
        ]

    markers = entry.execution_markers if entry.execution_markers is not None else default_markers

    return DocumentTypeProfile(
        name=entry.name,
        positive_cues=tuple(entry.positive_cues),
        negative_cues=tuple(negatives),
        filename_hints=tuple(filename_hints),
        execution_markers=tuple(markers),
    )


def _build_field(entry: FieldEntry) -> FieldDefinition:
    patterns = tuple(
        RegexPatternSpec(pattern=p) if isinstance(p, str)
        else RegexPatternSpec(pattern=p.pattern, ignore_case=p.ignore_case)
        for p in entry.patterns
    )
    return FieldDefinition(
        key=entry.key,
        applicable_types=tuple(entry.applicable_types),
        patterns=patterns,
        required=entry.required,
        required_units=tuple(entry.required_units),
    )
