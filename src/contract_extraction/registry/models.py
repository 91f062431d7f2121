# ============================================================================
# src/contract_extraction/registry/models.py
# ============================================================================
"""
Registry data model
- One profile per contract type (cues that identify it)
- One definition per extractable field (regex patterns that find it)
- TypeRegistry: the immutable collection handed to classifier and matcher

Everything here is frozen after construction. A registry is built once at
startup and shared by reference between concurrent pipeline runs.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple

from ..utils.exceptions import RegistryValidationError


def _as_tuple(values: Optional[Iterable]) -> tuple:
    if values is None:
        return ()
    if isinstance(values, str):
        return (values,)
    return tuple(values)


@dataclass(frozen=True)
class DocumentTypeProfile:
    name: str
    positive_cues: Tuple[str, ...] = ()
    negative_cues: Tuple[str, ...] = ()
    filename_hints: Tuple[str, ...] = ()
    execution_markers: Tuple[str, ...] = ()

    def __post_init__(self):
        for attr in ("positive_cues", "negative_cues", "filename_hints", "execution_markers"):
            object.__setattr__(self, attr, _as_tuple(getattr(self, attr)))


@dataclass(frozen=True)
class RegexPatternSpec:
    """A regex with a named `value` group marking the text to extract."""
    pattern: str
    ignore_case: bool = False


@dataclass(frozen=True)
class FieldDefinition:
    key: str
    applicable_types: Tuple[str, ...] = ()
    patterns: Tuple[RegexPatternSpec, ...] = ()

    # Post-extraction checks (see ResultValidator)
    required: bool = False
    required_units: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "applicable_types", _as_tuple(self.applicable_types))
        object.__setattr__(self, "required_units", _as_tuple(self.required_units))
        object.__setattr__(
            self,
            "patterns",
            tuple(
                p if isinstance(p, RegexPatternSpec) else RegexPatternSpec(pattern=p)
                for p in _as_tuple(self.patterns)
            ),
        )

    def applies_to(self, document_type: str) -> bool:
        return document_type in self.applicable_types


@dataclass(frozen=True)
class TypeRegistry:
    """
    Immutable registry of contract types and field definitions.

    Profile order is registration order; the classifier relies on it to
    break ties between equally scored types.
    """
    profiles: Tuple[DocumentTypeProfile, ...] = ()
    fields: Tuple[FieldDefinition, ...] = ()
    _fields_by_type: Mapping[str, Tuple[FieldDefinition, ...]] = field(
        default_factory=lambda: MappingProxyType({}), init=False, repr=False, compare=False
    )

    def __post_init__(self):
        object.__setattr__(self, "profiles", _as_tuple(self.profiles))
        object.__setattr__(self, "fields", _as_tuple(self.fields))

        names = [p.name for p in self.profiles]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise RegistryValidationError(f"Duplicate document types: {', '.join(duplicates)}")

        keys = [f.key for f in self.fields]
        duplicates = sorted({k for k in keys if keys.count(k) > 1})
        if duplicates:
            raise RegistryValidationError(f"Duplicate field keys: {', '.join(duplicates)}")

        known = set(names)
        for definition in self.fields:
            unknown = [t for t in definition.applicable_types if t not in known]
            if unknown:
                raise RegistryValidationError(
                    f"Field '{definition.key}' references unknown document types: {', '.join(unknown)}"
                )

        by_type = {
            name: tuple(f for f in self.fields if f.applies_to(name))
            for name in names
        }
        object.__setattr__(self, "_fields_by_type", MappingProxyType(by_type))

    @property
    def type_names(self) -> Tuple[str, ...]:
        return tuple(p.name for p in self.profiles)

    def get_profile(self, name: str) -> Optional[DocumentTypeProfile]:
        for profile in self.profiles:
            if profile.name == name:
                return profile
        return None

    def fields_for(self, document_type: str) -> Tuple[FieldDefinition, ...]:
        """Field definitions applicable to a type, in declaration order."""
        return self._fields_by_type.get(document_type, ())

    def has_fields_for(self, document_type: str) -> bool:
        return bool(self.fields_for(document_type))
