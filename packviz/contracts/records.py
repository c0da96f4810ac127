"""
Record Contracts

Normalized, immutable records and their field values.

FIELD VARIANT:
==============
Host field data is untyped nested JSON. At ingestion it is converted ONCE
into a closed recursive variant:

    Field = TextField | SequenceField | MappingField | ScalarField

Consumers walk fields with an exhaustive fold over these four cases instead
of inspecting runtime types of arbitrary host values.
"""

from __future__ import annotations
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple, Union


@dataclass(frozen=True)
class TextField:
    """A string leaf. The only leaf that can carry reference tokens."""
    value: str


@dataclass(frozen=True)
class ScalarField:
    """Any non-string leaf (number, boolean, null, unknown host value)."""
    value: Any = None


@dataclass(frozen=True)
class SequenceField:
    """Ordered sequence of fields."""
    items: Tuple['Field', ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class MappingField:
    """String-keyed mapping of fields. Entry order is host insertion order."""
    entries: Tuple[Tuple[str, 'Field'], ...] = field(default_factory=tuple)

    def get(self, name: str) -> Optional['Field']:
        for key, value in self.entries:
            if key == name:
                return value
        return None

    def get_text(self, name: str) -> Optional[str]:
        """Return the named field if it is a non-empty string."""
        value = self.get(name)
        if isinstance(value, TextField) and value.value:
            return value.value
        return None


Field = Union[TextField, ScalarField, SequenceField, MappingField]


def to_field(value: Any) -> Field:
    """
    Convert an untyped host value into the closed field variant.

    Mappings keep their insertion order; keys are stringified.
    Lists and tuples become sequences. Everything else that is not a
    string is a scalar.
    """
    if isinstance(value, str):
        return TextField(value)
    if isinstance(value, Mapping):
        return MappingField(tuple(
            (str(k), to_field(v)) for k, v in value.items()
        ))
    if isinstance(value, (list, tuple)):
        return SequenceField(tuple(to_field(v) for v in value))
    return ScalarField(value)


# =============================================================================
# RECORD
# =============================================================================

@dataclass(frozen=True)
class Record:
    """
    Immutable snapshot of one host record.

    Identity aliases (recordKey, parentKey, ...) are already collapsed:
    consumers never look at raw host shapes.
    """
    type_id: Optional[str]
    record_id: Optional[str]
    record_key: Optional[str] = None
    parent: Optional[str] = None
    body: Optional[str] = None
    fields: MappingField = field(default_factory=MappingField)

    def is_type(self, type_id: str) -> bool:
        return self.type_id == type_id
