"""
Record Normalizer

Collapses host identity aliases into one Record construction step.

ALIASES:
========
    record_key : recordKey, record_key
    type_id    : typeId, type_id
    record_id  : recordId, record_id
    parent     : parent, parentKey, parentRecordKey, parent_key

Integer ids are stringified, empty strings count as absent.
"""

from __future__ import annotations
from collections.abc import Mapping
from typing import Any, Optional

from ..contracts.base import Error, ErrorCode, Result
from ..contracts.records import MappingField, Record, to_field


RECORD_KEY_ALIASES = ("recordKey", "record_key")
TYPE_ID_ALIASES = ("typeId", "type_id")
RECORD_ID_ALIASES = ("recordId", "record_id")
PARENT_ALIASES = ("parent", "parentKey", "parentRecordKey", "parent_key")

_NOT_RECORDS = (str, bytes, int, float, bool, list, tuple)


def member(obj: Any, name: str) -> Any:
    """Read `name` from a mapping by key or from an object by attribute."""
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def _first_member(obj: Any, names) -> Any:
    for name in names:
        value = member(obj, name)
        if value is not None and value != "":
            return value
    return None


def _identity(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str) and value:
        return value
    return None


def normalize_record(raw: Any) -> Result:
    """
    Build a Record from one host entry.

    Returns Result.failure(INVALID_RECORD) for entries that are neither
    mappings nor objects. A record lacking identity is still returned;
    it simply has no key.
    """
    if isinstance(raw, Record):
        return Result.success(raw)

    if raw is None or isinstance(raw, _NOT_RECORDS):
        return Result.failure(Error.create(
            ErrorCode.INVALID_RECORD,
            f"Host entry is not a record: {type(raw).__name__}",
            entry_type=type(raw).__name__
        ))

    raw_fields = member(raw, "fields")
    fields = to_field(raw_fields) if isinstance(raw_fields, Mapping) else MappingField()

    body = member(raw, "body")

    return Result.success(Record(
        type_id=_identity(_first_member(raw, TYPE_ID_ALIASES)),
        record_id=_identity(_first_member(raw, RECORD_ID_ALIASES)),
        record_key=_identity(_first_member(raw, RECORD_KEY_ALIASES)),
        parent=_identity(_first_member(raw, PARENT_ALIASES)),
        body=body if isinstance(body, str) else None,
        fields=fields,
    ))
