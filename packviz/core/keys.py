"""
Record Key Resolution
=====================

Derives the canonical identifier of a record, validates reference-token
syntax and builds the key -> record lookup for one snapshot.

KEY RULE:
=========
    record_key            if the record carries an explicit key
    "{type_id}:{record_id}" otherwise
    None                  if neither is resolvable

A None key means "cannot be displayed or indexed", never a fatal error.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple
import re

from ..contracts.base import Error, ErrorCode
from ..contracts.records import Record


UNKNOWN_LABEL = "(unknown)"

# Fields consulted, in order, for a human label
DISPLAY_NAME_FIELDS = ("name", "title", "fullName")

# One colon separating two token-safe runs, each starting alphanumeric
RECORD_REF_RE = re.compile(r"[A-Za-z0-9][A-Za-z0-9_-]*:[A-Za-z0-9][A-Za-z0-9_-]*")


def key_of(record: Optional[Record]) -> Optional[str]:
    """Return the record's canonical key, or None if it has none."""
    if record is None:
        return None
    if record.record_key:
        return record.record_key
    if record.type_id and record.record_id:
        return f"{record.type_id}:{record.record_id}"
    return None


def is_reference_token(token: str) -> bool:
    """True if the token is shaped like a `type:id` record key."""
    if not isinstance(token, str):
        return False
    return RECORD_REF_RE.fullmatch(token) is not None


def display_name_of(record: Optional[Record]) -> str:
    """First of name/title/fullName, else the key, else "(unknown)"."""
    if record is None:
        return UNKNOWN_LABEL
    for name in DISPLAY_NAME_FIELDS:
        text = record.fields.get_text(name)
        if text:
            return text
    return key_of(record) or UNKNOWN_LABEL


# =============================================================================
# RECORD SET (one immutable snapshot per render call)
# =============================================================================

@dataclass(frozen=True)
class RecordSet:
    """
    Ordered snapshot of records plus an O(1) key lookup.

    DUPLICATE KEYS:
    ===============
    First-found wins in the lookup. Every later record resolving to an
    already-seen key is reported in `diagnostics` as DUPLICATE_RECORD_KEY.
    Records without a key stay in `records` but are not in the lookup.
    """
    records: Tuple[Record, ...]
    by_key: Dict[str, Record] = field(default_factory=dict, compare=False)
    diagnostics: Tuple[Error, ...] = field(default_factory=tuple, compare=False)

    @staticmethod
    def from_records(
        records: Iterable[Record],
        diagnostics: Iterable[Error] = ()
    ) -> RecordSet:
        ordered = tuple(records)
        lookup: Dict[str, Record] = {}
        notes: List[Error] = list(diagnostics)

        for record in ordered:
            key = key_of(record)
            if key is None:
                continue
            if key in lookup:
                notes.append(Error.create(
                    ErrorCode.DUPLICATE_RECORD_KEY,
                    f"Duplicate record key {key}; keeping the first record",
                    record_key=key
                ))
                continue
            lookup[key] = record

        return RecordSet(records=ordered, by_key=lookup, diagnostics=tuple(notes))

    def get(self, key: Optional[str]) -> Optional[Record]:
        if key is None:
            return None
        return self.by_key.get(key)

    def first_of_type(self, type_id: str) -> Optional[Record]:
        for record in self.records:
            if record.is_type(type_id):
                return record
        return None

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)
