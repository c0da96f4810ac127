"""
Link Extraction
===============

Scans text and nested field structures for embedded `[[...]]` tokens.

TOKEN SYNTAX:
=============
`[[`, one or more characters other than `]`, then `]]`; trimmed.
A token never contains `]`, so every extracted token re-wrapped in
`[[ ]]` parses back to itself. There is no nested-bracket support.
Tokens are raw strings here; `keys.is_reference_token` decides which of
them denote records.
"""

from __future__ import annotations
from typing import Callable, List, Optional, TypeVar
import re

from ..contracts.records import (
    Field, MappingField, Record, ScalarField, SequenceField, TextField
)


T = TypeVar('T')

TOKEN_RE = re.compile(r"\[\[([^\]]+)\]\]")


def extract_tokens(text: Optional[str]) -> List[str]:
    """
    Return trimmed tokens in order of first appearance.

    Duplicates are preserved. Tokens that are empty after trimming are
    dropped. Non-string input yields an empty list.
    """
    if not text or not isinstance(text, str):
        return []
    tokens = []
    for match in TOKEN_RE.finditer(text):
        inner = match.group(1).strip()
        if inner:
            tokens.append(inner)
    return tokens


def fold_field(field: Field, on_text: Callable[[str], List[T]]) -> List[T]:
    """
    Structural fold over the field variant.

    Depth-first: sequences in item order, mappings in entry order.
    Scalars contribute nothing.
    """
    if isinstance(field, TextField):
        return on_text(field.value)
    if isinstance(field, SequenceField):
        out: List[T] = []
        for item in field.items:
            out.extend(fold_field(item, on_text))
        return out
    if isinstance(field, MappingField):
        out = []
        for _, value in field.entries:
            out.extend(fold_field(value, on_text))
        return out
    if isinstance(field, ScalarField):
        return []
    raise TypeError(f"Unsupported field type: {type(field).__name__}")


def extract_all_links(record: Optional[Record]) -> List[str]:
    """
    Unique tokens from the record body and every string in its fields,
    in ascending order.
    """
    if record is None:
        return []
    links = set(extract_tokens(record.body))
    links.update(fold_field(record.fields, extract_tokens))
    return sorted(links)
