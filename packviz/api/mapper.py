"""
API Mapper
==========

Transforms frozen view DTOs into JSON-ready dictionaries.
Field names and ordering are preserved; enums become their values.
"""
from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any, Dict


def to_jsonable(value: Any) -> Any:
    """Recursively map dataclasses, enums and tuples to JSON types."""
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_jsonable(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    return value


def map_view_to_dto(view: Any) -> Dict[str, Any]:
    """Map a view to its response payload."""
    return to_jsonable(view)
