"""
Contracts Package

Immutable data shared by every layer. Layers import types from here and
never from each other's internals.
"""

from .base import ErrorCode, Error, Result, Timestamp
from .records import (
    Field, TextField, ScalarField, SequenceField, MappingField,
    Record, to_field,
)
from .events import AuditEventType, AuditLogEntry, MetricPoint

__all__ = [
    'ErrorCode', 'Error', 'Result', 'Timestamp',
    'Field', 'TextField', 'ScalarField', 'SequenceField', 'MappingField',
    'Record', 'to_field',
    'AuditEventType', 'AuditLogEntry', 'MetricPoint',
]
