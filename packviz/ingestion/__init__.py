"""
Ingestion Layer

RESPONSIBILITY: Turn an opaque host context into a normalized RecordSet
ALLOWED INPUTS: Host contexts of a known shape
OUTPUTS: Result wrapping RecordSet (immutable)

WHAT THIS LAYER MUST NOT DO:
============================
- Index hierarchy or resolve references
- Compute layout
- Raise for malformed host data (failures are Result values)

HOST SHAPES:
============
One adapter per known host shape, instead of ad-hoc shape sniffing:

    sequence  : the context itself is a list/tuple of records
    records   : ctx.records is a list/tuple
    dataset   : ctx.dataset.records is a list/tuple
    accessor  : ctx.getAllRecords() / ctx.get_all_records() returns records
    graph     : ctx.graph.records is a mapping of records
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Optional

from ..contracts.base import Error, ErrorCode, Result
from ..core.keys import RecordSet
from .normalizer import member, normalize_record


NO_RECORDS_MESSAGE = (
    "couldn't find records on the host context. "
    "Provide ctx.dataset.records (list) or ctx.getAllRecords()."
)


def ingest(raw_records: Iterable[Any]) -> RecordSet:
    """Normalize host entries into a RecordSet, keeping invalid-entry diagnostics."""
    records = []
    diagnostics = []
    for raw in raw_records:
        result = normalize_record(raw)
        if result.is_success:
            records.append(result.value)
        else:
            diagnostics.append(result.error)
    return RecordSet.from_records(records, diagnostics)


def _no_records(shape: str) -> Result:
    return Result.failure(Error.create(
        ErrorCode.NO_RECORDS_AVAILABLE,
        NO_RECORDS_MESSAGE,
        host_shape=shape
    ))


# =============================================================================
# HOST ADAPTERS (Strategy pattern for different host shapes)
# =============================================================================

class HostAdapter(ABC):
    """
    Abstract base for host-shape adapters.

    Each adapter knows how to read records from ONE context shape.
    `load` MUST return a Result, never raise.
    """

    @property
    @abstractmethod
    def shape(self) -> str:
        """Return the host shape this adapter handles."""
        pass

    @abstractmethod
    def accepts(self, context: Any) -> bool:
        """True if the context exposes this adapter's shape."""
        pass

    @abstractmethod
    def load(self, context: Any) -> Result:
        """Read and normalize records. Success value is a RecordSet."""
        pass


class SequenceAdapter(HostAdapter):
    """The context is the record list itself."""

    @property
    def shape(self) -> str:
        return "sequence"

    def accepts(self, context: Any) -> bool:
        return isinstance(context, (list, tuple))

    def load(self, context: Any) -> Result:
        if not self.accepts(context):
            return _no_records(self.shape)
        return Result.success(ingest(context))


class RecordsAdapter(HostAdapter):
    """ctx.records (list)."""

    @property
    def shape(self) -> str:
        return "records"

    def accepts(self, context: Any) -> bool:
        return isinstance(member(context, "records"), (list, tuple))

    def load(self, context: Any) -> Result:
        if not self.accepts(context):
            return _no_records(self.shape)
        return Result.success(ingest(member(context, "records")))


class DatasetAdapter(HostAdapter):
    """ctx.dataset.records (list)."""

    @property
    def shape(self) -> str:
        return "dataset"

    def accepts(self, context: Any) -> bool:
        return isinstance(member(member(context, "dataset"), "records"), (list, tuple))

    def load(self, context: Any) -> Result:
        if not self.accepts(context):
            return _no_records(self.shape)
        return Result.success(ingest(member(member(context, "dataset"), "records")))


class AccessorAdapter(HostAdapter):
    """ctx.getAllRecords() or ctx.get_all_records()."""

    ACCESSOR_NAMES = ("getAllRecords", "get_all_records")

    @property
    def shape(self) -> str:
        return "accessor"

    def _accessor(self, context: Any):
        for name in self.ACCESSOR_NAMES:
            candidate = member(context, name)
            if callable(candidate):
                return candidate
        return None

    def accepts(self, context: Any) -> bool:
        return self._accessor(context) is not None

    def load(self, context: Any) -> Result:
        accessor = self._accessor(context)
        if accessor is None:
            return _no_records(self.shape)

        try:
            raw = accessor()
        except Exception as e:
            return Result.failure(Error.create(
                ErrorCode.HOST_ACCESSOR_FAILED,
                f"Host record accessor failed: {e}",
                host_shape=self.shape
            ))

        if isinstance(raw, Mapping):
            return Result.success(ingest(raw.values()))
        if isinstance(raw, (list, tuple)):
            return Result.success(ingest(raw))
        return _no_records(self.shape)


class GraphAdapter(HostAdapter):
    """ctx.graph.records (mapping of key -> record)."""

    @property
    def shape(self) -> str:
        return "graph"

    def accepts(self, context: Any) -> bool:
        return isinstance(member(member(context, "graph"), "records"), Mapping)

    def load(self, context: Any) -> Result:
        if not self.accepts(context):
            return _no_records(self.shape)
        return Result.success(ingest(member(member(context, "graph"), "records").values()))


# =============================================================================
# ADAPTER REGISTRY
# =============================================================================

class HostAdapterRegistry:
    """
    Registry of host adapters, consulted in registration order.

    A configured shape selects exactly one adapter; without one the first
    adapter that accepts the context is used.
    """

    def __init__(self):
        self._adapters: Dict[str, HostAdapter] = {}
        self._register_default_adapters()

    def _register_default_adapters(self):
        """Register built-in adapter implementations."""
        self.register_adapter(SequenceAdapter())
        self.register_adapter(RecordsAdapter())
        self.register_adapter(DatasetAdapter())
        self.register_adapter(AccessorAdapter())
        self.register_adapter(GraphAdapter())

    def register_adapter(self, adapter: HostAdapter):
        """Register an adapter for its host shape."""
        self._adapters[adapter.shape] = adapter

    def get_adapter(self, shape: str) -> Optional[HostAdapter]:
        """Adapter registered for a host shape, or None."""
        return self._adapters.get(shape)

    @property
    def shapes(self) -> List[str]:
        return list(self._adapters)

    def load(self, context: Any, shape: Optional[str] = None) -> Result:
        """Load a RecordSet from the context, or fail with an explicit error."""
        if shape is not None:
            adapter = self.get_adapter(shape)
            if adapter is None:
                return Result.failure(Error.create(
                    ErrorCode.UNKNOWN_HOST_SHAPE,
                    f"No adapter registered for host shape {shape}",
                    host_shape=shape
                ))
            return adapter.load(context)

        if context is None:
            return _no_records("none")

        for adapter in self._adapters.values():
            if adapter.accepts(context):
                return adapter.load(context)

        return _no_records("unrecognized")


__all__ = [
    'HostAdapter', 'SequenceAdapter', 'RecordsAdapter', 'DatasetAdapter',
    'AccessorAdapter', 'GraphAdapter', 'HostAdapterRegistry',
    'ingest', 'normalize_record', 'member', 'NO_RECORDS_MESSAGE',
]
