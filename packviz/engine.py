"""
Engine Orchestration Module

Single entry point for render calls. Coordinates the layers while keeping
them separate.

LAYER FLOW (per render call):
=============================
1. Ingestion: host context -> RecordSet
2. Core: RecordSet -> ChildIndex / ResolvedLink
3. Visualization: -> frozen view (layout pre-computed)
4. Observability: records the call, never changes its output

Nothing is cached between calls; every call works on its own snapshot.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional

from .contracts.base import Error, ErrorCode, Result
from .contracts.events import AuditEventType
from .core.keys import RecordSet
from .ingestion import HostAdapterRegistry, normalize_record
from .observability import ObservabilityEngine, ObservabilityConfig
from .visualization.layout import LayoutConfig
from .visualization.views import (
    ViewBuilder, ViewConfig, AvailabilityState, unavailable_view,
    PACK_TREE, DEN_ROSTER, OUTGOING_LINKS, OUTGOING_GRAPH,
)


VIEW_IDS = (PACK_TREE, DEN_ROSTER, OUTGOING_LINKS, OUTGOING_GRAPH)


@dataclass
class EngineConfig:
    """Unified configuration for the engine."""
    layout: LayoutConfig = None
    views: ViewConfig = None
    observability: ObservabilityConfig = None
    host_shape: Optional[str] = None  # None = first adapter that accepts

    def __post_init__(self):
        self.layout = self.layout or LayoutConfig()
        self.views = self.views or ViewConfig()
        self.observability = self.observability or ObservabilityConfig()


class PackVizEngine:
    """
    Renders views from host contexts.

    Holds configuration and observability only; no record state survives
    a call.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self._config = config or EngineConfig()
        self._adapters = HostAdapterRegistry()
        self._views = ViewBuilder(self._config.views, self._config.layout)
        self._observability = ObservabilityEngine(self._config.observability)

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def adapters(self) -> HostAdapterRegistry:
        return self._adapters

    @property
    def observability(self) -> ObservabilityEngine:
        return self._observability

    # =========================================================================
    # INGESTION
    # =========================================================================

    def load(self, context: Any) -> Result:
        """Load a RecordSet from a host context."""
        result = self._adapters.load(context, self._config.host_shape)

        if result.is_failure:
            self._observability.collect_metric(
                "ingestion_failures_total", 1.0, {"error_code": result.error.code.name}
            )
            self._observability.log_audit(
                action="ingestion_failed",
                layer="ingestion",
                event_type=AuditEventType.ERROR,
                metadata=(("error_code", result.error.code.name),)
            )
            return result

        record_set: RecordSet = result.value
        self._observability.collect_metric("records_ingested", float(len(record_set)))
        self._observability.log_audit(
            action="ingestion_completed",
            layer="ingestion",
            event_type=AuditEventType.INGESTION,
            metadata=(
                ("record_count", str(len(record_set))),
                ("diagnostic_count", str(len(record_set.diagnostics))),
            )
        )
        for diagnostic in record_set.diagnostics:
            self._observability.log_audit(
                action="ingestion_diagnostic",
                layer="ingestion",
                event_type=AuditEventType.ERROR,
                metadata=(("error_code", diagnostic.code.name),) + diagnostic.context
            )
        return result

    def _resolve_current(self, record_set: RecordSet, current: Any) -> Result:
        """
        A current record may be given as a key, a Record or a raw host record.

        No current record resolves to success(None); a key absent from the
        snapshot is RECORD_NOT_FOUND.
        """
        if current is None:
            return Result.success(None)
        if isinstance(current, str):
            record = record_set.get(current)
            if record is None:
                return Result.failure(Error.create(
                    ErrorCode.RECORD_NOT_FOUND,
                    f"Record {current} not found in the snapshot.",
                    record_key=current
                ))
            return Result.success(record)
        return normalize_record(current)

    # =========================================================================
    # RENDER INTERFACE
    # =========================================================================

    def render(self, view_id: str, context: Any, current: Any = None):
        """
        Render one view. Never raises for host data problems; those come
        back as views with availability MISSING.
        """
        if view_id not in VIEW_IDS:
            raise ValueError(f"Unknown view_id: {view_id}")

        loaded = self.load(context)
        if loaded.is_failure:
            view = unavailable_view(view_id, loaded.error)
            self._log_render(view_id, view)
            return view

        record_set: RecordSet = loaded.value
        resolved = self._resolve_current(record_set, current)
        focal = resolved.value

        if view_id == PACK_TREE:
            view = self._views.pack_tree(record_set)
        elif resolved.is_failure:
            # A current record was named but cannot be used
            view = unavailable_view(view_id, resolved.error)
        elif view_id == DEN_ROSTER:
            view = self._views.den_roster(record_set, focal)
        elif view_id == OUTGOING_LINKS:
            view = self._views.outgoing_links(record_set, focal)
        else:
            view = self._views.outgoing_graph(record_set, focal)
            missing = sum(1 for link in view.links if not link.is_known)
            if missing:
                self._observability.collect_metric("missing_links_total", float(missing))

        self._log_render(view_id, view)
        return view

    def render_pack_tree(self, context: Any):
        return self.render(PACK_TREE, context)

    def render_den_roster(self, context: Any, current: Any = None):
        return self.render(DEN_ROSTER, context, current)

    def render_outgoing_links(self, context: Any, current: Any = None):
        return self.render(OUTGOING_LINKS, context, current)

    def render_outgoing_graph(self, context: Any, current: Any = None):
        return self.render(OUTGOING_GRAPH, context, current)

    def _log_render(self, view_id: str, view):
        self._observability.collect_metric("render_calls_total", 1.0, {"view_id": view_id})
        outcome = "success" if view.availability is AvailabilityState.PRESENT else "fallback"
        self._observability.log_audit(
            action="render",
            layer="views",
            event_type=AuditEventType.RENDER,
            entity_id=view_id,
            entity_type="view",
            metadata=(
                ("outcome", outcome),
                ("error_code", view.error_code or ""),
            )
        )
