"""
Observability & Audit Layer

RESPONSIBILITY: Audit log and metrics for render calls
ALLOWED INPUTS: Audit entries and metric points from other layers
OUTPUTS: AuditLogEntry lists, MetricPoint series

WHAT THIS LAYER MUST NOT DO:
============================
- Modify any view or record
- Make decisions based on logged data
- Feed anything back into a render call
"""

from __future__ import annotations
from dataclasses import dataclass
from collections import deque
from typing import Deque, Dict, List, Optional, Tuple
import hashlib
import itertools

from ..contracts.base import Timestamp
from ..contracts.events import AuditEventType, AuditLogEntry, MetricPoint


# =============================================================================
# LOG COLLECTORS (One per layer)
# =============================================================================

class LogCollector:
    """
    Append-only audit collector for one layer.

    Keeps the most recent `max_entries` entries.
    """

    def __init__(self, max_entries: int = 10_000):
        self._entries: Deque[AuditLogEntry] = deque(maxlen=max_entries)

    def collect(self, entry: AuditLogEntry):
        """Collect an audit entry (append-only; the oldest is dropped when full)."""
        self._entries.append(entry)

    def get_entries(self, event_type: Optional[AuditEventType] = None) -> List[AuditLogEntry]:
        """Get entries, optionally filtered by type."""
        if event_type:
            return [e for e in self._entries if e.event_type == event_type]
        return list(self._entries)


# =============================================================================
# METRICS COLLECTOR
# =============================================================================

class MetricsCollector:
    """
    Append-only time series of metric points.

    Each series keeps its most recent `max_points` points.
    """

    def __init__(self, max_points: int = 10_000):
        self._max_points = max_points
        self._metrics: Dict[str, Deque[MetricPoint]] = {}

    def record(
        self,
        metric_name: str,
        value: float,
        labels: Optional[Dict[str, str]] = None
    ):
        """Record a metric data point."""
        label_tuple = tuple(sorted(labels.items())) if labels else ()

        point = MetricPoint(
            metric_name=metric_name,
            value=value,
            timestamp=Timestamp.now(),
            labels=label_tuple
        )
        series = self._metrics.get(metric_name)
        if series is None:
            series = self._metrics[metric_name] = deque(maxlen=self._max_points)
        series.append(point)

    def get_metric(self, metric_name: str) -> List[MetricPoint]:
        return list(self._metrics.get(metric_name, ()))

    def total(self, metric_name: str) -> float:
        """Sum of the retained values for a metric."""
        return sum(p.value for p in self._metrics.get(metric_name, ()))


# =============================================================================
# OBSERVABILITY ENGINE
# =============================================================================

@dataclass
class ObservabilityConfig:
    """Configuration for observability engine."""
    enable_audit: bool = True
    enable_metrics: bool = True
    max_entries: int = 10_000  # per layer log and per metric series

    def __post_init__(self):
        if self.max_entries < 1:
            raise ValueError(f"max_entries must be positive, got {self.max_entries}")


class ObservabilityEngine:
    """
    Central Observability Engine.

    ONLY observes: receives copies of events, never changes outputs.
    """

    LAYERS = ('ingestion', 'core', 'views')

    def __init__(self, config: Optional[ObservabilityConfig] = None):
        self._config = config or ObservabilityConfig()
        self._collectors: Dict[str, LogCollector] = {
            layer: LogCollector(self._config.max_entries) for layer in self.LAYERS
        }
        self._metrics = (
            MetricsCollector(self._config.max_entries) if self._config.enable_metrics else None
        )
        self._sequence = itertools.count(1)

    def log_audit(
        self,
        action: str,
        layer: str = "views",
        event_type: AuditEventType = AuditEventType.RENDER,
        entity_id: Optional[str] = None,
        entity_type: Optional[str] = None,
        metadata: Tuple[Tuple[str, str], ...] = ()
    ):
        """Record an audit entry for a layer."""
        if not self._config.enable_audit:
            return
        collector = self._collectors.get(layer)
        if collector is None:
            return

        now = Timestamp.now()
        entry_hash = hashlib.sha256(
            f"{layer}_{action}|{next(self._sequence)}|{now.value.timestamp()}".encode()
        ).hexdigest()[:16]

        collector.collect(AuditLogEntry(
            entry_id=f"audit_{entry_hash}",
            event_type=event_type,
            timestamp=now,
            layer=layer,
            action=action,
            entity_id=entity_id,
            entity_type=entity_type,
            metadata=metadata,
        ))

    def collect_metric(
        self,
        metric_name: str,
        value: float,
        labels: Optional[Dict[str, str]] = None
    ):
        """Collect a metric data point."""
        if self._metrics:
            self._metrics.record(metric_name, value, labels)

    def get_layer_log(self, layer_name: str) -> List[AuditLogEntry]:
        collector = self._collectors.get(layer_name)
        if not collector:
            return []
        return collector.get_entries()

    def get_metrics(self) -> Optional[MetricsCollector]:
        """Get metrics collector (read-only access)."""
        return self._metrics
