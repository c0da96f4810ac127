"""
Visualization Layer

Responsibility:
Pre-computed, renderable views. All layout happens here; the rendering
collaborator only draws what it receives.

PRINCIPLES:
1. Immutable (Frozen)
2. Deterministic (same snapshot = same view)
3. No DOM, SVG or styling concerns
"""

from .layout import (
    NodeRole, LayoutConfig, LayoutNode, LayoutEdge, RadialLayout,
    RadialLayoutEngine, truncate_label,
)
from .views import (
    AvailabilityState, ViewConfig, ViewBuilder,
    PackTreeView, DenRosterView, OutgoingLinksView, OutgoingGraphView,
    PACK_TREE, DEN_ROSTER, OUTGOING_LINKS, OUTGOING_GRAPH, VIEW_TITLES,
    unavailable_view,
)

__all__ = [
    'NodeRole', 'LayoutConfig', 'LayoutNode', 'LayoutEdge', 'RadialLayout',
    'RadialLayoutEngine', 'truncate_label',
    'AvailabilityState', 'ViewConfig', 'ViewBuilder',
    'PackTreeView', 'DenRosterView', 'OutgoingLinksView', 'OutgoingGraphView',
    'PACK_TREE', 'DEN_ROSTER', 'OUTGOING_LINKS', 'OUTGOING_GRAPH', 'VIEW_TITLES',
    'unavailable_view',
]
