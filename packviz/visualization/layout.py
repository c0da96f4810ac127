"""
Radial Layout

Responsibility:
Deterministic placement of a center node and N satellites on a circle.
Input: center + ordered satellites -> Output: RadialLayout (pre-layouted)

GEOMETRY:
=========
    center   = canvas midpoint
    radius   = radius_factor * min(width, height)
    n        = max(1, count)          (angular divisor only)
    theta_i  = 2 * pi * i / n         (0 rad = due east)
    x_i, y_i = cx + r cos(theta_i), cy + r sin(theta_i)

No force-directed or overlap-avoidance logic. Labels are truncated for
display only; `label` always keeps the full text.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Tuple
import math


ELLIPSIS = "…"


class NodeRole(Enum):
    """Role of a node in the radial view."""
    CENTER = "center"
    KNOWN = "known"
    MISSING = "missing"


@dataclass(frozen=True)
class LayoutConfig:
    """Canvas and label settings for the radial view."""
    width: float = 680
    height: float = 420
    radius_factor: float = 0.33
    max_label_length: int = 28
    center_node_radius: float = 18
    satellite_node_radius: float = 14

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Canvas dimensions must be positive")
        if self.max_label_length < 2:
            raise ValueError("max_label_length must be at least 2")


@dataclass(frozen=True)
class LayoutNode:
    """Renderable node. Coordinates are canvas pixels."""
    key: str
    label: str
    display_label: str
    x: float
    y: float
    angle: float
    radius: float
    role: NodeRole


@dataclass(frozen=True)
class LayoutEdge:
    """Renderable edge from the center to one satellite."""
    edge_id: str
    source_key: str
    target_key: str
    x1: float
    y1: float
    x2: float
    y2: float
    style: str  # solid for known targets, dashed for missing ones


@dataclass(frozen=True)
class RadialLayout:
    """
    Pre-layouted radial graph.
    Same input = identical layout.
    """
    width: float
    height: float
    center: LayoutNode
    satellites: Tuple[LayoutNode, ...]
    edges: Tuple[LayoutEdge, ...]


def truncate_label(label: str, limit: int = 28) -> str:
    """Labels longer than `limit` become the first limit-1 chars plus an ellipsis."""
    if len(label) > limit:
        return label[:limit - 1] + ELLIPSIS
    return label


class RadialLayoutEngine:
    """Assigns planar coordinates to a center node and its satellites."""

    def __init__(self, config: LayoutConfig = None):
        self._config = config or LayoutConfig()

    @property
    def config(self) -> LayoutConfig:
        return self._config

    def layout(
        self,
        center_key: str,
        center_label: str,
        satellites: Sequence[Tuple[str, str, NodeRole]]
    ) -> RadialLayout:
        cfg = self._config
        cx = cfg.width / 2
        cy = cfg.height / 2
        r = min(cfg.width, cfg.height) * cfg.radius_factor
        n = max(1, len(satellites))

        center = LayoutNode(
            key=center_key,
            label=center_label,
            display_label=center_label,
            x=cx,
            y=cy,
            angle=0.0,
            radius=cfg.center_node_radius,
            role=NodeRole.CENTER,
        )

        nodes = []
        edges = []
        for i, (key, label, role) in enumerate(satellites):
            theta = (2 * math.pi * i) / n
            x = cx + r * math.cos(theta)
            y = cy + r * math.sin(theta)

            nodes.append(LayoutNode(
                key=key,
                label=label,
                display_label=truncate_label(label, cfg.max_label_length),
                x=x,
                y=y,
                angle=theta,
                radius=cfg.satellite_node_radius,
                role=role,
            ))
            edges.append(LayoutEdge(
                edge_id=f"{center_key}->{key}",
                source_key=center_key,
                target_key=key,
                x1=cx,
                y1=cy,
                x2=x,
                y2=y,
                style="dashed" if role is NodeRole.MISSING else "solid",
            ))

        return RadialLayout(
            width=cfg.width,
            height=cfg.height,
            center=center,
            satellites=tuple(nodes),
            edges=tuple(edges),
        )
