"""
View Contracts

Responsibility:
Deterministic transformation of a RecordSet into renderable views.
Input: RecordSet (+ focal Record) -> Output: frozen view DTOs

EXPLICIT ABSENCE:
=================
Views never raise. When the data a view needs is absent the view comes
back with availability MISSING, the error code and a fallback message the
renderer can show as-is.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from ..contracts.base import Error, ErrorCode
from ..contracts.records import Record, SequenceField, TextField
from ..core.keys import RecordSet, key_of, display_name_of, UNKNOWN_LABEL
from ..core.links import extract_all_links, extract_tokens
from ..core.hierarchy import HierarchyIndexer, TreeNode
from ..core.references import LinkStatus, ReferenceGraphBuilder, ResolvedLink
from .layout import LayoutConfig, NodeRole, RadialLayout, RadialLayoutEngine


PACK_TREE = "pack-tree"
DEN_ROSTER = "den-roster"
OUTGOING_LINKS = "relationship-mini"
OUTGOING_GRAPH = "relationship-graph"

VIEW_TITLES = {
    PACK_TREE: "Pack org tree",
    DEN_ROSTER: "Den roster",
    OUTGOING_LINKS: "Outgoing links",
    OUTGOING_GRAPH: "Outgoing links graph",
}


class AvailabilityState(Enum):
    """Availability of a view's data."""
    PRESENT = "present"  # Data is available
    MISSING = "missing"  # Data expected but not found


@dataclass(frozen=True)
class ViewConfig:
    """Record categories the roster and tree views look for."""
    root_type: str = "pack"
    group_type: str = "den"
    member_type: str = "scout"
    leaders_field: str = "leaders"


@dataclass(frozen=True)
class PackTreeView:
    """Nested (key, label) outline below the root record."""
    view_id: str
    title: str
    availability: AvailabilityState
    root: Optional[TreeNode] = None
    message: Optional[str] = None
    error_code: Optional[str] = None


@dataclass(frozen=True)
class DenRosterView:
    """Leader labels from the group's fields plus its member children."""
    view_id: str
    title: str
    availability: AvailabilityState
    group_key: Optional[str] = None
    leaders: Tuple[str, ...] = field(default_factory=tuple)
    members: Tuple[str, ...] = field(default_factory=tuple)
    member_keys: Tuple[str, ...] = field(default_factory=tuple)
    message: Optional[str] = None
    error_code: Optional[str] = None


@dataclass(frozen=True)
class OutgoingLinksView:
    """Raw outgoing link strings of the focal record, sorted."""
    view_id: str
    title: str
    availability: AvailabilityState
    record_key: Optional[str] = None
    links: Tuple[str, ...] = field(default_factory=tuple)
    message: Optional[str] = None
    error_code: Optional[str] = None


@dataclass(frozen=True)
class OutgoingGraphView:
    """Resolved outgoing references of the focal record and their layout."""
    view_id: str
    title: str
    availability: AvailabilityState
    record_key: Optional[str] = None
    links: Tuple[ResolvedLink, ...] = field(default_factory=tuple)
    layout: Optional[RadialLayout] = None
    message: Optional[str] = None
    error_code: Optional[str] = None


def _missing(view_cls, view_id: str, error: Error):
    return view_cls(
        view_id=view_id,
        title=VIEW_TITLES[view_id],
        availability=AvailabilityState.MISSING,
        message=error.message,
        error_code=error.code.name,
    )


def unavailable_view(view_id: str, error: Error):
    """Fallback view of the right type for a load or lookup failure."""
    view_cls = {
        PACK_TREE: PackTreeView,
        DEN_ROSTER: DenRosterView,
        OUTGOING_LINKS: OutgoingLinksView,
        OUTGOING_GRAPH: OutgoingGraphView,
    }[view_id]
    return _missing(view_cls, view_id, error)


class ViewBuilder:
    """
    Builds every view from one RecordSet.

    Stateless between calls: indices are rebuilt from the snapshot each time.
    """

    def __init__(
        self,
        view_config: Optional[ViewConfig] = None,
        layout_config: Optional[LayoutConfig] = None
    ):
        self._config = view_config or ViewConfig()
        self._hierarchy = HierarchyIndexer()
        self._references = ReferenceGraphBuilder()
        self._layout = RadialLayoutEngine(layout_config)

    # =========================================================================
    # HIERARCHY VIEWS
    # =========================================================================

    def pack_tree(self, record_set: RecordSet) -> PackTreeView:
        root = record_set.first_of_type(self._config.root_type)
        if root is None:
            return _missing(PackTreeView, PACK_TREE, Error.create(
                ErrorCode.ROOT_NOT_FOUND,
                f"No {self._config.root_type} record found.",
                type_id=self._config.root_type
            ))

        index = self._hierarchy.build(record_set)
        result = self._hierarchy.build_tree(index, root)
        if result.is_failure:
            cycles = self._hierarchy.find_parent_cycles(record_set)
            error = result.error
            if cycles:
                error = error.with_context("cycle", " -> ".join(cycles[0]))
            return _missing(PackTreeView, PACK_TREE, error)

        return PackTreeView(
            view_id=PACK_TREE,
            title=VIEW_TITLES[PACK_TREE],
            availability=AvailabilityState.PRESENT,
            root=result.value,
        )

    def den_roster(self, record_set: RecordSet, current: Optional[Record] = None) -> DenRosterView:
        cfg = self._config
        if current is not None and current.is_type(cfg.group_type):
            group = current
        else:
            group = record_set.first_of_type(cfg.group_type)

        if group is None:
            return _missing(DenRosterView, DEN_ROSTER, Error.create(
                ErrorCode.CATEGORY_NOT_FOUND,
                f"No {cfg.group_type} record found.",
                type_id=cfg.group_type
            ))

        leaders = []
        leader_field = group.fields.get(cfg.leaders_field)
        if isinstance(leader_field, SequenceField):
            for item in leader_field.items:
                if isinstance(item, TextField):
                    leaders.extend(extract_tokens(item.value))

        group_key = key_of(group)
        index = self._hierarchy.build(record_set)
        members = [
            child for child in index.children_of(group_key)
            if child.is_type(cfg.member_type)
        ]

        return DenRosterView(
            view_id=DEN_ROSTER,
            title=group.fields.get_text("name") or VIEW_TITLES[DEN_ROSTER],
            availability=AvailabilityState.PRESENT,
            group_key=group_key,
            leaders=tuple(leaders),
            members=tuple(display_name_of(m) for m in members),
            member_keys=tuple(key_of(m) or UNKNOWN_LABEL for m in members),
        )

    # =========================================================================
    # RELATIONSHIP VIEWS
    # =========================================================================

    def _focal(self, record_set: RecordSet, current: Optional[Record]) -> Optional[Record]:
        if current is not None:
            return current
        return record_set.records[0] if record_set.records else None

    def outgoing_links(self, record_set: RecordSet, current: Optional[Record] = None) -> OutgoingLinksView:
        focal = self._focal(record_set, current)
        if focal is None:
            return _missing(OutgoingLinksView, OUTGOING_LINKS, Error.create(
                ErrorCode.RECORD_NOT_FOUND, "No record provided."
            ))

        return OutgoingLinksView(
            view_id=OUTGOING_LINKS,
            title=VIEW_TITLES[OUTGOING_LINKS],
            availability=AvailabilityState.PRESENT,
            record_key=key_of(focal),
            links=tuple(extract_all_links(focal)),
        )

    def outgoing_graph(self, record_set: RecordSet, current: Optional[Record] = None) -> OutgoingGraphView:
        focal = self._focal(record_set, current)
        if focal is None:
            return _missing(OutgoingGraphView, OUTGOING_GRAPH, Error.create(
                ErrorCode.RECORD_NOT_FOUND, "No record provided."
            ))

        links = self._references.build_outgoing(focal, record_set)
        center_key = key_of(focal) or UNKNOWN_LABEL
        layout = self._layout.layout(
            center_key,
            display_name_of(focal),
            [
                (link.key, link.label,
                 NodeRole.KNOWN if link.status is LinkStatus.KNOWN else NodeRole.MISSING)
                for link in links
            ],
        )

        return OutgoingGraphView(
            view_id=OUTGOING_GRAPH,
            title=VIEW_TITLES[OUTGOING_GRAPH],
            availability=AvailabilityState.PRESENT,
            record_key=center_key,
            links=links,
            layout=layout,
            message=None if links else "No outgoing record links found to visualize.",
        )
