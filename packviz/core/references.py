"""
Reference Graph Builder
=======================

Resolves a record's outgoing `[[type:id]]` references against a snapshot.

CLASSIFICATION:
===============
- KNOWN:   token resolves to a record in the snapshot
- MISSING: token is well-formed but nothing in the snapshot matches

MISSING is a first-class result for differentiated display, not an error.
Incoming links are NOT computed here; that is the host's concern.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple
import networkx as nx

from ..contracts.records import Record
from .keys import RecordSet, key_of, display_name_of, is_reference_token
from .links import extract_all_links


class LinkStatus(Enum):
    """Resolution state of an outgoing reference."""
    KNOWN = "known"
    MISSING = "missing"


@dataclass(frozen=True)
class ResolvedLink:
    """An outgoing reference classified against the snapshot."""
    key: str
    label: str
    status: LinkStatus

    @property
    def is_known(self) -> bool:
        return self.status is LinkStatus.KNOWN


class ReferenceGraphBuilder:
    """
    Combines extraction and key resolution.

    Output order is the sorted token order, independent of the order in
    which the snapshot lists its records.
    """

    def build_outgoing(
        self,
        focal: Optional[Record],
        record_set: RecordSet
    ) -> Tuple[ResolvedLink, ...]:
        if focal is None:
            return ()

        tokens = sorted(t for t in extract_all_links(focal) if is_reference_token(t))

        resolved = []
        for token in tokens:
            target = record_set.get(token)
            if target is not None:
                resolved.append(ResolvedLink(token, display_name_of(target), LinkStatus.KNOWN))
            else:
                resolved.append(ResolvedLink(token, token, LinkStatus.MISSING))
        return tuple(resolved)

    def build_graph(self, record_set: RecordSet) -> nx.DiGraph:
        """
        Directed reference graph of the whole snapshot.

        Nodes carry `label` and `status`; unresolved targets are added as
        MISSING nodes so dangling references stay visible.
        """
        graph = nx.DiGraph()

        for key in sorted(record_set.by_key):
            record = record_set.by_key[key]
            graph.add_node(key, label=display_name_of(record), status=LinkStatus.KNOWN.value)

        for key in sorted(record_set.by_key):
            for link in self.build_outgoing(record_set.by_key[key], record_set):
                if link.key not in graph:
                    graph.add_node(link.key, label=link.label, status=link.status.value)
                graph.add_edge(key, link.key)

        return graph

    def missing_targets(self, record_set: RecordSet) -> Tuple[str, ...]:
        """Sorted keys referenced somewhere in the snapshot but not present."""
        graph = self.build_graph(record_set)
        return tuple(sorted(
            node for node, status in graph.nodes(data="status")
            if status == LinkStatus.MISSING.value
        ))
