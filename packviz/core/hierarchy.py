"""
Hierarchy Indexer
=================

Parent -> children index over one record snapshot.

DETERMINISM:
============
Each bucket is sorted by child key with ordinary string comparison, so the
index (and every outline rendered from it) is identical for any permutation
of the input records.

CYCLES:
=======
Parent pointers are expected to form a forest. A record that reappears on
its own ancestor path during tree rendering is reported as a structural
error (CYCLIC_PARENT_CHAIN) instead of recursing without bound.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Set, Tuple
import networkx as nx

from ..contracts.base import Error, ErrorCode, Result
from ..contracts.records import Record
from .keys import key_of, display_name_of, UNKNOWN_LABEL


@dataclass(frozen=True)
class ChildIndex:
    """Immutable mapping of parent key -> children sorted by key."""
    buckets: Mapping[str, Tuple[Record, ...]] = field(default_factory=dict)

    def children_of(self, key: Optional[str]) -> Tuple[Record, ...]:
        if key is None:
            return ()
        return self.buckets.get(key, ())

    def parent_keys(self) -> List[str]:
        return sorted(self.buckets)


@dataclass(frozen=True)
class TreeNode:
    """One (key, label) entry of a nested outline."""
    key: str
    label: str
    children: Tuple[TreeNode, ...] = field(default_factory=tuple)

    def walk(self) -> Iterator[TreeNode]:
        """Depth-first, pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


def _sort_key(record: Record) -> str:
    return key_of(record) or ""


class HierarchyIndexer:
    """
    Builds and queries the parent -> children mapping.

    Stateless: every call works on the records it is given.
    """

    def build(self, records: Iterable[Record]) -> ChildIndex:
        """Bucket every record with a parent pointer under that parent's key."""
        buckets: Dict[str, List[Record]] = {}
        for record in records:
            if not record.parent:
                continue
            buckets.setdefault(record.parent, []).append(record)

        return ChildIndex(buckets={
            parent: tuple(sorted(children, key=_sort_key))
            for parent, children in buckets.items()
        })

    def children_of(self, index: ChildIndex, key: Optional[str]) -> Tuple[Record, ...]:
        """Children of `key`; empty when the key is absent."""
        return index.children_of(key)

    def build_tree(self, index: ChildIndex, root: Record) -> Result:
        """
        Render the nested outline below `root`.

        Returns Result.success(TreeNode) or Result.failure with
        CYCLIC_PARENT_CHAIN when a record is its own ancestor.

        Depth-first with an explicit stack, so chain depth is bounded by
        memory rather than by the interpreter's recursion limit.
        """
        root_key = key_of(root)
        if root_key is None:
            # Keyless records cannot own children
            return Result.success(TreeNode(key=UNKNOWN_LABEL, label=display_name_of(root)))

        path: Set[str] = {root_key}
        stack: List[Tuple[Record, str, Iterator[Record], List[TreeNode]]] = [
            (root, root_key, iter(index.children_of(root_key)), [])
        ]
        while stack:
            record, key, pending, built = stack[-1]
            child = next(pending, None)

            if child is None:
                stack.pop()
                path.discard(key)
                node = TreeNode(key=key, label=display_name_of(record), children=tuple(built))
                if not stack:
                    return Result.success(node)
                stack[-1][3].append(node)
                continue

            child_key = key_of(child)
            if child_key is None:
                built.append(TreeNode(key=UNKNOWN_LABEL, label=display_name_of(child)))
                continue
            if child_key in path:
                return Result.failure(Error.create(
                    ErrorCode.CYCLIC_PARENT_CHAIN,
                    f"Cyclic parent chain through {child_key}",
                    record_key=child_key
                ))

            path.add(child_key)
            stack.append((child, child_key, iter(index.children_of(child_key)), []))

    def find_parent_cycles(self, records: Iterable[Record]) -> List[List[str]]:
        """
        All cycles formed by parent pointers.

        Each cycle starts at its smallest key; the list is sorted.
        """
        graph = nx.DiGraph()
        for record in records:
            key = key_of(record)
            if key and record.parent:
                graph.add_edge(key, record.parent)

        cycles = []
        for cycle in nx.simple_cycles(graph):
            start = cycle.index(min(cycle))
            cycles.append(cycle[start:] + cycle[:start])
        return sorted(cycles)
