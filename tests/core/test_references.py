"""
Reference Graph Tests
=====================

Known/missing classification of outgoing references and the snapshot-wide
directed reference graph.
"""

import networkx as nx

from packviz.core.keys import RecordSet
from packviz.core.references import LinkStatus, ResolvedLink, ReferenceGraphBuilder
from tests.fixtures import make_record, pack_record_set


class TestBuildOutgoing:

    def test_known_and_missing_sorted_by_key(self):
        pack = make_record("pack", "1", fields={"name": "Troop Alpha"})
        focal = make_record("note", "1", body="see [[pack:1]] and [[missing:9]]")
        record_set = RecordSet.from_records([pack, focal])

        links = ReferenceGraphBuilder().build_outgoing(focal, record_set)

        assert links == (
            ResolvedLink("missing:9", "missing:9", LinkStatus.MISSING),
            ResolvedLink("pack:1", "Troop Alpha", LinkStatus.KNOWN),
        )

    def test_free_text_tokens_are_not_references(self):
        record_set = pack_record_set()
        links = ReferenceGraphBuilder().build_outgoing(record_set.get("event:campout"), record_set)

        assert [(l.key, l.label, l.status) for l in links] == [
            ("adult:jane", "Jane Doe", LinkStatus.KNOWN),
            ("den:bear", "Bear Den", LinkStatus.KNOWN),
            ("den:wolf", "Wolf Den", LinkStatus.KNOWN),
            ("item:tent", "item:tent", LinkStatus.MISSING),
            ("scout:zed", "scout:zed", LinkStatus.MISSING),
        ]
        assert "bring tents" not in [l.key for l in links]

    def test_independent_of_snapshot_order(self):
        records = list(pack_record_set())
        focal = records[-1]
        builder = ReferenceGraphBuilder()

        forward = builder.build_outgoing(focal, RecordSet.from_records(records))
        backward = builder.build_outgoing(focal, RecordSet.from_records(reversed(records)))

        assert forward == backward

    def test_no_focal_record(self):
        assert ReferenceGraphBuilder().build_outgoing(None, pack_record_set()) == ()

    def test_is_known(self):
        assert ResolvedLink("a:1", "A", LinkStatus.KNOWN).is_known
        assert not ResolvedLink("a:1", "a:1", LinkStatus.MISSING).is_known


class TestBuildGraph:

    def test_directed_graph_with_missing_nodes(self):
        graph = ReferenceGraphBuilder().build_graph(pack_record_set())

        assert isinstance(graph, nx.DiGraph)
        assert graph.has_edge("event:campout", "den:wolf")
        assert graph.has_edge("scout:cal", "scout:amy")
        assert not graph.has_edge("scout:amy", "scout:cal")
        assert graph.nodes["scout:zed"]["status"] == "missing"
        assert graph.nodes["den:wolf"]["status"] == "known"
        assert graph.nodes["den:wolf"]["label"] == "Wolf Den"
        assert "bring tents" not in graph

    def test_parent_pointers_are_not_references(self):
        graph = ReferenceGraphBuilder().build_graph(pack_record_set())
        assert not graph.has_edge("den:wolf", "pack:1")

    def test_missing_targets(self):
        assert ReferenceGraphBuilder().missing_targets(pack_record_set()) == (
            "adult:raj", "item:tent", "scout:zed"
        )
