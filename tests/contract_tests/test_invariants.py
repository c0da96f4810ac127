"""
Property Tests for Derivation Contracts
Verifies ordering, extraction and layout invariants over generated input.
"""

import math
import string

from hypothesis import given, strategies as st
from hypothesis.strategies import composite

from packviz.contracts.records import Record, to_field
from packviz.core.hierarchy import HierarchyIndexer
from packviz.core.keys import RecordSet, key_of, is_reference_token
from packviz.core.links import extract_tokens, extract_all_links
from packviz.core.references import ReferenceGraphBuilder
from packviz.visualization.layout import NodeRole, RadialLayoutEngine

# =============================================================================
# STRATEGIES (Generators)
# =============================================================================

SAFE = string.ascii_letters + string.digits + "_-"

key_parts = st.text(alphabet=SAFE, min_size=1, max_size=6).filter(lambda s: s[0].isalnum())


@composite
def reference_keys(draw):
    return f"{draw(key_parts)}:{draw(key_parts)}"


@composite
def record_snapshots(draw):
    """Records with unique keys, parents drawn from the same key pool."""
    keys = draw(st.lists(reference_keys(), min_size=1, max_size=12, unique=True))
    records = []
    for key in keys:
        type_id, record_id = key.split(":")
        parent = draw(st.one_of(st.none(), st.sampled_from(keys)))
        links = draw(st.lists(st.sampled_from(keys + ["ghost:1"]), max_size=3))
        records.append(Record(
            type_id=type_id,
            record_id=record_id,
            parent=parent,
            body=" ".join(f"[[{link}]]" for link in links),
        ))
    return records


json_leaves = st.one_of(st.none(), st.booleans(), st.integers(), st.text(max_size=20))
json_values = st.recursive(
    json_leaves,
    lambda children: st.one_of(
        st.lists(children, max_size=4),
        st.dictionaries(st.text(max_size=5), children, max_size=4),
    ),
    max_leaves=20,
)


# =============================================================================
# PROPERTY TESTS
# =============================================================================

@given(record_snapshots(), st.randoms())
def test_children_sorted_and_order_independent(records, rnd):
    """Buckets are strictly ascending by key and ignore input order."""
    indexer = HierarchyIndexer()
    index = indexer.build(records)

    for parent in index.parent_keys():
        child_keys = [key_of(c) for c in index.children_of(parent)]
        assert child_keys == sorted(child_keys)
        assert len(set(child_keys)) == len(child_keys)

    shuffled = list(records)
    rnd.shuffle(shuffled)
    assert indexer.build(shuffled) == index


bracket_heavy_text = st.text(alphabet=st.sampled_from("[]ab: \n"), max_size=30)


@given(st.one_of(st.text(), bracket_heavy_text))
def test_token_round_trip(text):
    """Every extracted token re-wrapped in [[ ]] parses back to itself."""
    for token in extract_tokens(text):
        assert extract_tokens(f"[[{token}]]") == [token]


@given(st.one_of(st.text(), bracket_heavy_text))
def test_extracted_tokens_are_trimmed_and_closed(text):
    for token in extract_tokens(text):
        assert token == token.strip()
        assert token
        assert "]" not in token


@given(json_values)
def test_field_walk_never_fails(value):
    """Arbitrary JSON-like fields are walked without error."""
    record = Record(type_id="t", record_id="1", fields=to_field({"v": value}))
    links = extract_all_links(record)
    assert links == sorted(set(links))


@given(record_snapshots())
def test_outgoing_links_are_sorted_references(records):
    record_set = RecordSet.from_records(records)
    builder = ReferenceGraphBuilder()

    for record in records:
        links = builder.build_outgoing(record, record_set)
        link_keys = [link.key for link in links]
        assert link_keys == sorted(set(link_keys))
        for link in links:
            assert is_reference_token(link.key)
            assert link.is_known == (link.key in record_set.by_key)


@given(st.integers(min_value=0, max_value=40))
def test_satellites_evenly_spaced(count):
    satellites = [(f"n:{i}", f"N{i}", NodeRole.KNOWN) for i in range(count)]
    layout = RadialLayoutEngine().layout("c:1", "C", satellites)

    assert len(layout.satellites) == count
    for i, node in enumerate(layout.satellites):
        assert math.isclose(node.angle, 2 * math.pi * i / max(1, count))
        assert math.isclose(math.hypot(node.x - 340, node.y - 210), 0.33 * 420)
