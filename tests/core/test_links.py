"""
Link Extraction Tests
=====================

Token syntax, ordering and the structural walk over nested fields.
"""

import pytest

from packviz.contracts.records import (
    MappingField, ScalarField, SequenceField, TextField
)
from packviz.core.links import extract_tokens, extract_all_links, fold_field
from tests.fixtures import make_record, pack_record_set


class TestExtractTokens:

    def test_tokens_in_order_of_appearance(self):
        assert extract_tokens("a [[x:1]] b [[y:2]] c") == ["x:1", "y:2"]

    def test_no_links(self):
        assert extract_tokens("no links here") == []

    def test_unterminated_marker(self):
        assert extract_tokens("[[unterminated") == []

    def test_tokens_are_trimmed(self):
        assert extract_tokens("[[  pack:1 ]]") == ["pack:1"]

    def test_duplicates_are_preserved(self):
        assert extract_tokens("[[a:1]] [[b:2]] [[a:1]]") == ["a:1", "b:2", "a:1"]

    def test_free_text_annotations_are_captured(self):
        assert extract_tokens("see [[bring tents]]") == ["bring tents"]

    def test_first_closing_marker_ends_the_token(self):
        assert extract_tokens("[[outer [[inner]] tail]]") == ["outer [[inner"]

    def test_closing_bracket_cannot_appear_inside_a_token(self):
        assert extract_tokens("[[a] ]]") == []
        assert extract_tokens("[[a]]]") == ["a"]
        assert extract_tokens("[[x] [[y:1]]") == ["y:1"]

    def test_tokens_may_span_lines(self):
        assert extract_tokens("[[line one\nline two]]") == ["line one\nline two"]

    def test_blank_tokens_are_dropped(self):
        assert extract_tokens("[[   ]] [[a:1]]") == ["a:1"]

    @pytest.mark.parametrize("value", [None, "", 12, ["[[a:1]]"]])
    def test_non_text_input(self, value):
        assert extract_tokens(value) == []


class TestFoldField:

    def test_depth_first_order(self):
        field = MappingField((
            ("a", TextField("1")),
            ("b", SequenceField((
                TextField("2"),
                MappingField((("c", TextField("3")),)),
                ScalarField(None),
            ))),
            ("d", TextField("4")),
        ))
        assert fold_field(field, lambda text: [text]) == ["1", "2", "3", "4"]

    def test_scalars_contribute_nothing(self):
        assert fold_field(ScalarField(3.5), lambda text: [text]) == []

    def test_unknown_variant_is_a_programming_error(self):
        with pytest.raises(TypeError):
            fold_field("not a field", lambda text: [text])


class TestExtractAllLinks:

    def test_body_and_nested_fields_sorted_and_unique(self):
        event = pack_record_set().get("event:campout")

        assert extract_all_links(event) == [
            "adult:jane",
            "bring tents",
            "den:bear",
            "den:wolf",
            "item:tent",
            "scout:zed",
        ]

    def test_duplicates_across_body_and_fields_collapse(self):
        record = make_record(body="[[a:1]]", fields={"x": ["[[a:1]]", "[[b:2]]"]})
        assert extract_all_links(record) == ["a:1", "b:2"]

    def test_non_string_leaves_are_skipped(self):
        record = make_record(fields={"n": 1, "flag": True, "nothing": None, "deep": [[[3]]]})
        assert extract_all_links(record) == []

    def test_record_without_body_or_fields(self):
        assert extract_all_links(make_record()) == []
        assert extract_all_links(None) == []
