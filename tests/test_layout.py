"""Tests for rule-field layout reconstruction."""

import pytest

from userinput.core.errors import LayoutError
from userinput.panel.layout import (
    DISPLAY_FORMAT,
    PLAIN_STRING,
    SPECIAL_SEPARATOR,
    is_placeholder,
    parse_slots,
    reconstruct,
)


class TestPlaceholders:
    def test_three_part_token_is_placeholder(self):
        assert is_placeholder("1:4:5")
        assert is_placeholder("N:3:3")

    def test_literals_are_not_placeholders(self):
        assert not is_placeholder("-")
        assert not is_placeholder("a:b")


class TestParseSlots:
    def test_fills_indexed_slots(self):
        assert parse_slots("0:AB 1:CD", 3) == ["AB", "CD", None]

    def test_value_keeps_later_colons(self):
        assert parse_slots("0:a:b", 1) == ["a:b"]

    def test_tokens_without_colon_are_ignored(self):
        assert parse_slots("junk 1:x", 2) == [None, "x"]

    def test_out_of_range_index_raises(self):
        with pytest.raises(LayoutError):
            parse_slots("5:x", 3)

    def test_negative_index_raises(self):
        with pytest.raises(LayoutError):
            parse_slots("-1:x", 3)

    def test_non_integer_index_raises(self):
        with pytest.raises(LayoutError):
            parse_slots("a:x", 3)


class TestReconstruct:
    """Layout "1:4:5 - 2:4:5" with set "0:AB 1:CD"."""

    LAYOUT = "1:4:5 - 2:4:5"
    SET = "0:AB 1:CD"

    def test_display_format_keeps_literals(self):
        assert reconstruct(self.LAYOUT, self.SET) == "AB-CD"

    def test_explicit_display_format(self):
        assert reconstruct(self.LAYOUT, self.SET, DISPLAY_FORMAT) == "AB-CD"

    def test_special_separator_replaces_literals(self):
        result = reconstruct(self.LAYOUT, self.SET, SPECIAL_SEPARATOR, "/")
        assert result == "AB/CD"

    def test_plain_string_drops_literals(self):
        assert reconstruct(self.LAYOUT, self.SET, PLAIN_STRING) == "ABCD"

    def test_missing_slot_renders_empty(self):
        assert reconstruct(self.LAYOUT, "1:CD") == "-CD"

    def test_placeholders_consume_slots_left_to_right(self):
        layout = "N:3:3 . N:3:3 . N:3:3 . N:3:3"
        assert reconstruct(layout, "0:192 1:168 2:0 3:1") == "192.168.0.1"

    def test_special_separator_without_separator_renders_nothing(self):
        assert reconstruct(self.LAYOUT, self.SET, SPECIAL_SEPARATOR) == "ABCD"
