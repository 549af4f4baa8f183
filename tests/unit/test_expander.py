from __future__ import annotations

import pytest

from serial_splitter.models.delimiter_rule import DEFAULT_RULES, DelimiterRule
from serial_splitter.services.expander import (
    HYPHEN_RANGE,
    TO_RANGE,
    RangeMatch,
    expand,
    match_range,
    select_delimiter,
)

"""Unit tests for serial number value expansion."""

COL = "SERIAL_NUMBER"


def _ids(value: str, rules=DEFAULT_RULES) -> list[str]:
    row = {COL: value, "model": "X-1"}
    return [r[COL] for r in expand(value, row, COL, rules).rows]


@pytest.mark.parametrize(
    "text,expected",
    [
        ("S1 to S3", RangeMatch(TO_RANGE, 1, 3)),
        ("s1 TO s3", RangeMatch(TO_RANGE, 1, 3)),
        ("S1   to\tS3", RangeMatch(TO_RANGE, 1, 3)),
        ("S4-S6", RangeMatch(HYPHEN_RANGE, 4, 6)),
        ("S4 - S6", RangeMatch(HYPHEN_RANGE, 4, 6)),
        ("S7 to S7", RangeMatch(TO_RANGE, 7, 7)),
        ("S001 to S003", RangeMatch(TO_RANGE, 1, 3)),
    ],
)
def test_match_range_ascending(text: str, expected: RangeMatch):
    assert match_range(text) == expected


@pytest.mark.parametrize("text", ["S5 to S2", "S9-S1", "S1to S3", "S1 to S3 ", "A1 to A3", "S1 to", "S1,S2"])
def test_match_range_rejects(text: str):
    assert match_range(text) is None


def test_range_members_drop_leading_zeros():
    assert RangeMatch(TO_RANGE, 8, 10).members() == ["S8", "S9", "S10"]


def test_whole_value_to_range():
    assert _ids("S1 to S3") == ["S1 to S3", "S1", "S2", "S3"]


def test_whole_value_hyphen_range():
    exp = expand("S10-S11", {COL: "S10-S11"}, COL)
    assert [r[COL] for r in exp.rows] == ["S10-S11", "S10", "S11"]
    assert exp.delimiter is None
    assert exp.ranges == [HYPHEN_RANGE]


def test_descending_range_is_inert():
    exp = expand("S5 to S2", {COL: "S5 to S2"}, COL)
    assert [r[COL] for r in exp.rows] == ["S5 to S2"]
    assert exp.delimiter is None
    assert exp.ranges == []


def test_descending_hyphen_range_is_inert():
    assert _ids("S5-S2") == ["S5-S2"]


def test_comma_split_with_embedded_range():
    exp = expand("A1,S1 to S2", {COL: "A1,S1 to S2"}, COL)
    assert [r[COL] for r in exp.rows] == ["A1,S1 to S2", "A1", "S1", "S2"]
    assert exp.delimiter == "comma"
    assert exp.ranges == [TO_RANGE]


def test_descending_range_token_emitted_literally():
    assert _ids("A1,S3 to S1") == ["A1,S3 to S1", "A1", "S3 to S1"]


def test_comma_has_priority_over_space():
    assert _ids("A1,A2 A3") == ["A1,A2 A3", "A1", "A2 A3"]


def test_empty_tokens_dropped():
    assert _ids("A1,,A2") == ["A1,,A2", "A1", "A2"]
    assert _ids(",A1,") == [",A1,", "A1"]


def test_tokens_are_trimmed():
    assert _ids(" A1 ;  A2 ") == [" A1 ;  A2 ", "A1", "A2"]


@pytest.mark.parametrize(
    "value,rule_name",
    [
        ("A1、A2", "ideographic comma"),
        ("A1，A2", "fullwidth comma"),
        ("A1;A2", "semicolon"),
        ("A1；A2", "fullwidth semicolon"),
        ("A1 A2", "space"),
    ],
)
def test_each_builtin_delimiter(value: str, rule_name: str):
    exp = expand(value, {COL: value}, COL)
    assert exp.delimiter == rule_name
    assert [r[COL] for r in exp.rows] == [value, "A1", "A2"]


def test_priority_order_first_rule_present_wins():
    # comma precedes semicolon in the default list
    exp = expand("A1;A2,A3", {COL: "A1;A2,A3"}, COL)
    assert exp.delimiter == "comma"
    assert [r[COL] for r in exp.rows] == ["A1;A2,A3", "A1;A2", "A3"]


def test_space_not_used_when_range_separator_present():
    assert _ids("S5 to S2 X") == ["S5 to S2 X"]
    assert _ids("A1 B-2") == ["A1 B-2"]


def test_space_used_when_to_is_part_of_a_word():
    assert _ids("Photo1 Photo2") == ["Photo1 Photo2", "Photo1", "Photo2"]


def test_passthrough_without_delimiter_or_range():
    row = {COL: "X9", "qty": 3, "note": None}
    exp = expand("X9", row, COL)
    assert exp.rows == [row]
    assert exp.rows[0] is not row
    assert exp.delimiter is None


def test_source_row_not_mutated_and_other_columns_copied():
    row = {"model": "M", COL: "A1,A2", "qty": 2}
    exp = expand("A1,A2", row, COL)
    assert row == {"model": "M", COL: "A1,A2", "qty": 2}
    for out in exp.rows:
        assert list(out.keys()) == ["model", COL, "qty"]
        assert out["model"] == "M" and out["qty"] == 2


def test_only_the_found_column_is_rewritten():
    row = {"serial number": "A1,A2"}
    exp = expand("A1,A2", row, "serial number")
    assert [r["serial number"] for r in exp.rows] == ["A1,A2", "A1", "A2"]
    assert all(set(r) == {"serial number"} for r in exp.rows)


def test_custom_regex_rule():
    rules = (DelimiterRule("pipe", r"\|", regex=True), DelimiterRule("space", " "))
    assert _ids("A1|A2", rules) == ["A1|A2", "A1", "A2"]


def test_select_delimiter_none():
    assert select_delimiter("A1", DEFAULT_RULES) is None


def test_select_delimiter_skips_leading_fallback_rule():
    rules = (DelimiterRule("space", " "), DelimiterRule("comma", ","))
    rule = select_delimiter("A1, A2", rules)
    assert rule is not None and rule.name == "comma"
