from __future__ import annotations

import json
import math
from datetime import datetime

import pytest

from serial_splitter.models.config_models import DEFAULT_ALIASES
from serial_splitter.models.error_item import ErrorReason
from serial_splitter.services.classifier import (
    RowError,
    Usable,
    classify,
    coerce_text,
    find_identifier,
    normalize_column_name,
    serialize_row,
)


@pytest.mark.parametrize("name", ["SERIAL_NUMBER", "serial_number", "Serial Number", " serial  number ", "Serial-Number"])
def test_normalize_column_name_variants(name: str):
    assert normalize_column_name(name) == "serial_number"


def test_classify_usable_keeps_raw_text():
    row = {"SERIAL_NUMBER": "  A1,A2 ", "qty": 1}
    assert classify(row, DEFAULT_ALIASES) == Usable(column="SERIAL_NUMBER", value="  A1,A2 ")


def test_classify_finds_spacing_variant_column():
    row = {"serial number": "S1"}
    assert classify(row, DEFAULT_ALIASES) == Usable(column="serial number", value="S1")


def test_classify_missing_column():
    outcome = classify({"model": "M1"}, DEFAULT_ALIASES)
    assert outcome == RowError(ErrorReason.MISSING_IDENTIFIER.value)
    assert outcome.reason == "missing identifier column"


@pytest.mark.parametrize("empty", [None, "", math.nan])
def test_classify_empty_value_is_missing(empty):
    outcome = classify({"SERIAL_NUMBER": empty, "model": "M"}, DEFAULT_ALIASES)
    assert isinstance(outcome, RowError)


def test_first_non_empty_alias_wins():
    row = {"SERIAL_NUMBER": None, "Serial Number": "B7"}
    assert find_identifier(row, DEFAULT_ALIASES) == ("Serial Number", "B7")


def test_exact_alias_beats_earlier_variant_column():
    row = {"Serial Number": "later", "SERIAL_NUMBER": "first"}
    assert find_identifier(row, DEFAULT_ALIASES) == ("SERIAL_NUMBER", "first")
    assert classify(row, DEFAULT_ALIASES) == Usable(column="SERIAL_NUMBER", value="first")
    assert find_identifier(row, ("sn", "SERIAL_NUMBER")) == ("SERIAL_NUMBER", "first")
    assert find_identifier({"sn": "x", "SERIAL_NUMBER": "y"}, ("sn", "SERIAL_NUMBER")) == ("sn", "x")


def test_exact_aliases_follow_alias_order():
    row = {"Serial Number": "c", "serial_number": "b", "SERIAL_NUMBER": "a"}
    assert find_identifier(row, DEFAULT_ALIASES) == ("SERIAL_NUMBER", "a")
    row["SERIAL_NUMBER"] = None
    assert find_identifier(row, DEFAULT_ALIASES) == ("serial_number", "b")


def test_variant_match_only_after_exact_lookups_fail():
    row = {"serial-number": "v", "SN": "x"}
    assert find_identifier(row, ("SERIAL_NUMBER", "SN")) == ("SN", "x")
    assert find_identifier({"serial-number": "v"}, ("SERIAL_NUMBER", "SN")) == ("serial-number", "v")


@pytest.mark.parametrize(
    "value,expected",
    [
        ("S1", "S1"),
        (12345, "12345"),
        (12345.0, "12345"),
        (1.5, "1.5"),
        (True, "True"),
        (0, "0"),
    ],
)
def test_coerce_text(value, expected: str):
    assert coerce_text(value) == expected


def test_classify_coerces_non_text_values():
    assert classify({"SERIAL_NUMBER": 1001.0}, DEFAULT_ALIASES) == Usable("SERIAL_NUMBER", "1001")


def test_serialize_row_is_valid_json():
    row = {"SERIAL_NUMBER": None, "名前": "装置", "qty": math.nan, "at": datetime(2024, 5, 1, 8, 30)}
    text = serialize_row(row)
    assert "装置" in text
    assert json.loads(text) == {"SERIAL_NUMBER": None, "名前": "装置", "qty": None, "at": "2024-05-01T08:30:00"}
