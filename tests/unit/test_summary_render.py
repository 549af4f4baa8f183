from __future__ import annotations

import re

from serial_splitter.models.processed_result import DelimiterStat, ProcessedResult
from serial_splitter.services.processor import process_rows
from serial_splitter.services.summary import render_stats, render_summary_line

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY rows=([0-9]+) errors=([0-9]+) output_rows=([0-9]+) "
    r"delimiters=(-|[\w]+:[0-9]+(?:,[\w]+:[0-9]+)*) ranges=(-|[\w]+:[0-9]+(?:,[\w]+:[0-9]+)*)$"
)


def test_render_summary_line_from_run():
    result = process_rows(
        [{"SERIAL_NUMBER": "S1 to S3"}, {"SERIAL_NUMBER": "A1，A2"}, {"other": 1}]
    )
    line = render_summary_line(result)
    m = SUMMARY_PATTERN.match(line)
    assert m, line
    assert m.group(1) == "3"
    assert m.group(2) == "1"
    assert m.group(3) == "7"
    assert m.group(4) == "fullwidth_comma:1"
    assert m.group(5) == "to_range:1"


def test_render_summary_line_no_stats():
    line = render_summary_line(ProcessedResult(total=0, processed_rows=0))
    assert line == "SUMMARY rows=0 errors=0 output_rows=0 delimiters=- ranges=-"


def test_render_stats_joins_in_order():
    assert render_stats([DelimiterStat("comma", 2), DelimiterStat("space", 1)]) == "comma:2,space:1"
