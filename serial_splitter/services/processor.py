from __future__ import annotations

import itertools
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from ..models.config_models import ExpansionConfig
from ..models.error_item import ErrorItem
from ..models.processed_result import ProcessedResult, StatTally
from .classifier import RowError, classify, serialize_row
from .expander import RANGE_KINDS, expand

"""Aggregation of per-row expansion results.

This module owns the public entry point of the expansion engine. It walks the
input rows once, in order, routes unusable rows to the error list and folds
every expansion into the running totals.

Row numbers reported in errors are worksheet positions: the 0-based data row
index plus ``ExpansionConfig.header_offset``.
"""

__all__ = [
    "process_batches",
    "process_rows",
]

logger = logging.getLogger(__name__)


def process_rows(
    rows: Iterable[Mapping[str, Any]], config: ExpansionConfig | None = None
) -> ProcessedResult:
    """Expand every row and aggregate the outcome.

    Args:
        rows: Decoded worksheet rows in sheet order (any iterable)
        config: Aliases, delimiter rules and header offset; defaults apply when None

    Returns:
        ProcessedResult with the complete, uncapped output rows
    """
    cfg = config or ExpansionConfig()
    delimiter_tally = StatTally(rule.name for rule in cfg.delimiter_rules)
    range_tally = StatTally(RANGE_KINDS)
    errors: list[ErrorItem] = []
    output: list[dict[str, Any]] = []
    total = 0

    for index, row in enumerate(rows):
        total += 1
        row_number = index + cfg.header_offset
        outcome = classify(row, cfg.identifier_aliases)
        if isinstance(outcome, RowError):
            logger.debug(f"row {row_number}: {outcome.reason}")
            errors.append(ErrorItem(row=row_number, content=serialize_row(row), reason=outcome.reason))
            continue

        expansion = expand(outcome.value, row, outcome.column, cfg.delimiter_rules)
        output.extend(expansion.rows)
        if expansion.delimiter is not None:
            delimiter_tally.add(expansion.delimiter)
        for kind in expansion.ranges:
            range_tally.add(kind)

    logger.debug(f"expanded rows={total} errors={len(errors)} output_rows={len(output)}")
    return ProcessedResult(
        total=total,
        processed_rows=len(output),
        delimiter_stats=delimiter_tally.to_stats(),
        range_stats=range_tally.to_stats(),
        errors=errors,
        rows=output,
        final_row_count=len(output),
    )


def process_batches(
    batches: Iterable[Iterable[Mapping[str, Any]]], config: ExpansionConfig | None = None
) -> ProcessedResult:
    """Process chunked input; row numbering continues across batches."""
    return process_rows(itertools.chain.from_iterable(batches), config)
