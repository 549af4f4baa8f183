from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import Any

from .error_item import ErrorItem

"""Processing result models for the serial number expansion tool.

ProcessedResult is the single value handed to every consumer of a run: the
summary line, the preview table, the error log and the workbook writer.
"""

__all__ = [
    "DelimiterStat",
    "ProcessedResult",
    "StatTally",
]


@dataclass(frozen=True)
class DelimiterStat:
    """Number of rows split by one delimiter (or expanded by one range form)."""
    name: str
    value: int


@dataclass(frozen=True)
class ProcessedResult:
    """Aggregated outcome of one expansion run.

    ``rows`` may be a capped slice (see ``preview``); ``final_row_count`` is
    always the uncapped number of output rows.
    """
    total: int  # input rows, error rows included
    processed_rows: int  # output rows produced
    delimiter_stats: list[DelimiterStat] = field(default_factory=list)  # non-zero only
    range_stats: list[DelimiterStat] = field(default_factory=list)  # non-zero only
    errors: list[ErrorItem] = field(default_factory=list)
    rows: list[dict[str, Any]] = field(default_factory=list)
    final_row_count: int = 0

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def usable_rows(self) -> int:
        return self.total - len(self.errors)

    @property
    def is_capped(self) -> bool:
        return len(self.rows) < self.final_row_count

    def preview(self, limit: int) -> ProcessedResult:
        """Return a copy whose rows are capped to ``limit`` entries."""
        if limit < 0:
            raise ValueError(f"preview limit must be >= 0: {limit}")
        return replace(self, rows=self.rows[:limit])


class StatTally:
    """Helper to count delimiter (or range) usage per row.

    Keeps counts in the order labels were declared so that statistics follow
    rule priority rather than first occurrence in the sheet.
    """

    def __init__(self, labels: Iterable[str] = ()) -> None:
        self._counts: dict[str, int] = {label: 0 for label in labels}

    def add(self, label: str, count: int = 1) -> None:
        self._counts[label] = self._counts.get(label, 0) + count

    def to_stats(self) -> list[DelimiterStat]:
        return [DelimiterStat(name, n) for name, n in self._counts.items() if n > 0]
