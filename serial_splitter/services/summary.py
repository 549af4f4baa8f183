from __future__ import annotations

from collections.abc import Sequence

from ..models.processed_result import DelimiterStat, ProcessedResult

"""SUMMARY line rendering.

Format:
    SUMMARY rows={total} errors={errors} output_rows={final_row_count}
    delimiters={name:count,...|-} ranges={name:count,...|-}

Stat names may contain spaces; they are written with underscores so the line
stays whitespace separated.
"""

__all__ = [
    "render_stats",
    "render_summary_line",
]


def render_stats(stats: Sequence[DelimiterStat]) -> str:
    if not stats:
        return "-"
    return ",".join(f"{s.name.replace(' ', '_')}:{s.value}" for s in stats)


def render_summary_line(result: ProcessedResult) -> str:
    """Render a SUMMARY line from a ProcessedResult.

    Examples:
        >>> from serial_splitter.models.processed_result import DelimiterStat, ProcessedResult
        >>> result = ProcessedResult(
        ...     total=3, processed_rows=7, delimiter_stats=[DelimiterStat("comma", 1)],
        ...     final_row_count=7,
        ... )
        >>> render_summary_line(result)
        'SUMMARY rows=3 errors=0 output_rows=7 delimiters=comma:1 ranges=-'
    """
    return (
        f"SUMMARY rows={result.total} "
        f"errors={result.error_count} "
        f"output_rows={result.final_row_count} "
        f"delimiters={render_stats(result.delimiter_stats)} "
        f"ranges={render_stats(result.range_stats)}"
    )
