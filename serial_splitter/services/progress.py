from __future__ import annotations

import sys
from collections.abc import Iterable, Iterator
from typing import TypeVar

from tqdm import tqdm

"""Progress display with tqdm (TTY only).

Rows are wrapped in a tqdm iterator when stdout is a terminal. In non-TTY
environments (CI, redirected output) the iterable is returned untouched so
that no ANSI control sequences end up in logs.
"""

__all__ = [
    "is_tty_enabled",
    "track_rows",
]

T = TypeVar("T")


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


def track_rows(rows: Iterable[T], total: int | None = None, *, description: str = "Expanding rows") -> Iterator[T]:
    """Yield ``rows`` unchanged, updating a progress bar on a TTY.

    Args:
        rows: Rows to iterate
        total: Number of rows, when known
        description: Progress bar label
    """
    if not is_tty_enabled():
        yield from rows
        return
    yield from tqdm(
        rows,
        total=total,
        desc=description,
        unit="row",
        leave=False,
        ncols=80,  # Standard width for consistency
        ascii=True,
    )
