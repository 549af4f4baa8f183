from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pandas as pd

"""Workbook writer: output rows back to a single-sheet .xlsx file."""

__all__ = [
    "default_output_path",
    "write_workbook",
]


def default_output_path(source: Path, suffix: str = "_processed") -> Path:
    return source.with_name(f"{source.stem}{suffix}.xlsx")


def write_workbook(
    rows: Sequence[dict[str, Any]],
    path: Path,
    sheet_name: str,
    columns: Sequence[str] | None = None,
    headers: Sequence[Any] | None = None,
) -> Path:
    """Write rows to ``path``; column order follows ``columns`` when given.

    ``headers`` replaces the row keys in the header row, one cell per column,
    so blank or duplicate input headers are written back as they were read.
    """
    if headers is None:
        df = pd.DataFrame(list(rows), columns=list(columns) if columns is not None else None)
        write_header = True
    else:
        if columns is None or len(headers) != len(columns):
            raise ValueError("headers need one cell per column")
        body = [[row.get(col) for col in columns] for row in rows]
        df = pd.DataFrame([list(headers), *body], dtype=object)
        write_header = False
    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=sheet_name, index=False, header=write_header)
    return path
