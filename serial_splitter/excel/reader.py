from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pandas as pd

"""Workbook reader.

- Only .xlsx / .xls files under the configured size cap are accepted.
- The first row of a sheet is the header; every later non-blank row is data.
- Cells are read as objects so that text such as "NA" or "007" is never
  turned into NaN or a number. Empty cells become None.
- Blank or duplicate header cells are keyed the way spreadsheet JSON exports
  name them: "__EMPTY", "__EMPTY_1", ..., "name", "name_1", ...
  These keys are internal; the raw header cells are kept in
  ``SheetData.headers`` so the writer can reproduce the input header row.
"""

__all__ = [
    "ALLOWED_SUFFIXES",
    "SheetData",
    "SheetNotFoundError",
    "WorkbookError",
    "preview_rows",
    "read_sheet",
    "read_workbook",
    "sheet_to_rows",
    "validate_workbook_path",
]

ALLOWED_SUFFIXES = frozenset({".xlsx", ".xls"})
PREVIEW_THRESHOLD = 30
PREVIEW_ROWS = 20


class WorkbookError(Exception):
    """Raised when a workbook cannot be accepted or read."""


class SheetNotFoundError(WorkbookError):
    """Raised when the requested sheet is not in the workbook."""


@dataclass
class SheetData:
    sheet_name: str
    columns: list[str]  # unique row keys
    rows: list[dict[str, Any]]  # column name -> cell value
    headers: list[Any] = field(default_factory=list)  # header cells as read, None when blank


def validate_workbook_path(path: Path, max_bytes: int) -> None:
    if not path.exists():
        raise WorkbookError(f"file not found: {path}")
    if path.suffix.lower() not in ALLOWED_SUFFIXES:
        raise WorkbookError(f"unsupported file type (expected .xlsx/.xls): {path.name}")
    size = path.stat().st_size
    if size > max_bytes:
        raise WorkbookError(
            f"file too large: {size / 1024 / 1024:.2f}MB exceeds {max_bytes / 1024 / 1024:.0f}MB limit"
        )


def read_workbook(path: Path, target_sheets: Iterable[str] | None = None) -> dict[str, pd.DataFrame]:
    """Read a workbook returning raw (headerless) DataFrames keyed by sheet name.

    Parameters
    ----------
    path: workbook path
    target_sheets: restrict to these sheet names (None = all sheets)
    """
    wanted = set(target_sheets) if target_sheets is not None else None
    try:
        xls = pd.ExcelFile(path)
    except Exception as e:  # pandas/openpyxl/xlrd raise a wide range of types
        raise WorkbookError(f"cannot read workbook {path.name}: {e}") from e
    dfs: dict[str, pd.DataFrame] = {}
    with xls:
        for name in xls.sheet_names:
            if wanted is not None and str(name) not in wanted:
                continue
            # keep_default_na=False: only truly empty cells become NaN
            dfs[str(name)] = xls.parse(
                name, header=None, dtype=object, keep_default_na=False, na_values=[""]
            )
    return dfs


def _header_names(raw: list[Any]) -> list[str]:
    names: list[str] = []
    seen: dict[str, int] = {}
    for cell in raw:
        base = "__EMPTY" if pd.isna(cell) or str(cell).strip() == "" else str(cell).strip()
        count = seen.get(base, 0)
        seen[base] = count + 1
        names.append(base if count == 0 else f"{base}_{count}")
    return names


def sheet_to_rows(df: pd.DataFrame, sheet_name: str) -> SheetData:
    """Turn a raw DataFrame into header-keyed rows.

    Steps:
    1. An empty sheet yields no columns and no rows
    2. Row 0 is the header
    3. Rows >= 1 are data; rows where every cell is empty are skipped
    """
    if df.shape[0] == 0:
        return SheetData(sheet_name=sheet_name, columns=[], rows=[])
    raw_header = df.iloc[0].tolist()
    headers = [None if pd.isna(cell) else cell for cell in raw_header]
    columns = _header_names(raw_header)
    rows: list[dict[str, Any]] = []
    for _, raw in df.iloc[1:].iterrows():
        if raw.isna().all():
            continue
        rows.append({col: (None if pd.isna(val) else val) for col, val in zip(columns, raw.tolist(), strict=False)})
    return SheetData(sheet_name=sheet_name, columns=columns, rows=rows, headers=headers)


def read_sheet(path: Path, sheet_name: str | None = None) -> SheetData:
    """Read one sheet (the first one when ``sheet_name`` is None)."""
    dfs = read_workbook(path)
    if not dfs:
        raise WorkbookError(f"workbook has no sheets: {path.name}")
    if sheet_name is None:
        sheet_name = next(iter(dfs))
    elif sheet_name not in dfs:
        raise SheetNotFoundError(f"sheet '{sheet_name}' not found in {path.name} (available: {list(dfs)})")
    return sheet_to_rows(dfs[sheet_name], sheet_name)


def preview_rows(df: pd.DataFrame) -> list[list[Any]]:
    """Raw cell grid for a quick look: 20 rows when the sheet is longer than 30."""
    part = df.head(PREVIEW_ROWS) if df.shape[0] > PREVIEW_THRESHOLD else df
    return [["" if pd.isna(v) else v for v in row] for row in part.itertuples(index=False, name=None)]
