from __future__ import annotations

import json
import math
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from ..models.error_item import ErrorReason

"""Row classification for the expansion engine.

Decides whether an input row carries a usable serial number value or must be
reported as an error. Pure functions only: nothing here logs or mutates rows.

Non-text values (numbers, booleans, dates) are coerced to text and expanded
like any other value. Integral floats, which pandas produces for numeric
columns holding blanks, are rendered without the trailing ".0".
"""

__all__ = [
    "RowError",
    "Usable",
    "classify",
    "coerce_text",
    "find_identifier",
    "normalize_column_name",
    "serialize_row",
]

_NAME_SEPARATORS = re.compile(r"[\s_\-]+")


@dataclass(frozen=True)
class Usable:
    column: str  # actual column name found in the row
    value: str  # raw text, untrimmed


@dataclass(frozen=True)
class RowError:
    reason: str


def normalize_column_name(name: Any) -> str:
    """Fold case and separator variants: 'Serial Number' == 'SERIAL_NUMBER'."""
    return _NAME_SEPARATORS.sub("_", str(name).strip()).casefold()


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and value == ""


def find_identifier(row: Mapping[str, Any], aliases: Sequence[str]) -> tuple[str, Any] | None:
    """Return (column, value) for the first alias holding a non-empty value.

    Exact column names are tried first, in alias order. Only when none of
    them holds a value are case and separator variants considered, again in
    alias order.
    """
    for alias in aliases:
        if alias in row and not _is_empty(row[alias]):
            return alias, row[alias]
    for alias in aliases:
        wanted = normalize_column_name(alias)
        for column, value in row.items():
            if normalize_column_name(column) == wanted and not _is_empty(value):
                return column, value
    return None


def coerce_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def classify(row: Mapping[str, Any], aliases: Sequence[str]) -> Usable | RowError:
    hit = find_identifier(row, aliases)
    if hit is None:
        return RowError(ErrorReason.MISSING_IDENTIFIER.value)
    column, value = hit
    return Usable(column=column, value=coerce_text(value))


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def _json_safe(value: Any) -> Any:
    # json.dumps would emit bare NaN, which is not valid JSON
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


def serialize_row(row: Mapping[str, Any]) -> str:
    """Serialize a row for error reporting (non-ASCII kept as is)."""
    safe = {str(k): _json_safe(v) for k, v in row.items()}
    return json.dumps(safe, ensure_ascii=False, default=_json_default)
