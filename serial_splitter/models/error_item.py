from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from enum import Enum

"""ErrorItem model for rows that cannot be expanded.

An ErrorItem is produced for every input row whose identifier value is
unusable. Errors are collected alongside the successful output and never
abort processing of the remaining rows.

Row numbers follow the worksheet: with the header on the first line the
first data row is reported as row 2.
"""

__all__ = [
    "ErrorItem",
    "ErrorReason",
]


class ErrorReason(str, Enum):
    MISSING_IDENTIFIER = "missing identifier column"
    # Part of the taxonomy; the coercing classifier does not emit it
    NON_TEXT_IDENTIFIER = "non-text identifier value"


@dataclass(frozen=True)
class ErrorItem:
    """Structured row-level error.

    Attributes:
        row: Worksheet row number (1-based, header offset applied)
        content: Serialized row (JSON text)
        reason: Human readable reason, one of ErrorReason values
    """
    row: int
    content: str
    reason: str

    def to_dict(self) -> dict[str, object]:
        return asdict(self)

    def to_json_line(self, file: str, sheet: str) -> str:
        """Serialize for the JSON Lines error log.

        Parameters:
            file: Workbook filename the row came from
            sheet: Sheet name within the workbook

        Returns:
            JSON string with a fixed key set (timestamp, file, sheet, row, content, reason)
        """
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        payload = {"timestamp": ts, "file": file, "sheet": sheet, **asdict(self)}
        return json.dumps(payload, ensure_ascii=False)
