from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..models.error_item import ErrorItem

"""Error log buffering.

- JSON Lines, fixed key set: timestamp, file, sheet, row, content, reason
- One file per run: logs/errors-YYYYMMDD-HHMMSS.log (UTC), created on first flush
- Serial use only
"""

__all__ = [
    "ErrorItem",
    "ErrorLogBuffer",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    """In-memory buffer of row errors for one workbook/sheet. Flush appends JSON Lines."""

    def __init__(self, file: str, sheet: str, logs_dir: Path | None = None) -> None:
        self.file = file
        self.sheet = sheet
        self._logs_dir = logs_dir or LOGS_DIR
        self._items: list[ErrorItem] = []
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"errors-{stamp}.log"
        return self._file_path

    def append(self, item: ErrorItem) -> None:
        self._items.append(item)

    def extend(self, items: list[ErrorItem]) -> None:
        self._items.extend(items)

    def __len__(self) -> int:  # pragma: no cover (trivial)
        return len(self._items)

    def flush(self) -> Path | None:
        """Write buffered items; returns the log path, or None when nothing was buffered."""
        if not self._items:
            return None
        fp = self.file_path
        with fp.open("a", encoding="utf-8") as f:
            for item in self._items:
                f.write(item.to_json_line(self.file, self.sheet) + "\n")
        self._items.clear()
        return fp
