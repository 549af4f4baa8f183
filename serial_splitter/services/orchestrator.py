from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ..excel.reader import WorkbookError, read_sheet, validate_workbook_path
from ..excel.writer import default_output_path, write_workbook
from ..logging.error_log import ErrorLogBuffer
from ..models.config_models import AppConfig
from ..models.processed_result import ProcessedResult
from .processor import process_rows
from .progress import track_rows

"""Service orchestration for one workbook run.

Coordinates the whole flow around the expansion engine: validate and read the
workbook, expand the selected sheet, write the error log and re-encode the
full (uncapped) output rows to a new workbook.
"""

__all__ = [
    "ProcessingError",
    "RunOutcome",
    "run_workbook",
]

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Base exception for processing errors."""


@dataclass(frozen=True)
class RunOutcome:
    source: Path
    sheet_name: str
    result: ProcessedResult
    output_path: Path | None = None
    error_log_path: Path | None = None


def run_workbook(
    path: Path,
    config: AppConfig,
    *,
    sheet_name: str | None = None,
    output_path: Path | None = None,
    write_output: bool = True,
    logs_dir: Path | None = None,
) -> RunOutcome:
    """Expand the serial number column of one sheet.

    Args:
        path: Source workbook
        config: Application configuration
        sheet_name: Sheet to process (first sheet when None)
        output_path: Target workbook (``<stem><output_suffix>.xlsx`` when None)
        write_output: Skip writing the output workbook when False
        logs_dir: Directory for the JSON Lines error log

    Raises:
        ProcessingError: the workbook cannot be read or the output cannot be written
    """
    try:
        validate_workbook_path(path, config.max_file_bytes)
        sheet = read_sheet(path, sheet_name)
    except WorkbookError as e:
        raise ProcessingError(str(e)) from e

    logger.info(f"Processing sheet '{sheet.sheet_name}' of {path.name} ({len(sheet.rows)} rows)")
    result = process_rows(track_rows(sheet.rows, total=len(sheet.rows)), config.expansion)

    error_log_path = None
    if result.errors:
        buffer = ErrorLogBuffer(path.name, sheet.sheet_name, logs_dir)
        buffer.extend(result.errors)
        error_log_path = buffer.flush()
        logger.warning(f"{result.error_count} rows could not be expanded; details in {error_log_path}")

    written = None
    if write_output:
        target = output_path or default_output_path(path, config.output_suffix)
        try:
            written = write_workbook(
                result.rows, target, sheet.sheet_name, sheet.columns, headers=sheet.headers or None
            )
        except OSError as e:
            raise ProcessingError(f"cannot write output workbook {target}: {e}") from e
        logger.info(f"Wrote {result.final_row_count} rows to {written}")

    return RunOutcome(
        source=path,
        sheet_name=sheet.sheet_name,
        result=result,
        output_path=written,
        error_log_path=error_log_path,
    )
