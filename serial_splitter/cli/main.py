from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import ConfigError, load_config
from ..config.rules import RuleFormatError, read_rules_file, write_rules_file
from ..excel.reader import WorkbookError, preview_rows, read_workbook, validate_workbook_path
from ..logging.init import log_summary, set_debug, setup_logging
from ..models.config_models import AppConfig
from ..services.orchestrator import ProcessingError, run_workbook
from ..services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env, then the YAML config (plus an optional imported rule file)
- Optionally export the active delimiter rules
- Expand the serial number column of one sheet and write the output workbook
- Print a SUMMARY line and exit with a code reflecting row errors
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1


def _load_env_file(path: Path) -> None:
    """Load .env so SERIAL_SPLITTER_CONFIG can be set per project directory."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=False)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Expand serial number ranges and lists in an Excel sheet")
    p.add_argument("workbook", nargs="?", type=Path, help="Source .xlsx/.xls file")
    p.add_argument("--sheet", help="Sheet to process (default: first sheet)")
    p.add_argument("--output", type=Path, help="Output workbook path")
    p.add_argument("--no-output", action="store_true", help="Do not write the output workbook")
    p.add_argument("--config", type=Path, help="YAML config file")
    p.add_argument("--rules", type=Path, help="Import delimiter rules from a JSON file")
    p.add_argument("--export-rules", type=Path, help="Export the active delimiter rules to a JSON file or directory")
    p.add_argument("--preview", action="store_true", help="Print the first output rows")
    p.add_argument("--inspect", action="store_true", help="Print sheet names and a raw preview then exit")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _inspect(path: Path, cfg: AppConfig) -> int:
    try:
        validate_workbook_path(path, cfg.max_file_bytes)
        dfs = read_workbook(path)
    except WorkbookError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    print(f"FILE: {path.name}")
    for name, df in dfs.items():
        print(f"  SHEET: {name} rows={df.shape[0]}")
        for row in preview_rows(df):
            print("    ", [v.isoformat() if hasattr(v, "isoformat") else v for v in row])
    return EXIT_SUCCESS_ALL


def _print_preview(rows: list[dict], total: int) -> None:
    print(f"PREVIEW first {len(rows)} of {total} rows")
    for row in rows:
        print("  " + json.dumps(row, ensure_ascii=False, default=str))


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # Only read sys.argv for None: tests pass [] explicitly
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.rules is not None:
        try:
            rules = read_rules_file(args.rules)
        except RuleFormatError as e:
            logger.error(f"rules: {e}")
            return EXIT_FATAL
        cfg = replace(cfg, expansion=cfg.expansion.with_rules(rules))
        logger.info(f"Imported {len(rules)} delimiter rules from {args.rules}")

    if args.export_rules is not None:
        try:
            written = write_rules_file(cfg.expansion.delimiter_rules, args.export_rules)
        except OSError as e:
            logger.error(f"export rules: {e}")
            return EXIT_FATAL
        logger.info(f"Exported delimiter rules to {written}")
        if args.workbook is None:
            return EXIT_SUCCESS_ALL

    if args.workbook is None:
        logger.error("no workbook given")
        return EXIT_FATAL

    if args.inspect:
        return _inspect(args.workbook, cfg)

    try:
        outcome = run_workbook(
            args.workbook,
            cfg,
            sheet_name=args.sheet,
            output_path=args.output,
            write_output=not args.no_output,
        )
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    result = outcome.result
    if args.preview:
        shown = result.preview(cfg.preview_limit)
        _print_preview(shown.rows, shown.final_row_count)

    for err in result.errors:
        logger.debug(f"row {err.row}: {err.reason} {err.content}")

    # log_summary adds the "SUMMARY " prefix itself
    log_summary(render_summary_line(result)[len("SUMMARY "):])

    if result.errors:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL
