from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from src.config.loader import DEFAULT_CONFIG_PATH, ConfigError, build_kind_specs, load_config
from src.excel.reader import SheetReadError, iter_raw_rows, read_grid
from src.logging.init import log_summary, setup_logging
from src.models.config_models import ImportConfig, RecordKind
from src.services.header_locator import locate_header
from src.services.orchestrator import ProcessingError, process_all, resolve_kind, scan_excel_files
from src.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env (override) and the YAML config (LEDGER_IMPORT_CONFIG or --config)
- Import every .xlsx workbook in source_directory
- Print one line per workbook and the SUMMARY line

Exit codes: 0 every workbook imported, 2 some workbook failed or had no valid
records, 1 fatal (config / directory).
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1

CONFIG_ENV_VAR = "LEDGER_IMPORT_CONFIG"


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv; values override the process environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Ledger sheet importer (payments / incomes)")
    p.add_argument("--config", type=Path, default=None, help="Path to import.yml")
    p.add_argument(
        "--kind",
        choices=[k.value for k in RecordKind],
        default=None,
        help="Record kind for every workbook (overrides kind_patterns)",
    )
    p.add_argument("--dry-run", action="store_true", help="Validate only, do not write output files")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print detected header & first rows then exit")
    return p.parse_args(argv)


def _inspect_data(cfg: ImportConfig, kind_override: RecordKind | None) -> int:
    try:
        files = scan_excel_files(Path(cfg.source_directory))
    except ProcessingError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    if not files:
        print("inspect: no .xlsx files")
        return EXIT_SUCCESS_ALL
    specs = build_kind_specs(cfg)
    for f in files:
        kind = resolve_kind(f, cfg, kind_override)
        print(f"FILE: {f.name} kind={kind.value}")
        try:
            grid = read_grid(f, sheet=cfg.sheet)
        except SheetReadError as e:
            print(f"  read_error: {e}")
            continue
        header_index = locate_header(grid, specs[kind].expected_headers, scan_limit=cfg.header_scan_rows)
        if header_index is None:
            print("  header: not found (positional columns)")
        else:
            print(f"  header: row {header_index + 1} {grid[header_index]}")
        for row in list(iter_raw_rows(grid, header_index))[:3]:
            safe = {k: (v.isoformat() if hasattr(v, "isoformat") else v) for k, v in row.values.items()}
            print(f"    row {row.row_number}: {safe}")
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみシステム引数を読む ([] はテストからの明示的な空引数)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    config_path = args.config or Path(os.getenv(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.debug:
        for h in logger.handlers:
            h.setLevel("DEBUG")
        logger.setLevel("DEBUG")
        logger.debug("debug mode enabled")

    kind_override = RecordKind(args.kind) if args.kind else None
    if args.inspect_data:
        return _inspect_data(cfg, kind_override)

    directory = Path(cfg.source_directory)
    if not directory.exists():
        logger.error(f"directory not found: {directory}")
        return EXIT_FATAL
    logger.info(f"Importing workbooks from: {directory}")

    try:
        result = process_all(cfg, kind_override=kind_override, dry_run=args.dry_run)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    # log_summary adds the "SUMMARY " label itself
    log_summary(render_summary_line(result)[len("SUMMARY "):])

    if result.failed_files or result.empty_files:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
