from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from decimal import Decimal
from fnmatch import fnmatch
from pathlib import Path
from typing import Any

from ..config.loader import build_kind_specs
from ..excel.reader import SheetReadError, read_grid
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.config_models import ImportConfig, RecordKind, RecordKindSpec
from ..models.error_record import FILE_LEVEL_ROW
from ..models.processing_result import FileStat, FileStatus, ProcessingResult
from ..models.records import Income, Payment
from .pipeline import run_import
from .progress import ProgressTracker
from .summary import render_file_line

"""Directory orchestration for the ledger sheet importer.

Scans the configured directory for workbooks, imports each with the record
kind chosen for it, writes accepted records as JSON Lines for the storage
side, buffers rejections into the error log and aggregates a ProcessingResult.
An unreadable workbook fails on its own; the run continues with the next one.
"""

__all__ = [
    "ProcessingError",
    "scan_excel_files",
    "resolve_kind",
    "write_records",
    "process_all",
]

logger = logging.getLogger("ledger_importer.orchestrator")


class ProcessingError(Exception):
    """Fatal error that prevents the run from starting."""


def scan_excel_files(directory: Path) -> list[Path]:
    """Return the .xlsx files directly under ``directory`` (sorted by name).

    Raises:
        ProcessingError: If the directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")
    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")
    try:
        return sorted(p for p in directory.iterdir() if p.is_file() and p.suffix == ".xlsx")
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def resolve_kind(path: Path, config: ImportConfig, override: RecordKind | None = None) -> RecordKind:
    """Explicit override, else first matching kind_patterns glob, else record_kind."""
    if override is not None:
        return override
    for pattern, kind in config.kind_patterns.items():
        if fnmatch(path.name, pattern):
            return kind
    return config.record_kind


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    raise TypeError(f"not JSON serializable: {type(value).__name__}")


def write_records(path: Path, records: Iterable[Payment | Income]) -> int:
    """Write records as JSON Lines (storage-shaped dicts). Returns the count."""
    path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with path.open("w", encoding="utf-8") as f:
        for record in records:
            f.write(json.dumps(record.to_dict(), ensure_ascii=False, default=_json_default) + "\n")
            count += 1
    return count


def process_all(
    config: ImportConfig,
    *,
    kind_override: RecordKind | None = None,
    dry_run: bool = False,
    error_log: ErrorLogBuffer | None = None,
) -> ProcessingResult:
    """Import every workbook in ``config.source_directory``.

    Args:
        config: Loaded import configuration
        kind_override: Force one record kind for all files
        dry_run: Skip writing accepted records
        error_log: Rejection buffer (a fresh one by default)

    Raises:
        ProcessingError: If the source directory cannot be scanned
    """
    start_time = datetime.now(UTC)
    error_log = error_log if error_log is not None else ErrorLogBuffer()
    specs = build_kind_specs(config)
    file_paths = scan_excel_files(Path(config.source_directory))

    file_stats: list[FileStat] = []
    with ProgressTracker(len(file_paths)) as progress:
        for file_path in file_paths:
            progress.start_file(file_path)
            kind = resolve_kind(file_path, config, kind_override)
            stat = _process_single_file(file_path, specs[kind], config, error_log, dry_run)
            file_stats.append(stat)
            logger.info(render_file_line(stat))
            progress.set_postfix(
                accepted=sum(s.accepted_rows for s in file_stats),
                rejected=sum(s.rejected_rows for s in file_stats),
            )
            progress.finish_file()

    flushed = error_log.flush()
    if flushed is not None:
        logger.info(f"rejections written to {flushed}")

    end_time = datetime.now(UTC)
    return ProcessingResult(
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_stats=file_stats,
    )


def _process_single_file(
    file_path: Path,
    spec: RecordKindSpec,
    config: ImportConfig,
    error_log: ErrorLogBuffer,
    dry_run: bool,
) -> FileStat:
    """Import one workbook; a SheetReadError marks the file failed."""
    file_start = datetime.now(UTC)
    sheet_label = str(config.sheet)

    def elapsed() -> float:
        return (datetime.now(UTC) - file_start).total_seconds()

    try:
        grid = read_grid(file_path, sheet=config.sheet)
    except SheetReadError as e:
        logger.error(f"{file_path.name}: {e}")
        error_log.append(
            ErrorRecord.create(file_path.name, sheet_label, FILE_LEVEL_ROW, "SHEET_READ_ERROR", str(e))
        )
        return FileStat(
            file_name=file_path.name,
            kind=spec.kind,
            status=FileStatus.FAILED,
            elapsed_seconds=elapsed(),
            error=str(e),
        )

    result = run_import(grid, spec, header_scan_rows=config.header_scan_rows)
    for rejection in result.rejections:
        error_log.append(
            ErrorRecord.create(file_path.name, sheet_label, rejection.row_number, rejection.reason)
        )

    if result.is_empty:
        status = FileStatus.EMPTY
    else:
        status = FileStatus.SUCCESS
        if not dry_run:
            out_path = Path(config.output_directory) / f"{file_path.stem}.jsonl"
            written = write_records(out_path, result.records)
            logger.debug("%s: wrote %d records to %s", file_path.name, written, out_path)

    return FileStat(
        file_name=file_path.name,
        kind=spec.kind,
        status=status,
        accepted_rows=len(result.records),
        rejected_rows=result.rejection_count,
        elapsed_seconds=elapsed(),
    )
