from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

from ..config.field_tables import HEADER_SCAN_LIMIT, INCOME_SPEC, KIND_SPECS, PAYMENT_SPEC
from ..excel.reader import iter_raw_rows, read_grid
from ..models.config_models import RecordKind, RecordKindSpec
from ..models.processing_result import ImportResult, Rejected, RowOutcome
from .field_resolver import FieldResolver
from .header_locator import locate_header
from .row_validator import assemble

"""Import pipeline: grid -> header detection -> per-row resolve/normalize/validate.

Row-level problems become Rejected outcomes and are logged as warnings; the
batch always runs to the end. Only an unreadable sheet (SheetReadError from the
reader) or a cancellation aborts, and then nothing partial is returned.
"""

__all__ = [
    "ImportCancelled",
    "run_import",
    "import_payments",
    "import_incomes",
    "import_workbook",
]

logger = logging.getLogger("ledger_importer.pipeline")


class ImportCancelled(Exception):
    """Raised when should_cancel() turns true between rows."""


def run_import(
    grid: Sequence[Sequence[Any]],
    spec: RecordKindSpec,
    *,
    header_scan_rows: int = HEADER_SCAN_LIMIT,
    resolver: FieldResolver | None = None,
    should_cancel: Callable[[], bool] | None = None,
) -> ImportResult:
    """Import every data row of ``grid`` as ``spec.kind`` records.

    Args:
        grid: Decoded sheet rows (lists of raw cells)
        spec: Field/header configuration for the record kind
        header_scan_rows: How many leading rows may hold the header
        resolver: Field resolver (defaults to the full strategy chain)
        should_cancel: Optional callable polled between rows

    Returns:
        ImportResult with one outcome per data row, in input order

    Raises:
        ImportCancelled: If should_cancel() returned True
    """
    resolver = resolver or FieldResolver()
    header_index = locate_header(grid, spec.expected_headers, scan_limit=header_scan_rows)
    if header_index is None:
        logger.info("%s: no header row found, using column positions", spec.kind.value)

    outcomes: list[RowOutcome] = []
    for row in iter_raw_rows(grid, header_index):
        if should_cancel is not None and should_cancel():
            raise ImportCancelled(f"cancelled before row {row.row_number}")
        resolved = resolver.resolve_all(row, spec.fields)
        outcome = assemble(spec, row.row_number, resolved)
        if isinstance(outcome, Rejected):
            logger.warning("row %d skipped: %s", outcome.row_number, outcome.reason)
        outcomes.append(outcome)

    result = ImportResult(kind=spec.kind, outcomes=tuple(outcomes), header_row_index=header_index)
    logger.debug(
        "%s: header_row=%s accepted=%d rejected=%d",
        spec.kind.value,
        header_index,
        len(result.records),
        result.rejection_count,
    )
    return result


def import_payments(grid: Sequence[Sequence[Any]], spec: RecordKindSpec = PAYMENT_SPEC, **kwargs: Any) -> ImportResult:
    return run_import(grid, spec, **kwargs)


def import_incomes(grid: Sequence[Sequence[Any]], spec: RecordKindSpec = INCOME_SPEC, **kwargs: Any) -> ImportResult:
    return run_import(grid, spec, **kwargs)


def import_workbook(
    source: Path | str | bytes,
    kind: RecordKind,
    *,
    sheet: int | str = 0,
    spec: RecordKindSpec | None = None,
    **kwargs: Any,
) -> ImportResult:
    """Read the workbook's sheet and import it; SheetReadError propagates."""
    grid = read_grid(source, sheet=sheet)
    return run_import(grid, spec or KIND_SPECS[kind], **kwargs)
