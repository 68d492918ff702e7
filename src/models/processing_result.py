from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .config_models import RecordKind
from .records import Income, Payment

"""Outcome and result models for the ledger sheet importer.

RowOutcome is a tagged result (Accepted | Rejected) produced per data row;
ImportResult aggregates a single sheet; FileStat / ProcessingResult aggregate
a directory run for the SUMMARY output.
"""

__all__ = [
    "Accepted",
    "Rejected",
    "RowOutcome",
    "ImportResult",
    "FileStatus",
    "FileStat",
    "ProcessingResult",
    "MISSING_REQUIRED_FIELD",
]

MISSING_REQUIRED_FIELD = "missing_required_field"


@dataclass(frozen=True)
class Accepted:
    row_number: int
    record: Payment | Income

    @property
    def accepted(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejected:
    """Row that failed structural validation.

    reason is one of missing_date, missing_required_field(<name>),
    invalid_date_format, missing_total, invalid_total.
    """
    row_number: int
    reason: str

    @property
    def accepted(self) -> bool:
        return False

    def describe(self) -> str:
        return f"row {self.row_number}: {self.reason}"


RowOutcome = Accepted | Rejected


@dataclass(frozen=True)
class ImportResult:
    """Result of importing one sheet for one RecordKind.

    header_row_index is the 0-based grid index of the detected header row,
    or None when the sheet was read as headerless.
    """
    kind: RecordKind
    outcomes: tuple[RowOutcome, ...]
    header_row_index: int | None

    @property
    def records(self) -> list[Payment | Income]:
        return [o.record for o in self.outcomes if isinstance(o, Accepted)]

    @property
    def rejections(self) -> list[Rejected]:
        return [o for o in self.outcomes if isinstance(o, Rejected)]

    @property
    def rejection_count(self) -> int:
        return len(self.rejections)

    @property
    def reasons(self) -> list[str]:
        return [r.describe() for r in self.rejections]

    @property
    def total_rows(self) -> int:
        return len(self.outcomes)

    @property
    def is_empty(self) -> bool:
        """True when the sheet was read but no row produced a record."""
        return not any(isinstance(o, Accepted) for o in self.outcomes)

    def summary(self) -> str:
        line = f"imported {len(self.records)} of {self.total_rows} rows"
        if self.rejection_count:
            line += f" ({self.rejection_count} rejected)"
        return line


class FileStatus(Enum):
    """Outcome of importing one workbook."""
    SUCCESS = "success"
    EMPTY = "empty"  # sheet read, zero accepted records
    FAILED = "failed"  # sheet could not be decoded


@dataclass(frozen=True)
class FileStat:
    """Per-workbook statistics for a directory run."""
    file_name: str
    kind: RecordKind
    status: FileStatus
    accepted_rows: int = 0
    rejected_rows: int = 0
    elapsed_seconds: float = 0.0
    error: str | None = None

    @property
    def total_rows(self) -> int:
        return self.accepted_rows + self.rejected_rows


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results for the SUMMARY output line."""
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] = field(default_factory=list)

    def _count(self, status: FileStatus) -> int:
        return sum(1 for s in self.file_stats if s.status == status)

    @property
    def success_files(self) -> int:
        return self._count(FileStatus.SUCCESS)

    @property
    def empty_files(self) -> int:
        return self._count(FileStatus.EMPTY)

    @property
    def failed_files(self) -> int:
        return self._count(FileStatus.FAILED)

    @property
    def accepted_rows(self) -> int:
        return sum(s.accepted_rows for s in self.file_stats)

    @property
    def rejected_rows(self) -> int:
        return sum(s.rejected_rows for s in self.file_stats)
