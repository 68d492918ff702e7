from __future__ import annotations

from ..models.processing_result import FileStat, FileStatus, ProcessingResult

"""Summary line rendering for the ledger sheet importer.

Format:
SUMMARY files={n}/{n} success={s} empty={e} failed={f} accepted={a}
rejected={r} elapsed_sec={elapsed}
"""

__all__ = [
    "format_seconds",
    "render_summary_line",
    "render_file_line",
]


def format_seconds(value: float) -> str:
    """Integral values without decimals, tiny values without scientific notation."""
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(round(value, 3))


def render_summary_line(result: ProcessingResult) -> str:
    """Render the SUMMARY line for a directory run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2025, 2, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2025, 2, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> render_summary_line(ProcessingResult(start, end, 2.0))
        'SUMMARY files=0/0 success=0 empty=0 failed=0 accepted=0 rejected=0 elapsed_sec=2'
    """
    total_files = len(result.file_stats)
    return (
        f"SUMMARY files={total_files}/{total_files} "
        f"success={result.success_files} "
        f"empty={result.empty_files} "
        f"failed={result.failed_files} "
        f"accepted={result.accepted_rows} "
        f"rejected={result.rejected_rows} "
        f"elapsed_sec={format_seconds(result.elapsed_seconds)}"
    )


def render_file_line(stat: FileStat) -> str:
    """User-facing per-workbook line, e.g. 'payments.xlsx [payment]: imported 9 of 10 rows (1 rejected)'."""
    prefix = f"{stat.file_name} [{stat.kind.value}]"
    if stat.status is FileStatus.FAILED:
        return f"{prefix}: read failed: {stat.error}"
    if stat.status is FileStatus.EMPTY:
        return f"{prefix}: no valid records found in {stat.total_rows} rows"
    line = f"{prefix}: imported {stat.accepted_rows} of {stat.total_rows} rows"
    if stat.rejected_rows:
        line += f" ({stat.rejected_rows} rejected)"
    return line
