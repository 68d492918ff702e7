from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for rejection logging.

One JSON Lines entry per rejected row (or per workbook that could not be read,
using row=-1). Keys are fixed; no extras are emitted.
"""

__all__ = [
    "ErrorRecord",
    "FILE_LEVEL_ROW",
]

FILE_LEVEL_ROW = -1


@dataclass(frozen=True)
class ErrorRecord:
    """Structured diagnostic for a rejected row.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Workbook file name
        sheet: Sheet name or index the rows were read from
        row: 1-based sheet row number, or -1 for workbook-level failures
        reason: Rejection reason (e.g. missing_total, SHEET_READ_ERROR)
        detail: Free-form context (raw value, codec message)
    """
    timestamp: str
    file: str
    sheet: str
    row: int
    reason: str
    detail: str

    @staticmethod
    def create(file: str, sheet: str, row: int, reason: str, detail: str = "") -> ErrorRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            sheet=sheet,
            row=row,
            reason=reason,
            detail=detail,
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
