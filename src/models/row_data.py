from __future__ import annotations

from dataclasses import dataclass
from typing import Any

"""RowData model for the ledger sheet importer.

RowData is the RawRow handed to the field resolver: one sheet row keyed by
header label, or by ``EMPTY_<index>`` placeholders where no header text exists.
"""

__all__ = [
    "RowData",
    "PLACEHOLDER_PREFIX",
    "placeholder_label",
]

PLACEHOLDER_PREFIX = "EMPTY_"


def placeholder_label(index: int) -> str:
    """Synthetic label for column ``index`` (0-based)."""
    return f"{PLACEHOLDER_PREFIX}{index}"


@dataclass(frozen=True)
class RowData:
    """Logical representation of a single sheet row before field resolution.

    row_number is the 1-based row number in the sheet, used in rejection
    diagnostics. headerless marks rows built from positional placeholders only.
    """
    row_number: int
    values: dict[str, Any]  # label -> raw cell value (number, str, datetime or None)
    headerless: bool = False

    def items(self):
        return self.values.items()

    def get(self, label: str) -> Any:
        return self.values.get(label)
