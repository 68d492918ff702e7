from __future__ import annotations

import io
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from src.models.row_data import RowData, placeholder_label

"""Cell grid reader and RawRow builder.

The workbook container is decoded by pandas (openpyxl engine) with header=None,
so every row comes back as an ordered list of raw cells. Cells are converted
to plain Python values: NaN/NaT and blank strings -> None, numpy scalars ->
int/float, Timestamps -> datetime. Wholly empty rows are kept as empty lists
so grid index + 1 is the sheet row number; iter_raw_rows skips them.
"""

__all__ = [
    "SheetReadError",
    "Cell",
    "Grid",
    "read_grid",
    "header_labels",
    "iter_raw_rows",
]

Cell = Any
Grid = list[list[Cell]]


class SheetReadError(Exception):
    """Raised when the workbook or the requested sheet cannot be decoded."""


def _clean_cell(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, str):
        return value if value.strip() else None
    if isinstance(value, pd.Timestamp):
        return None if pd.isna(value) else value.to_pydatetime()
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return None
    if isinstance(value, np.generic):
        return value.item()
    return value


def read_grid(source: Path | str | bytes, sheet: int | str = 0) -> Grid:
    """Decode one sheet of a workbook into a list of rows of raw cells.

    Parameters
    ----------
    source: ワークブックのパス、またはファイル内容のバイト列
    sheet: シートのインデックスまたは名前 (既定: 先頭シート)
    """
    buffer = io.BytesIO(source) if isinstance(source, bytes | bytearray) else source
    try:
        df = pd.read_excel(buffer, sheet_name=sheet, header=None, dtype=object)
    except Exception as e:
        raise SheetReadError(f"cannot read sheet {sheet!r}: {e}") from e

    grid: Grid = []
    for raw in df.itertuples(index=False, name=None):
        cells = [_clean_cell(v) for v in raw]
        # trailing empties are padding from wider rows
        while cells and cells[-1] is None:
            cells.pop()
        # blank rows stay as [] so grid index + 1 is the sheet row number
        grid.append(cells)
    while grid and not grid[-1]:
        grid.pop()
    return grid


def header_labels(header_row: Sequence[Cell]) -> list[str]:
    """Trimmed header texts, with EMPTY_<index> where a header cell is blank."""
    labels = []
    for idx, cell in enumerate(header_row):
        text = "" if cell is None else str(cell).strip()
        labels.append(text if text else placeholder_label(idx))
    return labels


def _is_blank_row(row: Sequence[Cell]) -> bool:
    return all(cell is None for cell in row)


def iter_raw_rows(grid: Sequence[Sequence[Cell]], header_index: int | None) -> Iterator[RowData]:
    """Yield one RowData per data row.

    Blank rows are skipped; row_number is always the 1-based sheet row.
    With a header, rows after it are keyed by header label (cells beyond the
    header width are ignored, missing cells are None). Without a header every
    row is keyed by positional placeholders.
    """
    if header_index is None:
        for idx, row in enumerate(grid):
            if _is_blank_row(row):
                continue
            values = {placeholder_label(col): cell for col, cell in enumerate(row)}
            yield RowData(row_number=idx + 1, values=values, headerless=True)
        return

    labels = header_labels(grid[header_index])
    for idx in range(header_index + 1, len(grid)):
        row = grid[idx]
        if _is_blank_row(row):
            continue
        values: dict[str, Any] = {}
        for col, label in enumerate(labels):
            values[label] = row[col] if col < len(row) else None
        yield RowData(row_number=idx + 1, values=values)
