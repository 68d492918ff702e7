from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from ..config.field_tables import HEADER_SCAN_LIMIT, HEADER_SPACING_VARIANTS

"""Header row detection.

Exports often carry title rows or blank padding above the real header, so the
first rows are scanned for one that mentions any expected column label.
"""

__all__ = [
    "locate_header",
    "header_variants",
]

logger = logging.getLogger("ledger_importer.header")


def header_variants(header: str) -> set[str]:
    """Case-folded forms of ``header`` that count as a match."""
    folded = header.casefold()
    variants = {folded}
    for long_form, short_form in HEADER_SPACING_VARIANTS:
        variants.add(folded.replace(long_form, short_form))
    return variants


def _row_text(row: Iterable[Any]) -> str:
    return " ".join(str(cell) for cell in row if cell is not None).casefold()


def locate_header(
    grid: Sequence[Sequence[Any]],
    expected_headers: Iterable[str],
    scan_limit: int = HEADER_SCAN_LIMIT,
) -> int | None:
    """Return the index of the first row mentioning an expected header, or None.

    Only the first ``scan_limit`` rows are considered; a header further down is
    treated as absent.
    """
    candidates: set[str] = set()
    for header in expected_headers:
        candidates |= header_variants(header)
    candidates.discard("")

    for idx, row in enumerate(grid[:scan_limit]):
        text = _row_text(row)
        if any(c in text for c in candidates):
            logger.debug("header row detected at index=%d", idx)
            return idx
    logger.debug("no header row within first %d rows", scan_limit)
    return None
