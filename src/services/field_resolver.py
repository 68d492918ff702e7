from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from numbers import Real
from typing import Any, Protocol

from ..config.field_tables import TOTAL_LABEL_HINTS
from ..models.config_models import FieldSpec, FieldType
from ..models.row_data import PLACEHOLDER_PREFIX, RowData, placeholder_label

"""Field resolution as an ordered chain of strategies.

Each strategy answers ``resolve(row, field) -> value | None``; the chain
returns the first non-None answer. Order:

1. DirectLabelStrategy      exact header label match
2. PositionalStrategy       EMPTY_<n> placeholders (headerless sheets only)
3. ReversedKeyValueStrategy label/value swapped in the export
4. TotalShapeStrategy       numeric-looking cells for the decimal field

Strategies never raise; an unresolved field is None and the row validator
reports it as missing.
"""

__all__ = [
    "ResolverStrategy",
    "DirectLabelStrategy",
    "PositionalStrategy",
    "ReversedKeyValueStrategy",
    "TotalShapeStrategy",
    "FieldResolver",
    "default_strategies",
]

logger = logging.getLogger("ledger_importer.resolver")

BOUNDED_TOTAL_LIMIT = 1_000_000

_NUMERIC_TEXT = re.compile(r"^-?\d[\d,]*(\.\d+)?$")

# Labels whose cells are never the total even when they hold numbers.
_NON_TOTAL_LABEL_HINTS = ("تاريخ", "date", "empty")
_NON_TOTAL_LABELS = frozenset(
    s.casefold()
    for s in (
        "المستفيد", "الحساب", "المشروع", "العميل",
        "beneficiary", "account", "project", "client",
    )
)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _looks_numeric(value: Any) -> bool:
    if _is_number(value):
        return True
    return isinstance(value, str) and bool(_NUMERIC_TEXT.match(value.strip()))


class ResolverStrategy(Protocol):
    name: str

    def resolve(self, row: RowData, field: FieldSpec) -> Any | None: ...


class DirectLabelStrategy:
    """Exact, case-sensitive label lookup over the field's synonyms."""
    name = "direct"

    def resolve(self, row: RowData, field: FieldSpec) -> Any | None:
        for label in field.synonyms:
            value = row.get(label)
            if not _is_blank(value):
                return value
        return None


class PositionalStrategy:
    """Documented column positions, consulted only for headerless rows."""
    name = "positional"

    def resolve(self, row: RowData, field: FieldSpec) -> Any | None:
        if not row.headerless:
            return None
        for position in field.positions:
            value = row.get(placeholder_label(position))
            if not _is_blank(value):
                return value
        return None


class ReversedKeyValueStrategy:
    """Recover rows whose labels and values were swapped on export.

    If a cell *value* equals one of the field's labels, the cell's *label* is
    taken as the field value, e.g. ``{"2563345": "الاجمالي"}`` -> "2563345".
    Placeholder labels carry no value of their own and are skipped.
    """
    name = "reversed"

    def resolve(self, row: RowData, field: FieldSpec) -> Any | None:
        for synonym in field.synonyms:
            wanted = synonym.strip().casefold()
            for label, value in row.items():
                if value is None or label.startswith(PLACEHOLDER_PREFIX):
                    continue
                if str(value).strip().casefold() == wanted:
                    return label
        return None


class TotalShapeStrategy:
    """Last-chance scan for the decimal field by content shape.

    Values under a label mentioning "total" win first; otherwise any real
    number in (0, BOUNDED_TOTAL_LIMIT) whose label is not a date, placeholder
    or account/project/client/beneficiary column.
    """
    name = "shape"

    def __init__(self, label_hints: Sequence[str] = TOTAL_LABEL_HINTS, limit: float = BOUNDED_TOTAL_LIMIT) -> None:
        self.label_hints = tuple(h.casefold() for h in label_hints)
        self.limit = limit

    def _excluded_label(self, label: str) -> bool:
        folded = label.strip().casefold()
        if folded in _NON_TOTAL_LABELS:
            return True
        return any(hint in folded for hint in _NON_TOTAL_LABEL_HINTS)

    def resolve(self, row: RowData, field: FieldSpec) -> Any | None:
        if field.field_type is not FieldType.DECIMAL:
            return None
        for label, value in row.items():
            if _is_blank(value) or label.startswith(PLACEHOLDER_PREFIX):
                continue
            folded = label.casefold()
            if any(h in folded for h in self.label_hints) and _looks_numeric(value):
                return value
        for label, value in row.items():
            if _is_number(value) and 0 < value < self.limit and not self._excluded_label(label):
                return value
        return None


def default_strategies() -> list[ResolverStrategy]:
    return [
        DirectLabelStrategy(),
        PositionalStrategy(),
        ReversedKeyValueStrategy(),
        TotalShapeStrategy(),
    ]


class FieldResolver:
    """Runs the strategy chain for every field of a row."""

    def __init__(self, strategies: Sequence[ResolverStrategy] | None = None) -> None:
        self.strategies: tuple[ResolverStrategy, ...] = tuple(
            default_strategies() if strategies is None else strategies
        )

    def without(self, name: str) -> FieldResolver:
        """Copy of this resolver with the named strategy removed."""
        return FieldResolver([s for s in self.strategies if s.name != name])

    def resolve(self, row: RowData, field: FieldSpec) -> Any | None:
        for strategy in self.strategies:
            value = strategy.resolve(row, field)
            if value is not None:
                if strategy.name != "direct":
                    logger.debug(
                        "row=%d field=%s resolved by %s strategy", row.row_number, field.name, strategy.name
                    )
                return value
        return None

    def resolve_all(self, row: RowData, fields: Sequence[FieldSpec]) -> dict[str, Any]:
        return {f.name: self.resolve(row, f) for f in fields}
