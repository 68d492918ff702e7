from __future__ import annotations

from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Any

from .config_models import RecordKind

"""Canonical ledger records produced by the import pipeline.

Records are frozen once assembled. String fields are already trimmed and
optional strings are "" (never None); total is a positive Decimal and date an
ISO calendar date (YYYY-MM-DD).
"""

__all__ = [
    "Payment",
    "Income",
    "RECORD_CLASSES",
]


@dataclass(frozen=True)
class Payment:
    """Outgoing payment entry."""
    date: str
    account: str
    project: str
    total: Decimal
    beneficiary: str = ""
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Storage-shaped mapping (column names as the ledger tables use them)."""
        return asdict(self)


@dataclass(frozen=True)
class Income:
    """Incoming payment entry."""
    date: str
    project: str
    client: str
    total: Decimal
    unit: str = ""
    description: str = ""
    payment_method: str = ""
    payment_proof: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Storage-shaped mapping; payment_method/payment_proof stay snake_case."""
        return asdict(self)


RECORD_CLASSES: dict[RecordKind, type[Payment] | type[Income]] = {
    RecordKind.PAYMENT: Payment,
    RecordKind.INCOME: Income,
}
