from __future__ import annotations

from decimal import Decimal, InvalidOperation
from numbers import Real
from typing import Any

"""Total/amount normalization.

Numbers pass through (floats via their shortest repr so 0.1 stays 0.1); text
loses grouping commas and surrounding whitespace before Decimal parsing.
Only finite, strictly positive values are valid.
"""

__all__ = [
    "parse_decimal",
    "normalize_total",
]


def parse_decimal(value: Any) -> Decimal | None:
    """Parse ``value`` into a finite Decimal, or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, Real):
        number = Decimal(value) if isinstance(value, int) else Decimal(str(float(value)))
    elif isinstance(value, str):
        text = value.replace(",", "").strip()
        if not text:
            return None
        try:
            number = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None
    return number if number.is_finite() else None


def normalize_total(value: Any) -> Decimal | None:
    """Positive Decimal total, or None when unparseable or <= 0."""
    number = parse_decimal(value)
    if number is None or number <= 0:
        return None
    return number
