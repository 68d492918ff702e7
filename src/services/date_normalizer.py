from __future__ import annotations

import logging
import math
import re
from datetime import UTC, date, datetime, timedelta
from numbers import Real
from typing import Any

from dateutil import parser as date_parser

from ..config.field_tables import MONTH_NAMES, SERIAL_EPOCH_OFFSET_DAYS

"""Date cell normalization to ISO calendar dates (YYYY-MM-DD).

Numeric cells are spreadsheet serials in the 1900 date system. Text cells are
tried as D-MonthName-YYYY (English or Arabic month names), then as a
year-first Y-M-D triple, then as general calendar text (ISO first, then
day-first), then as a bare D/M/Y triple. Serials below 1 are not dates.
Anything that does not land on a real calendar date yields None.
"""

__all__ = [
    "normalize_date",
    "serial_to_date",
    "serial_to_date_via_epoch",
]

logger = logging.getLogger("ledger_importer.dates")

_SERIAL_BASE = date(1899, 12, 31)  # serial 1 == 1900-01-01
_PHANTOM_LEAP_SERIAL = 60  # 1900-02-29, kept by the 1900 date system for compatibility
_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_SECONDS_PER_DAY = 86400

_MONTH_NAME_DATE = re.compile(r"^(\d{1,2})[-/](\w+)[-/](\d{4})$")
_YEAR_FIRST = re.compile(r"^(\d{4})[-/.](\d{1,2})[-/.](\d{1,2})$")
_FOUR_DIGITS = re.compile(r"\d{4}")
_DIGIT_RUN = re.compile(r"\d+")
_TRIPLE_SPLIT = re.compile(r"[/-]")
_PARSE_DEFAULT = datetime(2000, 1, 1)

_MONTHS_FOLDED = {name.casefold(): num for name, num in MONTH_NAMES.items()}


def serial_to_date(serial: float) -> date:
    """Convert a 1900-system serial to a date; raises ValueError when impossible."""
    days = math.floor(serial)
    if days < 1:
        raise ValueError(f"serial {serial} precedes 1900-01-01")
    if days == _PHANTOM_LEAP_SERIAL:
        raise ValueError("serial 60 is the non-existent 1900-02-29")
    if days > _PHANTOM_LEAP_SERIAL:
        days -= 1
    return _SERIAL_BASE + timedelta(days=days)


def serial_to_date_via_epoch(serial: float) -> date:
    """Days since 1899-12-30, computed from elapsed seconds since the Unix epoch."""
    seconds = (serial - SERIAL_EPOCH_OFFSET_DAYS) * _SECONDS_PER_DAY
    return (_UNIX_EPOCH + timedelta(seconds=seconds)).date()


def _from_serial(serial: float) -> str | None:
    if not math.isfinite(serial):
        return None
    if serial < 1:
        return None
    try:
        return serial_to_date(serial).isoformat()
    except (ValueError, OverflowError) as e:
        logger.debug("serial %s: %s; falling back to epoch offset", serial, e)
    try:
        return serial_to_date_via_epoch(serial).isoformat()
    except (ValueError, OverflowError):
        return None


def _safe_date(year: int, month: int, day: int) -> str | None:
    try:
        return date(year, month, day).isoformat()
    except ValueError:
        return None


def _from_month_name(text: str) -> str | None:
    m = _MONTH_NAME_DATE.match(text)
    if not m:
        return None
    month = _MONTHS_FOLDED.get(m.group(2).casefold())
    if month is None:
        return None
    return _safe_date(int(m.group(3)), month, int(m.group(1)))


def _from_year_first(text: str) -> str | None:
    m = _YEAR_FIRST.match(text)
    if not m:
        return None
    return _safe_date(int(m.group(1)), int(m.group(2)), int(m.group(3)))


def _from_calendar_text(text: str) -> str | None:
    # 年を含まない文字列 ("May" など) は既定値で補完されてしまうため対象外
    if not (_FOUR_DIGITS.search(text) or len(_DIGIT_RUN.findall(text)) >= 3):
        return None
    # Y-M-D 形式は _from_year_first のみで判定 (day-first 解析で月日が入れ替わる)
    if _YEAR_FIRST.match(text):
        return None
    try:
        return datetime.fromisoformat(text).date().isoformat()
    except ValueError:
        pass
    try:
        return date_parser.parse(text, dayfirst=True, default=_PARSE_DEFAULT).date().isoformat()
    except (ValueError, OverflowError):
        return None


def _from_triple(text: str) -> str | None:
    parts = [p.strip() for p in _TRIPLE_SPLIT.split(text)]
    if len(parts) != 3 or not all(p.isdigit() for p in parts):
        return None
    day, month, year = (int(p) for p in parts)
    if year < 100:
        year += 2000 if year < 50 else 1900
    return _safe_date(year, month, day)


def normalize_date(value: Any) -> str | None:
    """Return ``value`` as YYYY-MM-DD, or None when it is not a valid date."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Real):
        return _from_serial(float(value))
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    for step in (_from_month_name, _from_year_first, _from_calendar_text, _from_triple):
        result = step(text)
        if result is not None:
            return result
    return None
