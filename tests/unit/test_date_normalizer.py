from __future__ import annotations

from datetime import date, datetime

import pytest

from src.services.date_normalizer import normalize_date, serial_to_date, serial_to_date_via_epoch


@pytest.mark.parametrize(
    "value, expected",
    [
        (45000, "2023-03-15"),
        (45000.75, "2023-03-15"),
        (1, "1900-01-01"),
        (61, "1900-03-01"),
        (25569, "1970-01-01"),
    ],
)
def test_serial_numbers(value, expected):
    assert normalize_date(value) == expected


def test_serial_helpers_agree_after_leap_bug():
    assert serial_to_date(45000) == serial_to_date_via_epoch(45000) == date(2023, 3, 15)


def test_phantom_leap_day_uses_epoch_fallback():
    with pytest.raises(ValueError):
        serial_to_date(60)
    # 1899-12-30 + 60 days
    assert normalize_date(60) == "1900-02-28"


def test_non_finite_serial_is_invalid():
    assert normalize_date(float("nan")) is None
    assert normalize_date(float("inf")) is None


@pytest.mark.parametrize(
    "text",
    [
        "1-Feb-2025",
        "01/02/2025",
        "1/2/2025",
        "2025-02-01",
        " 1-feb-2025 ",
        "1-فبراير-2025",
        "2025/02/01",
        "2025.02.01",
        "2025/2/1",
    ],
)
def test_text_forms_of_first_february(text):
    assert normalize_date(text) == "2025-02-01"


def test_two_digit_year_triple():
    assert normalize_date("05-03-24") == "2024-03-05"
    assert normalize_date("05/03/87") == "1987-03-05"


def test_datetime_values():
    assert normalize_date(datetime(2025, 2, 1, 13, 30)) == "2025-02-01"
    assert normalize_date(date(2025, 2, 1)) == "2025-02-01"


@pytest.mark.parametrize(
    "value",
    [None, "", "   ", "abc", "May", "31/02/2025", "1-Foo-2025", "2025/13/02", "2025.02.30", True, [1]],
)
def test_invalid_dates(value):
    assert normalize_date(value) is None


@pytest.mark.parametrize("value", [0, 0.5, -1, -45000])
def test_serials_below_one_are_not_dates(value):
    assert normalize_date(value) is None
