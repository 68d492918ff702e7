from __future__ import annotations

from src.config.field_tables import INCOME_SPEC, PAYMENT_SPEC
from src.services.header_locator import header_variants, locate_header


def test_header_after_title_rows():
    grid = [
        ["كشف حساب"],
        [None, None],
        ["التاريخ من", "المستفيد", "الاجمالي"],
        ["1-Feb-2025", "Acme", 10],
    ]
    assert locate_header(grid, PAYMENT_SPEC.expected_headers) == 2


def test_header_on_first_row():
    grid = [["Date From", "Account", "Total"], ["2025-02-01", "Main", 5]]
    assert locate_header(grid, PAYMENT_SPEC.expected_headers) == 0


def test_match_is_case_insensitive_substring():
    grid = [["x"], ["  BENEFICIARY NAME  ", "amount"]]
    assert locate_header(grid, PAYMENT_SPEC.expected_headers) == 1


def test_no_header_returns_none():
    grid = [[45000, "Acme", "Main", "ProjA", None, 100]]
    assert locate_header(grid, PAYMENT_SPEC.expected_headers) is None


def test_header_beyond_scan_limit_is_ignored():
    grid = [["filler"]] * 10 + [["العميل", "الإجمالي"]]
    assert locate_header(grid, INCOME_SPEC.expected_headers) is None
    assert locate_header(grid, INCOME_SPEC.expected_headers, scan_limit=11) == 10


def test_empty_grid():
    assert locate_header([], PAYMENT_SPEC.expected_headers) is None


def test_spacing_variant_without_article():
    # "تاريخ من" (no definite article) still counts as the date-from header
    assert "تاريخ من" in header_variants("التاريخ من")
    grid = [["تاريخ من", "x"], [1, 2]]
    assert locate_header(grid, ["التاريخ من"]) == 0
