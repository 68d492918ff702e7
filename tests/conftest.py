# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
from typing import Any, Callable

import pandas as pd
import pytest

from src.logging.init import reset_logging

PAYMENT_HEADER = ["التاريخ من", "التاريخ الى", "المستفيد", "الحساب", "المشروع", "وصف", "الاجمالي"]
INCOME_HEADER = ["التاريخ", "المشروع", "الوحدة", "العميل", "الوصف", "الإجمالي", "وسيلة الدفع", "إثبات الدفع"]


@pytest.fixture(autouse=True)
def _clean_logging():
    # handlers bound to a previous test's captured stdout must not leak
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
output_directory: ./out
record_kind: payment
kind_patterns:
  "income*.xlsx": income
header_scan_rows: 10
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def payment_grid() -> list[list[Any]]:
    return [
        ["كشف المدفوعات", None, None],
        PAYMENT_HEADER,
        ["1-Feb-2025", "1-Feb-2025", "Acme", "Main", "ProjA", "desc", 1000],
        [45000, None, None, "Main", None, None, 250],
        ["01/02/2025", None, "شركة الأمل", "الصندوق", "ProjB", None, "2,563,345.50"],
    ]


@pytest.fixture()
def income_grid() -> list[list[Any]]:
    return [
        INCOME_HEADER,
        ["2025-03-05", "Marina", "U-101", "محمد علي", "قسط", 12000, "نقدي", "https://example.com/r/1"],
        ["5/3/2025", "Marina", None, "Delta Supplies", None, "abc", None, None],
    ]


@pytest.fixture()
def make_workbook() -> Callable[..., Path]:
    """Write rows (no pandas header/index) to an .xlsx file and return its path."""
    def _make(path: Path, rows: list[list[Any]], sheet_name: str = "Sheet1") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            pd.DataFrame(rows).to_excel(writer, sheet_name=sheet_name, header=False, index=False)
        return path
    return _make
