#!/usr/bin/env python3
"""Sample ledger workbook generator.

Writes messy payment/income workbooks that resemble real exports, for manual
runs of the importer and for throughput checks:
- Title and blank rows above the header
- Bilingual header labels in shuffled column order
- Serial dates mixed with "1-Feb-2025" and "01/02/2025" text dates
- Totals as numbers or as grouped text ("2,563,345.50")
- A few broken rows (missing project, zero total)

--headerless drops the title and header rows so the importer falls back to
column positions.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

PAYMENT_HEADERS = ["التاريخ من", "التاريخ الى", "المستفيد", "الحساب", "المشروع", "وصف", "الاجمالي"]
INCOME_HEADERS = ["التاريخ", "المشروع", "الوحدة", "العميل", "الوصف", "الإجمالي", "وسيلة الدفع", "إثبات الدفع"]

PROJECTS = ["برج النخيل", "ProjA", "ProjB", "Marina"]
ACCOUNTS = ["Main", "Petty Cash", "الصندوق"]
PEOPLE = ["Acme", "شركة الأمل", "Delta Supplies", "محمد علي"]
METHODS = ["نقدي", "تحويل بنكي", "Cheque"]
MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

BROKEN_ROW_EVERY = 25


def _date_cell(rng: np.random.Generator, serial: int) -> Any:
    """Same calendar day in one of three export styles."""
    ts = pd.Timestamp("1899-12-30") + pd.Timedelta(days=serial)
    style = rng.integers(0, 3)
    if style == 0:
        return serial
    if style == 1:
        return f"{ts.day}-{MONTHS[ts.month - 1]}-{ts.year}"
    return f"{ts.day:02d}/{ts.month:02d}/{ts.year}"


def _total_cell(rng: np.random.Generator) -> Any:
    amount = round(float(rng.uniform(50, 500_000)), 2)
    return f"{amount:,.2f}" if rng.random() < 0.3 else amount


def generate_ledger_rows(kind: str, rows: int, seed: int = 42) -> list[list[Any]]:
    """Data rows (no header) for ``kind`` in canonical column order."""
    rng = np.random.default_rng(seed)
    out: list[list[Any]] = []
    for i in range(rows):
        serial = int(rng.integers(45_000, 46_000))
        project = str(rng.choice(PROJECTS))
        total = _total_cell(rng)
        if i and i % BROKEN_ROW_EVERY == 0:
            if rng.random() < 0.5:
                project = None  # type: ignore[assignment]
            else:
                total = 0
        if kind == "payment":
            date_cell = _date_cell(rng, serial)
            out.append([
                date_cell,
                date_cell,
                str(rng.choice(PEOPLE)),
                str(rng.choice(ACCOUNTS)),
                project,
                f"دفعة رقم {i + 1}",
                total,
            ])
        else:
            out.append([
                _date_cell(rng, serial),
                project,
                f"U-{int(rng.integers(100, 999))}",
                str(rng.choice(PEOPLE)),
                f"قسط {i + 1}",
                total,
                str(rng.choice(METHODS)),
                "",
            ])
    return out


def create_ledger_workbook(
    output_path: Path,
    kind: str,
    rows: int,
    *,
    headerless: bool = False,
    title: str = "كشف حساب",
    seed: int = 42,
) -> None:
    headers = PAYMENT_HEADERS if kind == "payment" else INCOME_HEADERS
    sheet_data: list[list[Any]] = []
    if not headerless:
        sheet_data.append([title] + [""] * (len(headers) - 1))
        sheet_data.append([""] * len(headers))
        sheet_data.append(headers)
    sheet_data.extend(generate_ledger_rows(kind, rows, seed))

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        pd.DataFrame(sheet_data).to_excel(writer, sheet_name="Sheet1", header=False, index=False)

    print(f"Created {kind} workbook: {output_path}")
    print(f"  Data rows: {rows} ({'headerless' if headerless else 'title + header'})")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate sample payment/income workbooks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s data/payments.xlsx --kind payment --rows 200
  %(prog)s data/incomes.xlsx --kind income --rows 5000 --seed 7
  %(prog)s data/raw_payments.xlsx --headerless
        """,
    )
    parser.add_argument("output", type=Path, help="Output .xlsx path")
    parser.add_argument("--kind", choices=["payment", "income"], default="payment")
    parser.add_argument("--rows", type=int, default=200, help="Number of data rows (default: 200)")
    parser.add_argument("--headerless", action="store_true", help="Omit title and header rows")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1

    create_ledger_workbook(args.output, args.kind, args.rows, headerless=args.headerless, seed=args.seed)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
