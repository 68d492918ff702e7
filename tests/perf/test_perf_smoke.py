from __future__ import annotations

import importlib.util
import time
from pathlib import Path

from src.services.pipeline import import_payments

"""Performance smoke test: in-memory pipeline throughput on generated rows.
Lenient bound so CI stays green on slow runners.
"""

SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "gen_sample_ledger.py"


def _load_generator():
    spec = importlib.util.spec_from_file_location("gen_sample_ledger_perf", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    assert spec.loader is not None
    spec.loader.exec_module(module)
    return module


def test_pipeline_throughput_smoke():
    gen = _load_generator()
    rows = 5_000
    grid = [["كشف حساب"], gen.PAYMENT_HEADERS] + gen.generate_ledger_rows("payment", rows)

    start = time.perf_counter()
    result = import_payments(grid)
    elapsed = time.perf_counter() - start

    assert result.total_rows == rows
    # every 25th row after the first is broken
    assert result.rejection_count == (rows - 1) // gen.BROKEN_ROW_EVERY
    throughput = rows / elapsed
    assert throughput > 200, f"pipeline too slow: {throughput:.0f} rows/s"
