from __future__ import annotations

import re
from pathlib import Path

from src.cli.__main__ import EXIT_FATAL, EXIT_PARTIAL_FAILURE, EXIT_SUCCESS_ALL, main
from src.logging.init import reset_logging

"""Exit code and SUMMARY line contract.

0: every workbook produced records (row rejections allowed)
2: some workbook could not be read or had no valid records
1: fatal configuration / directory problem
"""

SUMMARY_RE = re.compile(
    r"^SUMMARY files=(\d+)/(\d+) success=(\d+) empty=(\d+) failed=(\d+) "
    r"accepted=(\d+) rejected=(\d+) elapsed_sec=[0-9.]+$"
)


def _summary(out: str) -> tuple[int, ...]:
    lines = [line for line in out.splitlines() if line.startswith("SUMMARY ")]
    assert len(lines) == 1
    m = SUMMARY_RE.match(lines[0])
    assert m, lines[0]
    return tuple(int(g) for g in m.groups())


def test_exit_code_values():
    assert (EXIT_SUCCESS_ALL, EXIT_FATAL, EXIT_PARTIAL_FAILURE) == (0, 1, 2)


def test_all_success(write_config, temp_workdir: Path, make_workbook, payment_grid, income_grid, capsys):
    reset_logging()
    make_workbook(temp_workdir / "data" / "payments.xlsx", payment_grid)
    make_workbook(temp_workdir / "data" / "income_q1.xlsx", income_grid)
    assert main([]) == EXIT_SUCCESS_ALL
    assert _summary(capsys.readouterr().out) == (2, 2, 2, 0, 0, 3, 2)


def test_partial_failure(write_config, temp_workdir: Path, make_workbook, payment_grid, capsys):
    reset_logging()
    make_workbook(temp_workdir / "data" / "payments.xlsx", payment_grid)
    (temp_workdir / "data" / "broken.xlsx").write_bytes(b"\x00\x01")
    assert main([]) == EXIT_PARTIAL_FAILURE
    assert _summary(capsys.readouterr().out) == (2, 2, 1, 0, 1, 2, 1)


def test_fatal_missing_config(temp_workdir: Path, capsys):
    reset_logging()
    assert main(["--config", str(temp_workdir / "none.yml")]) == EXIT_FATAL
    assert "ERROR config: config file not found" in capsys.readouterr().out
