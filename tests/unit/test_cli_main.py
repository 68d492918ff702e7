from __future__ import annotations
from pathlib import Path

from src.cli.__main__ import main as cli_main
from src.logging.init import reset_logging


def test_cli_no_files_success(write_config, temp_workdir: Path, capsys):
    reset_logging()
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 0
    assert 'SUMMARY files=0/0 success=0 empty=0 failed=0 accepted=0 rejected=0' in out


def test_cli_directory_missing(write_config, temp_workdir: Path, capsys):
    reset_logging()
    cfg_path = temp_workdir / 'config' / 'import.yml'
    text = cfg_path.read_text(encoding='utf-8').replace('./data', './missing_dir')
    cfg_path.write_text(text, encoding='utf-8')
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 1
    assert 'ERROR directory not found:' in out


def test_cli_invalid_config(temp_workdir: Path, capsys):
    reset_logging()
    (temp_workdir / 'config' / 'import.yml').write_text('output_directory: ./out\n', encoding='utf-8')
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 1
    assert 'ERROR config: config validation failed' in out


def test_cli_config_from_env(temp_workdir: Path, monkeypatch, capsys):
    reset_logging()
    alt = temp_workdir / 'alt.yml'
    alt.write_text('source_directory: ./data\n', encoding='utf-8')
    monkeypatch.setenv('LEDGER_IMPORT_CONFIG', str(alt))
    code = cli_main([])
    assert code == 0
    assert 'SUMMARY files=0/0' in capsys.readouterr().out


def test_cli_rejections_still_exit_zero(write_config, temp_workdir: Path, make_workbook, payment_grid, capsys):
    reset_logging()
    make_workbook(temp_workdir / 'data' / 'payments.xlsx', payment_grid)
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 0
    assert 'INFO payments.xlsx [payment]: imported 2 of 3 rows (1 rejected)' in out
    assert 'WARN row 4 skipped: missing_required_field(project)' in out
    assert 'SUMMARY files=1/1 success=1 empty=0 failed=0 accepted=2 rejected=1' in out
    assert (temp_workdir / 'out' / 'payments.jsonl').exists()


def test_cli_empty_file_exit_two(write_config, temp_workdir: Path, make_workbook, capsys):
    reset_logging()
    make_workbook(temp_workdir / 'data' / 'payments.xlsx', [['التاريخ من', 'الحساب', 'الاجمالي']])
    code = cli_main(['--dry-run'])
    out = capsys.readouterr().out
    assert code == 2
    assert 'no valid records found in 0 rows' in out


def test_cli_debug_mode(write_config, temp_workdir: Path, capsys):
    reset_logging()
    code = cli_main(['--debug'])
    out = capsys.readouterr().out
    assert code == 0
    assert 'DEBUG debug mode enabled' in out


def test_cli_inspect_data(write_config, temp_workdir: Path, make_workbook, payment_grid, capsys):
    reset_logging()
    make_workbook(temp_workdir / 'data' / 'payments.xlsx', payment_grid)
    make_workbook(temp_workdir / 'data' / 'income_raw.xlsx', [['2025-02-01', 'Marina', None, 'C', None, 10]])
    code = cli_main(['--inspect-data'])
    out = capsys.readouterr().out
    assert code == 0
    assert 'FILE: payments.xlsx kind=payment' in out
    assert '  header: row 2' in out
    assert 'FILE: income_raw.xlsx kind=income' in out
    assert '  header: not found (positional columns)' in out
    assert not (temp_workdir / 'out').exists()


def test_cli_dotenv_overrides_config_env(temp_workdir: Path, monkeypatch, capsys):
    reset_logging()
    # restored by monkeypatch even though load_dotenv rewrites os.environ
    monkeypatch.setenv('LEDGER_IMPORT_CONFIG', 'missing.yml')
    (temp_workdir / 'custom.yml').write_text('source_directory: ./data\n', encoding='utf-8')
    (temp_workdir / '.env').write_text('LEDGER_IMPORT_CONFIG=custom.yml\n', encoding='utf-8')
    code = cli_main([])
    assert code == 0
    assert 'SUMMARY files=0/0' in capsys.readouterr().out
