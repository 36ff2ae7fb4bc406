from __future__ import annotations

from pathlib import Path

import pytest

from payroll_ledger.cli import main as cli_main
from payroll_ledger.csvio.codec import load_table
from payroll_ledger.logging.init import reset_logging


def test_cli_init_creates_input_files(temp_workdir: Path, capsys):
    reset_logging()
    code = cli_main(["init"])
    out = capsys.readouterr().out
    assert code == 0
    assert "INFO File created:" in out
    assert (temp_workdir / "Department_Rates_File.csv").exists()
    assert (temp_workdir / "Employee_Payroll_File.csv").exists()


def test_cli_show_rates(sample_inputs, capsys):
    reset_logging()
    code = cli_main(["show", "rates"])
    out = capsys.readouterr().out
    assert code == 0
    assert "TABLE: rates" in out
    assert "Sales" in out and "Support" in out


def test_cli_show_empty_table(temp_workdir: Path, capsys):
    reset_logging()
    code = cli_main(["show", "payroll"])
    out = capsys.readouterr().out
    assert code == 0
    assert "(no rows)" in out


def test_cli_show_processed_before_generate_is_file_error(sample_inputs, capsys):
    reset_logging()
    code = cli_main(["show", "processed"])
    assert code == 1
    assert "ERROR file:" in capsys.readouterr().out


def test_cli_add_row_with_values(sample_inputs):
    reset_logging()
    _, payroll = sample_inputs
    code = cli_main(["add-row", "payroll", "4", "Kim", "Ng", "D2", "Agent", "12"])
    assert code == 0
    assert load_table(payroll).rows[-1] == ["4", "Kim", "Ng", "D2", "Agent", "12"]


def test_cli_add_empty_row(sample_inputs):
    reset_logging()
    rates, _ = sample_inputs
    assert cli_main(["add-row", "rates"]) == 0
    assert load_table(rates).rows[-1] == ["", "", "", ""]


def test_cli_duplicate_row(sample_inputs):
    reset_logging()
    _, payroll = sample_inputs
    assert cli_main(["duplicate-row", "payroll", "0"]) == 0
    rows = load_table(payroll).rows
    assert len(rows) == 4
    assert rows[-1] == rows[0]


def test_cli_duplicate_missing_row(sample_inputs, capsys):
    reset_logging()
    assert cli_main(["duplicate-row", "payroll", "7"]) == 1
    assert "WARN payroll: no row 7 to duplicate" in capsys.readouterr().out


def test_cli_remove_rows(sample_inputs):
    reset_logging()
    _, payroll = sample_inputs
    assert cli_main(["remove-rows", "payroll", "0", "2"]) == 0
    assert [r[0] for r in load_table(payroll).rows] == ["2"]


def test_cli_set_cell(sample_inputs):
    reset_logging()
    rates, _ = sample_inputs
    assert cli_main(["set-cell", "rates", "1", "2", "16.0"]) == 0
    assert load_table(rates).get(1, 2) == "16.0"


@pytest.mark.parametrize("col", ["9", "4", "-1"])
def test_cli_set_cell_outside_columns_fails(sample_inputs, capsys, col):
    reset_logging()
    rates, _ = sample_inputs
    before = load_table(rates)
    code = cli_main(["set-cell", "rates", "0", col, "X"])
    out = capsys.readouterr().out
    assert code == 1
    assert f"WARN rates: no column {col}" in out
    assert "Updated successfully" not in out
    assert load_table(rates) == before


def test_cli_bad_config(temp_workdir: Path, capsys):
    reset_logging()
    code = cli_main(["--config", str(temp_workdir / "config" / "absent.yml"), "init"])
    assert code == 1
    assert "ERROR config:" in capsys.readouterr().out


def test_cli_config_from_env(write_config: Path, temp_workdir: Path, monkeypatch):
    reset_logging()
    monkeypatch.setenv("PAYROLL_CONFIG", str(write_config))
    assert cli_main(["init"]) == 0
    assert (temp_workdir / "data" / "rates.csv").exists()


def test_cli_config_from_dotenv(write_config: Path, temp_workdir: Path, monkeypatch):
    reset_logging()
    # registered so teardown removes what load_dotenv puts into os.environ
    monkeypatch.setenv("PAYROLL_CONFIG", "unused")
    monkeypatch.delenv("PAYROLL_CONFIG")
    (temp_workdir / ".env").write_text(f"PAYROLL_CONFIG={write_config}\n", encoding="utf-8")
    assert cli_main(["init"]) == 0
    assert (temp_workdir / "data" / "payroll.csv").exists()


def test_cli_debug_flag(sample_inputs, capsys):
    reset_logging()
    assert cli_main(["--debug", "show", "rates"]) == 0
    out = capsys.readouterr().out
    assert "DEBUG debug mode enabled" in out
