# Shared pytest fixtures
from __future__ import annotations

import logging
import tempfile
from collections.abc import Callable
from pathlib import Path

import pytest

from payroll_ledger.logging.init import APP_LOGGER_NAME, reset_logging
from payroll_ledger.models.records import PAYROLL_HEADER, RATES_HEADER

RATES_ROWS = [
    ["D1", "Sales", "20.0", "30.0"],
    ["D2", "Support", "15.5", "23.25"],
]

PAYROLL_ROWS = [
    ["1", "Jo", "Lee", "D1", "Clerk", "35"],
    ["2", "Ann", "Park", "D1", "Clerk", "45"],
    ["3", "Sam", "Cho", "D2", "Agent", "40"],
]


def _csv_text(header, rows) -> str:
    lines = [",".join(header)] + [",".join(r) for r in rows]
    return "\n".join(lines) + "\n"


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("PAYROLL_CONFIG", raising=False)
        monkeypatch.delenv("PAYROLL_DATA_DIR", raising=False)
        yield p


@pytest.fixture()
def write_csv(temp_workdir: Path) -> Callable[..., Path]:
    def _write(name: str, header, rows) -> Path:
        path = temp_workdir / name
        path.write_text(_csv_text(header, rows), encoding="utf-8")
        return path
    return _write


@pytest.fixture()
def sample_inputs(write_csv) -> tuple[Path, Path]:
    rates = write_csv("Department_Rates_File.csv", RATES_HEADER, RATES_ROWS)
    payroll = write_csv("Employee_Payroll_File.csv", PAYROLL_HEADER, PAYROLL_ROWS)
    return rates, payroll


@pytest.fixture()
def sample_config_yaml() -> str:
    return """data_directory: ./data
files:
  rates: rates.csv
  payroll: payroll.csv
  processed: processed.csv
overtime_threshold: 40
encoding: utf-8
error_log_directory: ./logs
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "payroll.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture(autouse=True)
def _detach_app_logger():
    # handlers bound to a test's captured stdout must not outlive it
    yield
    logger = logging.getLogger(APP_LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    reset_logging()
