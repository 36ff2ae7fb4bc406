from __future__ import annotations

import json

import pytest

from payroll_ledger.models.error_record import ErrorRecord

"""Unit tests for ErrorRecord."""

KEYS = {"timestamp", "file", "row", "column", "error_type", "message"}


def test_error_record_row_minus_one_support():
    """row=-1 marks a file-level error."""
    rec = ErrorRecord.create(
        file="Employee_Payroll_File.csv",
        row=-1,
        column=-1,
        error_type="FILE_UNREADABLE",
        message="permission denied",
    )
    assert rec.row == -1
    data = json.loads(rec.to_json_line())
    assert data["row"] == -1
    assert data["column"] == -1
    assert data["timestamp"].endswith("Z")
    assert set(data.keys()) == KEYS


def test_error_record_cell_location():
    rec = ErrorRecord.create("payroll.csv", 4, 5, "MISSING_FIELD", "missing or empty value")
    data = json.loads(rec.to_json_line())
    assert (data["row"], data["column"]) == (4, 5)
    assert data["error_type"] == "MISSING_FIELD"


def test_error_record_non_ascii_message_kept():
    rec = ErrorRecord.create("payroll.csv", 0, 1, "MISSING_FIELD", "Zoë")
    assert "Zoë" in rec.to_json_line()


def test_error_record_is_immutable():
    rec = ErrorRecord.create("payroll.csv", 0, 1, "MISSING_FIELD", "x")
    with pytest.raises(AttributeError):
        rec.row = 2
