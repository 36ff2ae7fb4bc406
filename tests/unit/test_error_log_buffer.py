from __future__ import annotations

import json
from pathlib import Path

from payroll_ledger.logging.error_log import ErrorLogBuffer, ErrorRecord
from payroll_ledger.models.generation_result import RowError, RowErrorKind


def test_error_log_buffer_flush(tmp_path: Path):
    buf = ErrorLogBuffer(tmp_path / "logs")
    buf.append(ErrorRecord.create("p.csv", 1, 3, "DEPARTMENT_NOT_FOUND", "ZZ"))
    buf.append(ErrorRecord.create("p.csv", 2, 5, "MISSING_FIELD", "empty"))
    path = buf.flush()
    assert path is not None and path.exists()
    assert path.parent == tmp_path / "logs"
    assert path.name.startswith("errors-") and path.suffix == ".log"
    lines = path.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 2
    for raw in lines:
        obj = json.loads(raw)
        assert set(obj.keys()) == {"timestamp", "file", "row", "column", "error_type", "message"}
    assert len(buf) == 0


def test_error_log_buffer_multiple_flushes_append(tmp_path: Path):
    buf = ErrorLogBuffer(tmp_path)
    buf.append(ErrorRecord.create("p.csv", 1, 3, "DEPARTMENT_NOT_FOUND", "x"))
    path = buf.flush()
    size1 = path.stat().st_size
    buf.append(ErrorRecord.create("p.csv", 2, 3, "DEPARTMENT_NOT_FOUND", "y"))
    path2 = buf.flush()
    assert path == path2
    assert path2.stat().st_size > size1


def test_empty_flush_creates_nothing(tmp_path: Path):
    buf = ErrorLogBuffer(tmp_path / "logs")
    assert buf.flush() is None
    assert not (tmp_path / "logs").exists()


def test_extend_row_errors(tmp_path: Path):
    buf = ErrorLogBuffer(tmp_path)
    buf.extend_row_errors(
        Path("data/payroll.csv"),
        [RowError(row=0, column=5, column_name="Hours Worked", kind=RowErrorKind.INVALID_NUMBER, message="bad")],
    )
    rec = buf.records[0]
    assert rec.file == str(Path("data/payroll.csv"))
    assert (rec.row, rec.column, rec.error_type, rec.message) == (0, 5, "INVALID_NUMBER", "bad")
