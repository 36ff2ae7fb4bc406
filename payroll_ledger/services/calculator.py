from __future__ import annotations

import logging
import math
import re
from collections.abc import Callable

from ..models.generation_result import GenerationResult, RowError, RowErrorKind
from ..models.records import (
    PAYROLL_HEADER,
    PROCESSED_HEADER,
    RATES_HEADER,
    RATE_DEPT_CODE,
    RATE_OVERTIME,
    RATE_REGULAR,
    TIME_DEPT_CODE,
    TIME_HOURS,
    ProcessedRecord,
    RateRecord,
    TimeRecord,
)
from ..models.tabular_store import Cell, TabularStore

"""Payroll calculation service.

Joins the Payroll (time record) table with the Rates table on department code
and computes regular, overtime and gross pay per time record.

Per time record, in table order:
1. every output field (columns 0-5) must be present and non-blank
2. department code is resolved by a first-match linear scan of the Rates table
3. hours and both resolved rates are parsed as floats
4. regular pay = hours * regular rate (on all hours)
   overtime pay = (hours - threshold) * overtime rate when hours > threshold
   gross pay = regular + overtime
5. one processed row is emitted; a failing row emits nothing

Failures never abort the batch. They are returned as RowError entries on the
GenerationResult and logged at WARN.
"""

__all__ = [
    "DEFAULT_OVERTIME_THRESHOLD",
    "compute_pay",
    "find_department",
    "generate",
]

logger = logging.getLogger(__name__)

DEFAULT_OVERTIME_THRESHOLD = 40.0

ProgressCallback = Callable[[int], None]

# plain ASCII decimal with optional exponent
_DECIMAL = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


class _SkipRow(Exception):
    def __init__(self, error: RowError) -> None:
        super().__init__(error.message)
        self.error = error


def _is_blank(value: Cell) -> bool:
    return value is None or str(value).strip() == ""


def _parse_number(value: Cell) -> float:
    """Parse a cell as float; ValueError when it is not a finite number."""
    if value is None:
        raise ValueError("empty value")
    text = str(value).strip()
    if not _DECIMAL.fullmatch(text):
        raise ValueError(f"not a decimal number: {value!r}")
    number = float(text)
    if not math.isfinite(number):
        raise ValueError(f"not a finite number: {value!r}")
    return number


def compute_pay(
    hours: float,
    regular_rate: float,
    overtime_rate: float,
    threshold: float = DEFAULT_OVERTIME_THRESHOLD,
) -> tuple[float, float, float]:
    """Return (regular_pay, overtime_pay, gross_pay).

    Regular pay is NOT capped at the threshold: hours above it are paid at the
    regular rate and again at the overtime rate.
    """
    regular_pay = hours * regular_rate
    overtime_pay = (hours - threshold) * overtime_rate if hours > threshold else 0.0
    return regular_pay, overtime_pay, regular_pay + overtime_pay


def find_department(rates: TabularStore, dept_code: str) -> int | None:
    """Index of the first rate row whose code equals ``dept_code`` exactly."""
    for i in range(rates.row_count):
        if rates.get(i, RATE_DEPT_CODE) == dept_code:
            return i
    return None


def _column_name(store: TabularStore, col: int, fallback: tuple[str, ...]) -> str | None:
    columns = store.columns
    if col < len(columns):
        return columns[col]
    return fallback[col] if col < len(fallback) else None


def _read_time_record(time_records: TabularStore, row: int) -> TimeRecord:
    values: list[str] = []
    for col in range(len(PAYROLL_HEADER)):
        cell = time_records.get(row, col)
        if _is_blank(cell):
            raise _SkipRow(RowError(
                row=row,
                column=col,
                column_name=_column_name(time_records, col, PAYROLL_HEADER),
                kind=RowErrorKind.MISSING_FIELD,
                message="missing or empty value",
            ))
        values.append(str(cell))
    return TimeRecord(*values)


def _read_rate(rates: TabularStore, rate_row: int, rec: TimeRecord, row: int) -> RateRecord:
    parsed: dict[int, float] = {}
    for col in (RATE_REGULAR, RATE_OVERTIME):
        cell = rates.get(rate_row, col)
        try:
            parsed[col] = _parse_number(cell)
        except ValueError:
            raise _SkipRow(RowError(
                row=row,
                column=TIME_DEPT_CODE,
                column_name=PAYROLL_HEADER[TIME_DEPT_CODE],
                kind=RowErrorKind.INVALID_NUMBER,
                message=(
                    f"rate row {rate_row} for department {rec.dept_code!r} has non-numeric "
                    f"{_column_name(rates, col, RATES_HEADER)}: {cell!r}"
                ),
            )) from None
    dept_name = rates.get(rate_row, 1)
    return RateRecord(
        dept_code=rec.dept_code,
        dept_name=None if dept_name is None else str(dept_name),
        regular_rate=parsed[RATE_REGULAR],
        overtime_rate=parsed[RATE_OVERTIME],
    )


def _process_row(
    rates: TabularStore, time_records: TabularStore, row: int, threshold: float
) -> ProcessedRecord:
    rec = _read_time_record(time_records, row)

    rate_row = find_department(rates, rec.dept_code)
    if rate_row is None:
        raise _SkipRow(RowError(
            row=row,
            column=TIME_DEPT_CODE,
            column_name=_column_name(time_records, TIME_DEPT_CODE, PAYROLL_HEADER),
            kind=RowErrorKind.DEPARTMENT_NOT_FOUND,
            message=f"department code {rec.dept_code!r} not found in rates",
        ))

    try:
        hours = _parse_number(rec.hours_worked)
    except ValueError:
        raise _SkipRow(RowError(
            row=row,
            column=TIME_HOURS,
            column_name=_column_name(time_records, TIME_HOURS, PAYROLL_HEADER),
            kind=RowErrorKind.INVALID_NUMBER,
            message=f"hours worked is not a number: {rec.hours_worked!r}",
        )) from None
    if hours < 0:
        logger.warning(f"row {row}: negative hours worked ({rec.hours_worked})")

    rate = _read_rate(rates, rate_row, rec, row)
    regular, overtime, gross = compute_pay(hours, rate.regular_rate, rate.overtime_rate, threshold)
    return ProcessedRecord.from_time_record(rec, regular, overtime, gross)


def generate(
    rates: TabularStore,
    time_records: TabularStore,
    *,
    overtime_threshold: float = DEFAULT_OVERTIME_THRESHOLD,
    progress: ProgressCallback | None = None,
) -> GenerationResult:
    """Join time records with rates and compute pay for every row.

    Args:
        rates: Rates table (code, name, regular rate, overtime rate)
        time_records: Payroll table (id, first, last, code, position, hours)
        overtime_threshold: Hours above which overtime pay applies
        progress: Called with the row index after each row is handled

    Returns:
        GenerationResult holding a new processed table (PROCESSED_HEADER
        columns) and the errors of every skipped row
    """
    processed = TabularStore(PROCESSED_HEADER)
    result = GenerationResult(processed=processed, source_rows=time_records.row_count)

    for row in range(time_records.row_count):
        try:
            record = _process_row(rates, time_records, row, overtime_threshold)
        except _SkipRow as skip:
            result.errors.append(skip.error)
            logger.warning(f"skipped {skip.error.describe()}")
        else:
            processed.add_row(record.to_row())
        if progress is not None:
            progress(row)

    logger.debug(
        f"generated rows={result.processed_rows}/{result.source_rows} errors={len(result.errors)}"
    )
    return result
