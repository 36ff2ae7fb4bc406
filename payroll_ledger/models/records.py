from __future__ import annotations

from dataclasses import astuple, dataclass

"""Payroll record models and the canonical CSV headers.

RateRecord / TimeRecord mirror one row of the Rates and Payroll tables.
ProcessedRecord is derived by the calculator and never edited directly.
Column positions follow the header order below; the calculator reads cells by
position, not by header text.
"""

__all__ = [
    "RATES_HEADER",
    "PAYROLL_HEADER",
    "PROCESSED_HEADER",
    "RateRecord",
    "TimeRecord",
    "ProcessedRecord",
    "format_decimal",
]

RATES_HEADER: tuple[str, ...] = (
    "Dept. Code",
    "Dept. Name",
    "Regular Rate $",
    "Overtime Rate $",
)

PAYROLL_HEADER: tuple[str, ...] = (
    "ID. No",
    "First Name",
    "Last Name",
    "Dept. Code",
    "Position",
    "Hours Worked",
)

PROCESSED_HEADER: tuple[str, ...] = PAYROLL_HEADER + (
    "Regular Pay",
    "Overtime Pay",
    "Gross Pay",
)

# Column positions
RATE_DEPT_CODE = 0
RATE_REGULAR = 2
RATE_OVERTIME = 3
TIME_DEPT_CODE = 3
TIME_HOURS = 5


def format_decimal(value: float) -> str:
    """Full-precision text form of a computed amount (no currency rounding)."""
    return repr(float(value))


@dataclass(frozen=True)
class RateRecord:
    """One department's pay-rate configuration."""
    dept_code: str
    dept_name: str | None
    regular_rate: float
    overtime_rate: float


@dataclass(frozen=True)
class TimeRecord:
    """One employee's worked-hours entry for a pay period."""
    employee_id: str
    first_name: str
    last_name: str
    dept_code: str
    position: str
    hours_worked: str  # kept as entered; parsed by the calculator


@dataclass(frozen=True)
class ProcessedRecord:
    """TimeRecord fields plus the computed pay amounts."""
    employee_id: str
    first_name: str
    last_name: str
    dept_code: str
    position: str
    hours_worked: str
    regular_pay: float
    overtime_pay: float
    gross_pay: float

    @classmethod
    def from_time_record(
        cls, rec: TimeRecord, regular_pay: float, overtime_pay: float, gross_pay: float
    ) -> ProcessedRecord:
        return cls(
            employee_id=rec.employee_id,
            first_name=rec.first_name,
            last_name=rec.last_name,
            dept_code=rec.dept_code,
            position=rec.position,
            hours_worked=rec.hours_worked,
            regular_pay=regular_pay,
            overtime_pay=overtime_pay,
            gross_pay=gross_pay,
        )

    def to_row(self) -> list[str]:
        """Cells in PROCESSED_HEADER order."""
        values = astuple(self)
        return list(values[:6]) + [format_decimal(v) for v in values[6:]]
