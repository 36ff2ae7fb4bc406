from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .tabular_store import TabularStore

"""Result models for one payroll generation run.

A run never raises for a bad row. Every skipped row is described by a RowError
and the partial output is returned alongside the collected errors.
"""

__all__ = [
    "RowErrorKind",
    "RowError",
    "GenerationResult",
]


class RowErrorKind(Enum):
    """Why a time record produced no processed row.

    - MISSING_FIELD: a required cell is absent or blank (validation error)
    - DEPARTMENT_NOT_FOUND: no rate row has the department code (lookup error)
    - INVALID_NUMBER: hours or a resolved rate is not numeric (parse error)
    """
    MISSING_FIELD = "MISSING_FIELD"
    DEPARTMENT_NOT_FOUND = "DEPARTMENT_NOT_FOUND"
    INVALID_NUMBER = "INVALID_NUMBER"


@dataclass(frozen=True)
class RowError:
    """Row-level failure with its location in the time-record table."""
    row: int  # 0-based data row in the payroll table
    column: int  # 0-based column, -1 when not tied to one cell
    column_name: str | None
    kind: RowErrorKind
    message: str

    def describe(self) -> str:
        where = f"row {self.row}"
        if self.column >= 0:
            where += f", column {self.column}"
            if self.column_name:
                where += f" ({self.column_name})"
        return f"{self.kind.value} at {where}: {self.message}"


@dataclass
class GenerationResult:
    """Processed table plus diagnostics for a generation run."""
    processed: TabularStore
    source_rows: int
    errors: list[RowError] = field(default_factory=list)

    @property
    def processed_rows(self) -> int:
        return self.processed.row_count

    @property
    def skipped_rows(self) -> int:
        return len({e.row for e in self.errors})

    @property
    def ok(self) -> bool:
        return not self.errors

    def count(self, kind: RowErrorKind) -> int:
        return sum(1 for e in self.errors if e.kind is kind)

    def errors_for_row(self, row: int) -> list[RowError]:
        return [e for e in self.errors if e.row == row]
