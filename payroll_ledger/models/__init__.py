"""Domain models for the payroll ledger.

This package contains the table abstraction backing every dataset, the payroll
record types with their canonical headers, and the result/error models produced
by a generation run.
"""

from .error_record import ErrorRecord
from .generation_result import GenerationResult, RowError, RowErrorKind
from .records import (
    PAYROLL_HEADER,
    PROCESSED_HEADER,
    RATES_HEADER,
    ProcessedRecord,
    RateRecord,
    TimeRecord,
)
from .tabular_store import TabularStore

__all__ = [
    # Table
    "TabularStore",
    # Records
    "RATES_HEADER",
    "PAYROLL_HEADER",
    "PROCESSED_HEADER",
    "RateRecord",
    "TimeRecord",
    "ProcessedRecord",
    # Results
    "ErrorRecord",
    "GenerationResult",
    "RowError",
    "RowErrorKind",
]
