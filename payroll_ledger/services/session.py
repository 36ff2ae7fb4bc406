from __future__ import annotations

import logging
from pathlib import Path

from ..config.loader import PayrollConfig
from ..csvio.codec import load_table, save_table
from ..logging.error_log import ErrorLogBuffer
from ..models.generation_result import GenerationResult
from ..models.records import PROCESSED_HEADER
from ..models.tabular_store import TabularStore
from .bootstrap import ensure_input_files
from .calculator import ProgressCallback, generate

"""Payroll session: the operations a presentation layer drives.

The session owns three tables:
- rates and payroll: loaded from CSV, edited in place, saved back
- processed: replaced wholesale by every generate() call and written to the
  configured processed path

Each input table remembers the file it was last loaded from or saved to; when
none was chosen the configured default path is used.

Loading never leaves a table half-replaced: a DecodeError propagates and the
previous table stays as it was.
"""

__all__ = [
    "TABLE_NAMES",
    "PayrollSession",
    "SessionError",
]

logger = logging.getLogger(__name__)

TABLE_NAMES = ("rates", "payroll", "processed")


class SessionError(Exception):
    """Invalid request against the session (unknown table name)."""


class PayrollSession:
    def __init__(self, config: PayrollConfig | None = None, error_log: ErrorLogBuffer | None = None) -> None:
        self.config = config or PayrollConfig()
        self.error_log = error_log or ErrorLogBuffer(self.config.error_log_directory)
        self.rates = TabularStore()
        self.payroll = TabularStore()
        self.processed = TabularStore(PROCESSED_HEADER)
        self._paths: dict[str, Path] = {
            "rates": self.config.rates_path,
            "payroll": self.config.payroll_path,
            "processed": self.config.processed_path,
        }

    # ---- table access ---------------------------------------------------------

    def table(self, name: str) -> TabularStore:
        if name not in TABLE_NAMES:
            raise SessionError(f"unknown table: {name!r} (expected one of {', '.join(TABLE_NAMES)})")
        return getattr(self, name)

    def path_of(self, name: str) -> Path:
        self.table(name)
        return self._paths[name]

    # ---- lifecycle ------------------------------------------------------------

    def startup(self) -> None:
        """Create missing input files, then load both input tables."""
        ensure_input_files(self._paths["rates"], self._paths["payroll"], self.config.encoding)
        self.load_rates()
        self.load_payroll()

    def _load(self, name: str, path: Path | str | None) -> TabularStore:
        target = Path(path) if path is not None else self._paths[name]
        store = load_table(target, self.config.encoding)
        setattr(self, name, store)
        self._paths[name] = target
        logger.info(f"Loaded {name}: {target} ({store.row_count} rows)")
        return store

    def load_rates(self, path: Path | str | None = None) -> TabularStore:
        return self._load("rates", path)

    def load_payroll(self, path: Path | str | None = None) -> TabularStore:
        return self._load("payroll", path)

    def load_processed(self) -> TabularStore:
        return self._load("processed", None)

    def _save(self, name: str, path: Path | str | None) -> Path:
        target = Path(path) if path is not None else self._paths[name]
        save_table(self.table(name), target, self.config.encoding)
        self._paths[name] = target
        logger.info(f"Updated successfully: {target}")
        return target

    def save_rates(self, path: Path | str | None = None) -> Path:
        """Save the rates table; a given path becomes the current one."""
        return self._save("rates", path)

    def save_payroll(self, path: Path | str | None = None) -> Path:
        """Save the payroll table; a given path becomes the current one."""
        return self._save("payroll", path)

    def save(self, name: str, path: Path | str | None = None) -> Path:
        return self._save(name, path)

    # ---- generation -----------------------------------------------------------

    def generate(self, progress: ProgressCallback | None = None) -> GenerationResult:
        """Compute the processed table, persist it and log row errors.

        Raises:
            EncodeError: the processed file cannot be written (the new table is
                still kept in memory)
        """
        result = generate(
            self.rates,
            self.payroll,
            overtime_threshold=self.config.overtime_threshold,
            progress=progress,
        )
        self.processed = result.processed
        self.error_log.extend_row_errors(self._paths["payroll"], result.errors)
        try:
            self._save("processed", None)
        finally:
            self.error_log.flush()
        return result
