from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from ..csvio.codec import DELIMITER, LINE_END
from ..models.records import PAYROLL_HEADER, RATES_HEADER

"""First-run bootstrap of the two input CSV files.

A missing input file is created holding only its canonical header line.
Existing files are never touched, so running the check again is a no-op.
"""

__all__ = [
    "BootstrapError",
    "ensure_file",
    "ensure_input_files",
]

logger = logging.getLogger(__name__)


class BootstrapError(Exception):
    """An input file could not be created."""


def ensure_file(path: Path | str, header: Sequence[str], encoding: str = "utf-8") -> bool:
    """Create ``path`` with a single header line if it does not exist.

    Returns:
        True if the file was created, False if it already existed

    Raises:
        BootstrapError: the file or its parent directory cannot be created
    """
    p = Path(path)
    if p.exists():
        logger.info(f"File already exists: {p}")
        return False
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise BootstrapError(f"cannot create directory {p.parent}: {e}") from e
    try:
        # never clobber an existing file
        with p.open("x", encoding=encoding, newline="") as f:
            f.write(DELIMITER.join(header) + LINE_END)
    except FileExistsError:
        logger.info(f"File already exists: {p}")
        return False
    except OSError as e:
        raise BootstrapError(f"cannot create {p}: {e}") from e
    logger.info(f"File created: {p}")
    return True


def ensure_input_files(
    rates_path: Path | str, payroll_path: Path | str, encoding: str = "utf-8"
) -> dict[Path, bool]:
    """Ensure both the Rates and the Payroll file exist.

    Returns:
        path -> whether it was created by this call
    """
    return {
        Path(rates_path): ensure_file(rates_path, RATES_HEADER, encoding),
        Path(payroll_path): ensure_file(payroll_path, PAYROLL_HEADER, encoding),
    }
