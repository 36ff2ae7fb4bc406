from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

"""TabularStore model: an in-memory ordered table of named columns and rows.

The store is generic over any schema. Cells are free-form text (or None for an
absent cell); no uniqueness, ordering or type rules are enforced. Rows are
addressed only by position, so batch removal must run from the highest index
down.

Rows whose length differs from the column count are tolerated: reading past
the end of a short row yields None instead of raising.
"""

if TYPE_CHECKING:
    import pandas as pd

__all__ = [
    "Cell",
    "TabularStore",
]

Cell = str | None


class TabularStore:
    """Ordered table of columns (duplicates allowed) and positional rows."""

    def __init__(
        self,
        columns: Iterable[str] | None = None,
        rows: Iterable[Sequence[Cell]] | None = None,
    ) -> None:
        self._columns: list[str] = list(columns) if columns is not None else []
        self._rows: list[list[Cell]] = []
        if rows is not None:
            for r in rows:
                self.add_row(r)

    # ---- schema -------------------------------------------------------------

    @property
    def columns(self) -> list[str]:
        return list(self._columns)

    @property
    def column_count(self) -> int:
        return len(self._columns)

    def set_columns(self, names: Iterable[str]) -> None:
        """Replace the column list. Existing rows are discarded."""
        self._columns = list(names)
        self._rows.clear()

    def clear_columns(self) -> None:
        self.set_columns([])

    # ---- rows ---------------------------------------------------------------

    @property
    def rows(self) -> list[list[Cell]]:
        return [list(r) for r in self._rows]

    @property
    def row_count(self) -> int:
        return len(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def _in_range(self, index: int) -> bool:
        return 0 <= index < len(self._rows)

    def add_row(self, values: Sequence[Cell]) -> int:
        """Append a row verbatim (length is not checked). Returns its index."""
        self._rows.append(list(values))
        return len(self._rows) - 1

    def add_empty_row(self) -> int:
        return self.add_row([None] * len(self._columns))

    def duplicate_row(self, index: int) -> int | None:
        """Append a copy of the row at ``index``; None if nothing was copied."""
        if not self._in_range(index):
            return None
        return self.add_row(self.row_values(index))

    def replace_row(self, index: int, values: Sequence[Cell]) -> None:
        if self._in_range(index):
            self._rows[index] = list(values)

    def remove_row(self, index: int) -> None:
        """Remove the row at ``index``. Out-of-range positions are ignored."""
        if self._in_range(index):
            del self._rows[index]

    def remove_rows(self, indices: Iterable[int]) -> None:
        # highest first so earlier positions stay valid
        for i in sorted(set(indices), reverse=True):
            self.remove_row(i)

    def clear_rows(self) -> None:
        self._rows.clear()

    # ---- cells --------------------------------------------------------------

    def get(self, row: int, col: int) -> Cell:
        """Return the cell value, or None for an absent cell."""
        if not self._in_range(row) or col < 0:
            return None
        values = self._rows[row]
        if col >= len(values):
            return None
        return values[col]

    def set(self, row: int, col: int, value: Cell) -> None:
        """Set a cell. Short rows are padded with None up to ``col``.

        A row or column outside the table is ignored.
        """
        if not self._in_range(row) or not 0 <= col < len(self._columns):
            return
        values = self._rows[row]
        if col >= len(values):
            values.extend([None] * (col + 1 - len(values)))
        values[col] = value

    def row_values(self, index: int) -> list[Cell]:
        """Row padded (or cut) to the column count."""
        return [self.get(index, c) for c in range(len(self._columns))]

    # ---- export -------------------------------------------------------------

    def to_frame(self) -> pd.DataFrame:
        """Export as a pandas DataFrame of object cells for display."""
        import pandas as pd

        data = [self.row_values(i) for i in range(len(self._rows))]
        frame = pd.DataFrame(data, columns=range(len(self._columns)), dtype=object)
        # assign after construction so duplicate names survive
        frame.columns = list(self._columns)
        return frame

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TabularStore):
            return NotImplemented
        return self._columns == other._columns and self._rows == other._rows

    def __repr__(self) -> str:  # pragma: no cover (trivial)
        return f"TabularStore(columns={self._columns!r}, rows={len(self._rows)})"
