"""
Sheet source contract.

The loader never reads spreadsheet files itself. It consumes a
``SheetSource``: rows of already-evaluated cell text plus the sheet's
merged regions. ``GridSheet`` is an in-memory implementation, built from
nested lists or from a pandas DataFrame.
"""

from typing import Any, Iterable, List, Optional, Protocol, Sequence

import pandas as pd


class SheetRow(Protocol):
    """One physical row of a sheet."""

    index: int
    # First populated column, and one past the last one
    first_column: int
    last_column: int

    def cell_text(self, column: int) -> Optional[str]:
        """Evaluated text of a cell, or None if the cell is absent."""
        ...


class SheetSource(Protocol):
    """Read-only access to one sheet."""

    name: str
    first_row: int
    last_row: int

    def row(self, index: int) -> Optional[SheetRow]:
        """The row at a physical index, or None if the row is absent."""
        ...

    def merged_regions(self) -> List[str]:
        """A1-style descriptions of every merged region, e.g. ``A1:B2``."""
        ...


def column_letter(column: int) -> str:
    """Zero-based column index to spreadsheet letters (0 -> A, 26 -> AA)."""
    letters = ""
    column += 1
    while column:
        column, remainder = divmod(column - 1, 26)
        letters = chr(ord("A") + remainder) + letters
    return letters


def cell_reference(row: int, column: int) -> str:
    """Zero-based row/column to an A1-style reference."""
    return f"{column_letter(column)}{row + 1}"


class GridRow:
    """A row backed by a list of optional cell texts."""

    def __init__(self, index: int, cells: Sequence[Optional[str]]):
        self.index = index
        self._cells = list(cells)
        populated = [i for i, cell in enumerate(self._cells) if cell is not None]
        self.first_column = populated[0] if populated else 0
        self.last_column = populated[-1] + 1 if populated else 0

    def cell_text(self, column: int) -> Optional[str]:
        if 0 <= column < len(self._cells):
            return self._cells[column]
        return None

    def __repr__(self) -> str:
        return f"GridRow({self.index}, {self._cells!r})"


class GridSheet:
    """
    In-memory sheet.

    Rows are sequences of cell texts; ``None`` marks an absent cell and a
    ``None`` row (or a row with no cells) marks an absent row. Non-string
    cell values are converted with ``str``.
    """

    def __init__(
        self,
        name: str,
        rows: Iterable[Optional[Sequence[Any]]],
        merged_regions: Optional[Iterable[str]] = None,
    ):
        self.name = name
        self._rows: List[Optional[GridRow]] = []
        for index, cells in enumerate(rows):
            if cells is None or all(cell is None for cell in cells):
                self._rows.append(None)
            else:
                texts = [None if cell is None else str(cell) for cell in cells]
                self._rows.append(GridRow(index, texts))
        self._merged_regions = list(merged_regions or [])
        self.first_row = 0
        self.last_row = len(self._rows) - 1

    def row(self, index: int) -> Optional[GridRow]:
        if 0 <= index < len(self._rows):
            return self._rows[index]
        return None

    def merged_regions(self) -> List[str]:
        return list(self._merged_regions)

    def merge(self, first_row: int, first_column: int, last_row: int, last_column: int) -> None:
        """Record a merged region given by inclusive zero-based bounds."""
        self._merged_regions.append(
            f"{cell_reference(first_row, first_column)}:{cell_reference(last_row, last_column)}"
        )

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame, name: Optional[str] = None) -> "GridSheet":
        """
        Build a sheet from a DataFrame read without a header row.

        Every DataFrame row becomes a sheet row (the column labels are
        ignored). Missing values are absent cells; whole floats are written
        without a trailing ``.0`` since spreadsheets store integers as floats.
        """
        rows = []
        for values in df.itertuples(index=False, name=None):
            rows.append([_frame_cell_text(value) for value in values])
        return cls(name or "Sheet1", rows)


def _frame_cell_text(value: Any) -> Optional[str]:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
