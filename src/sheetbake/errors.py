"""
Error types raised while loading a table.

All errors are fatal to the table being loaded. They carry whatever location
is known (table, row, column, offending text) so the caller can report an
actionable message.
"""

from typing import Optional


class SheetError(Exception):
    """Base class for all sheetbake errors."""

    def __init__(
        self,
        message: str,
        table: Optional[str] = None,
        row: Optional[int] = None,
        column: Optional[int] = None,
        text: Optional[str] = None,
    ):
        self.message = message
        self.table = table
        self.row = row
        self.column = column
        self.text = text
        super().__init__(self._render())

    def _render(self) -> str:
        location = []
        if self.table is not None:
            location.append(f"table '{self.table}'")
        if self.row is not None:
            location.append(f"row {self.row}")
        if self.column is not None:
            location.append(f"column {self.column}")
        rendered = self.message
        if self.text is not None:
            rendered = f"{rendered}: {self.text!r}"
        if location:
            rendered = f"[{', '.join(location)}] {rendered}"
        return rendered

    def located(self, table: Optional[str] = None, row: Optional[int] = None,
                column: Optional[int] = None) -> "SheetError":
        """Return a copy of this error with any missing location filled in."""
        return type(self)(
            self.message,
            table=self.table if self.table is not None else table,
            row=self.row if self.row is not None else row,
            column=self.column if self.column is not None else column,
            text=self.text,
        )


class TableSchemaError(SheetError):
    """Structural problem with the table: merged cells, header, columns."""


class TypeDeclarationError(SheetError, TypeError):
    """A column's declared type string is malformed or unsupported."""


class CellValueError(SheetError, ValueError):
    """A cell's text does not conform to its column's type."""


class TableStateError(SheetError):
    """A table model was used outside its load lifecycle."""


class EnumDefinitionError(SheetError):
    """An enumeration definition is invalid."""
