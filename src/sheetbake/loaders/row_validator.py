"""Data row classification and parsing."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence, Tuple

from ..config import TableConfig
from ..errors import CellValueError
from ..sheet_source import SheetRow
from ..value_parsers import ParseContext, parse_column_value
from .schema_extractor import ColumnDescriptor

logger = logging.getLogger(__name__)


class RowKind(Enum):
    DATA = "data"
    COMMENT = "comment"
    END = "end"


@dataclass(frozen=True)
class RowRecord:
    """Parsed values of one data row, in column order."""

    row_index: int
    values: Tuple[Any, ...]

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, position: int) -> Any:
        return self.values[position]


def classify_row(row: Optional[SheetRow], config: TableConfig) -> RowKind:
    """
    Decide whether a row is data, a comment, or the end of the table.

    The first populated cell decides: absent or empty ends the table, text
    containing the note marker (any case) makes a comment row.
    """
    if row is None:
        return RowKind.END
    first = row.cell_text(row.first_column)
    if not first:
        return RowKind.END
    if config.is_note(first):
        return RowKind.COMMENT
    return RowKind.DATA


def parse_row(
    row: SheetRow,
    columns: Sequence[ColumnDescriptor],
    context: ParseContext,
    table_name: Optional[str] = None,
) -> RowRecord:
    """
    Parse every column's cell of a data row.

    Raises:
        CellValueError: Located at the failing row and column
    """
    values = []
    for column in columns:
        text = row.cell_text(column.column_index) or ""
        try:
            values.append(parse_column_value(column.column_type, text, context))
        except CellValueError as e:
            raise CellValueError(
                f"Column '{column.name}' ({column.column_type}): {e.message}",
                table=table_name,
                row=row.index,
                column=column.column_index,
                text=text,
            ) from e
    return RowRecord(row.index, tuple(values))
