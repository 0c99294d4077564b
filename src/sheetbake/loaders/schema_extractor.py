"""
Header schema extraction.

The first three rows of a table declare, per column, its type, its name and
an optional comment. Columns whose type contains the note marker are
annotations and are left out of the schema.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..config import TableConfig
from ..enums import EnumRegistry
from ..errors import TableSchemaError, TypeDeclarationError
from ..sheet_source import SheetRow
from ..type_grammar import BaseType, ColumnType, resolve

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColumnDescriptor:
    """One data column of a table."""

    name: str
    declared_type: str
    column_type: ColumnType
    comment: Optional[str]
    column_index: int

    @property
    def base_type(self) -> BaseType:
        return self.column_type.base

    @property
    def sub_types(self) -> Tuple[str, ...]:
        return self.column_type.sub_types


def _text(row: Optional[SheetRow], column: int) -> Optional[str]:
    if row is None:
        return None
    return row.cell_text(column)


def extract_schema(
    type_row: Optional[SheetRow],
    name_row: Optional[SheetRow],
    comment_row: Optional[SheetRow],
    config: TableConfig,
    enums: Optional[EnumRegistry] = None,
    table_name: Optional[str] = None,
) -> List[ColumnDescriptor]:
    """
    Build the column descriptors from the three header rows.

    Args:
        type_row: Row of declared types; its populated range is the column range
        name_row: Row of column names
        comment_row: Row of comments, may be None
        config: Note marker and key column name
        enums: Registry for enumeration columns
        table_name: Used in error messages

    Returns:
        Descriptors in physical column order

    Raises:
        TableSchemaError: Missing type row, empty column, empty or duplicate
            name, missing key column
        TypeDeclarationError: A declared type does not resolve
    """
    if type_row is None:
        raise TableSchemaError("Type row is missing", table=table_name, row=0)

    columns: Dict[str, ColumnDescriptor] = {}
    for index in range(type_row.first_column, type_row.last_column):
        declared = _text(type_row, index) or ""
        name = _text(name_row, index) or ""
        comment = _text(comment_row, index)

        if config.is_note(declared):
            logger.debug(f"[{table_name}] Skipping note column {index}")
            continue
        if not declared:
            raise TableSchemaError("Empty column", table=table_name, column=index)
        try:
            column_type = resolve(declared, enums)
        except TypeDeclarationError as e:
            raise e.located(table=table_name, column=index) from e
        if not name:
            raise TableSchemaError("Empty column name", table=table_name, column=index)
        if name in columns:
            raise TableSchemaError("Duplicate column name", table=table_name, column=index, text=name)

        columns[name] = ColumnDescriptor(
            name=name,
            declared_type=declared,
            column_type=column_type,
            comment=comment or None,
            column_index=index,
        )

    if config.key_column not in columns:
        raise TableSchemaError(f"Table must have a '{config.key_column}' column", table=table_name)

    return list(columns.values())
