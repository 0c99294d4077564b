"""
sheetbake: compile typed spreadsheet tables into validated records.

A table starts with three header rows (declared types, column names,
comments) followed by data rows. Loading resolves every column's type and
parses every data cell into a typed value, ready for a binary exporter.
"""

from .config import HEADER_ROW_COUNT, TableConfig, get_config
from .enums import EnumRegistry
from .errors import (
    CellValueError,
    EnumDefinitionError,
    SheetError,
    TableSchemaError,
    TableStateError,
    TypeDeclarationError,
)
from .loaders import (
    ColumnDescriptor,
    LoadState,
    RowKind,
    RowRecord,
    TableModel,
    load_workbook,
)
from .sheet_source import GridSheet, SheetRow, SheetSource
from .type_grammar import BaseType, ColumnType, format_type, is_valid_type, resolve
from .value_parsers import ParseContext, Vector3, parse_declared, parse_value

__all__ = [
    'HEADER_ROW_COUNT',
    'TableConfig',
    'get_config',
    'EnumRegistry',
    'CellValueError',
    'EnumDefinitionError',
    'SheetError',
    'TableSchemaError',
    'TableStateError',
    'TypeDeclarationError',
    'ColumnDescriptor',
    'LoadState',
    'RowKind',
    'RowRecord',
    'TableModel',
    'load_workbook',
    'GridSheet',
    'SheetRow',
    'SheetSource',
    'BaseType',
    'ColumnType',
    'format_type',
    'is_valid_type',
    'resolve',
    'ParseContext',
    'Vector3',
    'parse_declared',
    'parse_value',
]
