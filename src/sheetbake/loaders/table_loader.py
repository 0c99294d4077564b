"""
Table model and load orchestration.

A TableModel is built empty, filled by one ``load()`` pass over a sheet
source, and is read-only afterwards. A failed load leaves no partial columns
or rows behind.
"""

import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from ..config import HEADER_ROW_COUNT, TableConfig, get_config
from ..enums import EnumRegistry
from ..errors import TableSchemaError, TableStateError
from ..sheet_source import SheetSource
from ..value_parsers import ParseContext
from .row_validator import RowKind, RowRecord, classify_row, parse_row
from .schema_extractor import ColumnDescriptor, extract_schema

logger = logging.getLogger(__name__)


class LoadState(Enum):
    EMPTY = "empty"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


class TableModel:
    """
    Typed, validated contents of one sheet.

    Attributes:
        source_name: Name of the owning workbook, used for export naming
        table_name: Name of the sheet
        table_count: Number of tables in the owning workbook
    """

    def __init__(
        self,
        sheet: SheetSource,
        source_name: str,
        table_count: int = 1,
        enums: Optional[EnumRegistry] = None,
        config: Optional[TableConfig] = None,
    ):
        self.source_name = source_name
        self.table_name = sheet.name
        self.table_count = table_count
        self._sheet = sheet
        self._enums = enums
        self._config = config or get_config()
        self._columns: Tuple[ColumnDescriptor, ...] = ()
        self._rows: Tuple[RowRecord, ...] = ()
        self._state = LoadState.EMPTY

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def export_name(self) -> str:
        """Workbook name alone for single-table workbooks, else ``workbook_table``."""
        if self.table_count == 1:
            return self.source_name
        return f"{self.source_name}_{self.table_name}"

    def load(self) -> "TableModel":
        """
        Load the sheet: merge check, row count check, header, then data rows.

        Returns:
            self, for chaining

        Raises:
            TableStateError: If the table was already loaded (or failed)
            TableSchemaError: Structural problems with the sheet or header
            TypeDeclarationError: A column type does not resolve
            CellValueError: A cell does not match its column type
        """
        if self._state is not LoadState.EMPTY:
            raise TableStateError(f"Cannot load a table in state '{self._state.value}'", table=self.table_name)

        self._state = LoadState.LOADING
        try:
            columns, rows = self._load()
        except Exception:
            self._state = LoadState.FAILED
            raise

        self._columns = tuple(columns)
        self._rows = tuple(rows)
        self._state = LoadState.LOADED
        logger.info(f"[{self.table_name}] ✓ Loaded {len(self._columns)} column(s), {len(self._rows)} row(s)")
        return self

    def _load(self) -> Tuple[List[ColumnDescriptor], List[RowRecord]]:
        sheet = self._sheet
        config = self._config

        merged = sheet.merged_regions()
        if merged:
            raise TableSchemaError(
                f"Merged cells are not supported, remove them and rebuild: {merged[0]}",
                table=self.table_name,
            )

        if sheet.last_row < HEADER_ROW_COUNT:
            raise TableSchemaError(
                f"Insufficient rows: need {HEADER_ROW_COUNT} header rows and data, last row is {sheet.last_row}",
                table=self.table_name,
            )

        current = sheet.first_row
        type_row = sheet.row(current)
        name_row = sheet.row(current + 1)
        comment_row = sheet.row(current + 2)
        current += HEADER_ROW_COUNT

        columns = extract_schema(type_row, name_row, comment_row, config, self._enums, self.table_name)

        context = ParseContext(enums=self._enums, vector_separator=config.vector_separator)
        rows = []
        for index in range(current, sheet.last_row + 1):
            row = sheet.row(index)
            kind = classify_row(row, config)
            if kind is RowKind.COMMENT:
                logger.debug(f"[{self.table_name}] Skipping comment row {index}")
                continue
            if kind is RowKind.END:
                logger.debug(f"[{self.table_name}] End of data at row {index}")
                break
            rows.append(parse_row(row, columns, context, self.table_name))
        return columns, rows

    def _require_loaded(self) -> None:
        if self._state is not LoadState.LOADED:
            raise TableStateError(f"Table is not loaded (state '{self._state.value}')", table=self.table_name)

    @property
    def columns(self) -> Tuple[ColumnDescriptor, ...]:
        self._require_loaded()
        return self._columns

    @property
    def rows(self) -> Tuple[RowRecord, ...]:
        self._require_loaded()
        return self._rows

    @property
    def key_column(self) -> ColumnDescriptor:
        return self.column(self._config.key_column)

    def column(self, name: str) -> ColumnDescriptor:
        """
        Get a column by name.

        Raises:
            KeyError: If no column has this name
        """
        for column in self.columns:
            if column.name == name:
                return column
        raise KeyError(f"Column '{name}' not found in table '{self.table_name}'")

    def record(self, key: Any) -> Optional[RowRecord]:
        """The first row whose key-column value equals ``key``."""
        position = self.columns.index(self.key_column)
        for row in self.rows:
            if row.values[position] == key:
                return row
        return None

    def to_records(self) -> List[Dict[str, Any]]:
        """Rows as dicts mapping column name to parsed value."""
        names = [column.name for column in self.columns]
        return [dict(zip(names, row.values)) for row in self.rows]

    def to_dataframe(self) -> pd.DataFrame:
        """
        Parsed values as a DataFrame.

        Columns follow table order; the index is the physical row index.
        Composite values stay Python objects in ``object`` columns.
        """
        names = [column.name for column in self.columns]
        data = {name: [row.values[i] for row in self.rows] for i, name in enumerate(names)}
        index = pd.Index([row.row_index for row in self.rows], name="row")
        return pd.DataFrame(data, index=index, columns=names, dtype=object)

    def __repr__(self) -> str:
        return f"TableModel({self.export_name!r}, state={self._state.value})"
