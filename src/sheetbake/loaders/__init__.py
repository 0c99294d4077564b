"""
Table loaders package.

Loads the sheets of a workbook into TableModel instances. Each table is
loaded independently; the tables of one workbook share only the read-only
sheet sources and enum registry.
"""

import logging
from typing import List, Optional, Sequence

from ..config import TableConfig, get_config
from ..enums import EnumRegistry
from ..errors import SheetError
from ..sheet_source import SheetSource
from .row_validator import RowKind, RowRecord, classify_row, parse_row
from .schema_extractor import ColumnDescriptor, extract_schema
from .table_loader import LoadState, TableModel

logger = logging.getLogger(__name__)


def load_workbook(
    workbook_name: str,
    sheets: Sequence[SheetSource],
    enums: Optional[EnumRegistry] = None,
    config: Optional[TableConfig] = None,
    skip_failed: bool = False,
) -> List[TableModel]:
    """
    Load every sheet of a workbook.

    Args:
        workbook_name: Name of the workbook, used for export names
        sheets: The workbook's sheets, in workbook order
        enums: Registry for enumeration columns; when omitted and the
            configuration names an enums file, that file is loaded
        config: Loading configuration; defaults to the environment
        skip_failed: Log and leave out tables that fail to load instead of
            raising the first failure

    Returns:
        Loaded tables in sheet order

    Raises:
        SheetError: The first failure, unless skip_failed is set
    """
    config = config or get_config()
    if enums is None and config.enums_file:
        enums = EnumRegistry.from_file(config.enums_file)

    logger.info(f"=== Loading workbook '{workbook_name}': {len(sheets)} sheet(s) ===")

    tables = []
    for sheet in sheets:
        table = TableModel(sheet, workbook_name, table_count=len(sheets), enums=enums, config=config)
        try:
            table.load()
        except SheetError as e:
            if not skip_failed:
                raise
            logger.error(f"[{workbook_name}] ✗ Skipping table '{sheet.name}': {e}")
            continue
        tables.append(table)

    logger.info(f"=== Workbook '{workbook_name}': {len(tables)}/{len(sheets)} table(s) loaded ===")
    return tables


__all__ = [
    'ColumnDescriptor',
    'LoadState',
    'RowKind',
    'RowRecord',
    'TableModel',
    'classify_row',
    'extract_schema',
    'load_workbook',
    'parse_row',
]
