"""
Tests for header schema extraction.
"""

import pytest
import sys
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sheetbake.config import TableConfig
from sheetbake.errors import TableSchemaError, TypeDeclarationError
from sheetbake.loaders.schema_extractor import extract_schema
from sheetbake.sheet_source import GridSheet
from sheetbake.type_grammar import BaseType


@pytest.fixture
def config():
    return TableConfig(note_marker="#", key_column="id", vector_separator=",")


def header(types, names, comments=None):
    """Build the three header rows of an in-memory sheet."""
    sheet = GridSheet("Header", [types, names, comments])
    return sheet.row(0), sheet.row(1), sheet.row(2)


def test_extract_columns(config):
    """Test descriptors for a plain header."""
    columns = extract_schema(*header(["int", "list<int>"], ["id", "costs"], ["key", None]), config)
    assert [c.name for c in columns] == ["id", "costs"]
    assert columns[0].base_type is BaseType.INT
    assert columns[1].base_type is BaseType.LIST
    assert columns[1].sub_types == ("int",)
    assert columns[1].declared_type == "list<int>"
    assert columns[0].comment == "key"
    assert columns[1].comment is None
    assert [c.column_index for c in columns] == [0, 1]


def test_comment_row_may_be_absent(config):
    """Test that a missing comment row leaves every comment empty."""
    columns = extract_schema(*header(["int"], ["id"]), config)
    assert columns[0].comment is None


def test_note_columns_are_skipped(config):
    """Test that note columns are left out but keep physical indices intact."""
    columns = extract_schema(*header(["int", "#note", "string"], ["id", "", "name"]), config)
    assert [c.name for c in columns] == ["id", "name"]
    assert columns[1].column_index == 2


def test_column_range_follows_type_row(config):
    """Test that the type row's populated range decides the columns."""
    columns = extract_schema(*header([None, "int", "string"], ["x", "id", "name", "extra"]), config)
    assert [c.column_index for c in columns] == [1, 2]


def test_empty_column(config):
    """Test that a gap in the type row is an empty column."""
    with pytest.raises(TableSchemaError, match="Empty column") as exc:
        extract_schema(*header(["int", None, "string"], ["id", "a", "b"]), config)
    assert exc.value.column == 1


def test_duplicate_name_identifies_second_column(config):
    """Test that a repeated name is reported at its second occurrence."""
    with pytest.raises(TableSchemaError, match="Duplicate") as exc:
        extract_schema(*header(["int", "string", "int"], ["id", "name", "id"]), config)
    assert exc.value.column == 2
    assert exc.value.text == "id"


def test_missing_key_column(config):
    """Test that a table without an id column is rejected."""
    with pytest.raises(TableSchemaError, match="'id'"):
        extract_schema(*header(["int", "string"], ["key", "name"]), config)


def test_custom_key_column():
    """Test a configured key column name."""
    config = TableConfig(key_column="key")
    columns = extract_schema(*header(["int"], ["key"]), config)
    assert columns[0].name == "key"


def test_unknown_type_is_located(config):
    """Test that type errors carry the column index."""
    with pytest.raises(TypeDeclarationError) as exc:
        extract_schema(*header(["int", "strng"], ["id", "name"]), config, table_name="Items")
    assert exc.value.column == 1
    assert exc.value.table == "Items"
    assert exc.value.text == "strng"


def test_empty_name(config):
    """Test that data columns need a name."""
    with pytest.raises(TableSchemaError, match="Empty column name"):
        extract_schema(*header(["int", "string"], ["id", None]), config)
