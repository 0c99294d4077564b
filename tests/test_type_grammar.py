"""
Tests for declared type resolution.
"""

import pytest
import sys
from enum import IntEnum
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sheetbake.enums import EnumRegistry
from sheetbake.errors import TypeDeclarationError
from sheetbake.type_grammar import BaseType, ColumnType, format_type, is_valid_type, resolve


class Color(IntEnum):
    Red = 0
    Green = 1


@pytest.mark.parametrize("declared, base", [
    ("int", BaseType.INT),
    ("string", BaseType.STRING),
    ("bool", BaseType.BOOL),
    ("long", BaseType.LONG),
    ("double", BaseType.DOUBLE),
    ("vector3", BaseType.VECTOR3),
    ("params", BaseType.PARAMS),
])
def test_resolve_primitive(declared, base):
    """Test that keywords without subtypes resolve to their base kind."""
    assert resolve(declared) == ColumnType(base, ())


def test_resolve_list():
    """Test single-subtype composite resolution."""
    column_type = resolve("list<int>")
    assert column_type.base is BaseType.LIST
    assert column_type.sub_types == ("int",)


def test_resolve_dict():
    """Test two-subtype composite resolution."""
    column_type = resolve("dict<int,string>")
    assert column_type.base is BaseType.DICT
    assert column_type.sub_types == ("int", "string")


def test_resolve_canonicalises_aliases_and_spacing():
    """Test that aliases, case and whitespace collapse to the canonical form."""
    column_type = resolve(" Map< Int32 , str > ")
    assert column_type.declaration == "dict<int,string>"


def test_resolve_enum_checks_registry():
    """Test that enum subtypes must name a registered enumeration."""
    registry = EnumRegistry({"Color": Color})
    assert resolve("enum<Color>", registry).sub_types == ("Color",)
    with pytest.raises(TypeDeclarationError, match="Unknown enumeration"):
        resolve("enum<Shape>", registry)


def test_resolve_list_of_enum():
    """Test that enum kinds are accepted as list elements."""
    column_type = resolve("list<enumname<Color>>")
    assert column_type.sub_types == ("enumname<Color>",)


@pytest.mark.parametrize("declared", [
    "",
    "integer",
    "list",
    "list<int,int>",
    "dict<int>",
    "int<string>",
    "list<int",
    "list<int>>",
    "list<>",
    "dict<int,>",
    "list<vector3>",
    "list<list<int>>",
    "enum<1abc>",
])
def test_resolve_rejects_malformed(declared):
    """Test unknown types, wrong arity and bad brackets."""
    with pytest.raises(TypeDeclarationError):
        resolve(declared)
    assert not is_valid_type(declared)


def test_type_error_is_builtin_type_error():
    """Test that declaration errors can be caught as TypeError."""
    with pytest.raises(TypeError):
        resolve("nope")


@pytest.mark.parametrize("declared", [
    "bool", "byte", "short", "int", "long", "float", "double", "string",
    "vector3", "params", "list<int>", "list<string>", "enum<Color>",
    "enumname<Color>", "dict<int,string>",
])
def test_format_round_trip(declared):
    """Test that re-serialising a resolved type gives back the same declaration."""
    column_type = resolve(declared)
    assert format_type(column_type.base, column_type.sub_types) == declared
    assert resolve(column_type.declaration) == column_type
