"""
Tests for the enumeration registry and definition files.
"""

import json
import pytest
import sys
from enum import IntEnum
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sheetbake.enums import EnumRegistry
from sheetbake.errors import EnumDefinitionError


def test_register_decorator():
    """Test registering an IntEnum class under its own name."""
    registry = EnumRegistry()

    @registry.register
    class Element(IntEnum):
        Fire = 1
        Water = 2

    assert "Element" in registry
    assert registry.get("Element") is Element
    assert len(registry) == 1


def test_register_rejects_non_int_enum():
    """Test that only IntEnum classes can be registered."""
    with pytest.raises(EnumDefinitionError):
        EnumRegistry().register(dict)


def test_register_conflicting_name():
    """Test that a name cannot be bound to two different enumerations."""
    registry = EnumRegistry()
    registry.define("Kind", {"A": 0})
    with pytest.raises(EnumDefinitionError, match="already registered"):
        registry.define("Kind", {"B": 1})


def test_get_unknown():
    """Test looking up a missing enumeration."""
    with pytest.raises(EnumDefinitionError, match="Unknown"):
        EnumRegistry().get("Missing")


def test_from_dict():
    """Test building enumerations from a definitions mapping."""
    registry = EnumRegistry.from_dict({"Slot": {"Head": 0, "Body": 1}})
    slot = registry.get("Slot")
    assert slot(1).name == "Body"
    assert slot["Head"] == 0


@pytest.mark.parametrize("definitions", [
    {"Slot": {}},
    {"Slot": {"Head": "zero"}},
    {"1Slot": {"Head": 0}},
    {"Slot": {"Head piece": 0}},
    ["Slot"],
])
def test_from_dict_rejects_invalid(definitions):
    """Test schema validation of definitions."""
    with pytest.raises(EnumDefinitionError):
        EnumRegistry.from_dict(definitions)


def test_from_file(tmp_path):
    """Test loading definitions from a JSON file."""
    path = tmp_path / "enums.json"
    path.write_text(json.dumps({"Rarity": {"Common": 0, "Rare": 1}}), encoding="utf-8")
    registry = EnumRegistry.from_file(path)
    assert list(registry) == ["Rarity"]


def test_from_file_invalid_json(tmp_path):
    """Test that broken JSON is reported as a definition error."""
    path = tmp_path / "enums.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(EnumDefinitionError, match="Invalid JSON"):
        EnumRegistry.from_file(path)
