"""
Enumeration registry.

Columns declared as ``enum<Name>`` or ``enumname<Name>`` look their
enumeration up here. Enumerations are plain ``IntEnum`` classes, registered
directly or built from a ``{"Name": {"Member": ordinal}}`` mapping.
"""

import json
import logging
from enum import IntEnum
from pathlib import Path
from typing import Dict, Iterator, Mapping, Optional, Type, Union

from .errors import EnumDefinitionError
from .utils.schema_utils import SCHEMAS_DIR, validate_definition

logger = logging.getLogger(__name__)

ENUM_SCHEMA_PATH = SCHEMAS_DIR / "enums.json"


class EnumRegistry:
    """Name -> IntEnum lookup for enumeration columns."""

    def __init__(self, enums: Optional[Mapping[str, Type[IntEnum]]] = None):
        self._enums: Dict[str, Type[IntEnum]] = {}
        for name, enum_cls in (enums or {}).items():
            self.register(enum_cls, name)

    def register(self, enum_cls: Type[IntEnum], name: Optional[str] = None) -> Type[IntEnum]:
        """
        Register an IntEnum class, under its own class name by default.

        Can be used as a class decorator.
        """
        if not (isinstance(enum_cls, type) and issubclass(enum_cls, IntEnum)):
            raise EnumDefinitionError(f"Enumeration must be an IntEnum subclass, got {enum_cls!r}")
        name = name or enum_cls.__name__
        if name in self._enums and self._enums[name] is not enum_cls:
            raise EnumDefinitionError(f"Enumeration '{name}' is already registered")
        self._enums[name] = enum_cls
        return enum_cls

    def define(self, name: str, members: Mapping[str, int]) -> Type[IntEnum]:
        """Build an IntEnum from a member -> ordinal mapping and register it."""
        if not members:
            raise EnumDefinitionError(f"Enumeration '{name}' has no members")
        try:
            enum_cls = IntEnum(name, dict(members))
        except (TypeError, ValueError) as e:
            raise EnumDefinitionError(f"Cannot build enumeration '{name}': {e}") from e
        return self.register(enum_cls, name)

    def get(self, name: str) -> Type[IntEnum]:
        try:
            return self._enums[name]
        except KeyError:
            raise EnumDefinitionError(f"Unknown enumeration '{name}'") from None

    def __contains__(self, name: object) -> bool:
        return name in self._enums

    def __iter__(self) -> Iterator[str]:
        return iter(self._enums)

    def __len__(self) -> int:
        return len(self._enums)

    @classmethod
    def from_dict(cls, definitions: Mapping[str, Mapping[str, int]], source_name: str = "<dict>") -> "EnumRegistry":
        """
        Build a registry from a validated definitions mapping.

        Raises:
            EnumDefinitionError: If the mapping does not match the enum schema
        """
        validate_definition(definitions, ENUM_SCHEMA_PATH, source_name)
        registry = cls()
        for name, members in definitions.items():
            registry.define(name, members)
        return registry

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "EnumRegistry":
        """Load enumeration definitions from a JSON file."""
        path = Path(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                definitions = json.load(f)
        except json.JSONDecodeError as e:
            raise EnumDefinitionError(f"Invalid JSON: {e}", table=path.name) from e
        registry = cls.from_dict(definitions, path.name)
        logger.info(f"Loaded {len(registry)} enumeration(s) from {path}")
        return registry
