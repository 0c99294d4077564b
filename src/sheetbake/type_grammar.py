"""
Declared type grammar.

A declared type is a keyword optionally followed by bracketed subtypes,
e.g. ``int``, ``list<int>``, ``dict<int,string>``, ``enum<Color>``.
Resolution turns it into a canonical ``ColumnType``: the base kind plus the
canonical spelling of each subtype.
"""

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import List, Optional, Tuple, TYPE_CHECKING

from .errors import TypeDeclarationError

if TYPE_CHECKING:
    from .enums import EnumRegistry


class BaseType(Enum):
    """Supported base kinds with their subtype arity."""

    BOOL = ("bool", 0)
    BYTE = ("byte", 0)
    SHORT = ("short", 0)
    INT = ("int", 0)
    LONG = ("long", 0)
    FLOAT = ("float", 0)
    DOUBLE = ("double", 0)
    STRING = ("string", 0)
    LIST = ("list", 1)
    DICT = ("dict", 2)
    ENUM = ("enum", 1)
    ENUM_NAME = ("enumname", 1)
    VECTOR3 = ("vector3", 0)
    PARAMS = ("params", 0)

    def __init__(self, keyword: str, arity: int):
        self.keyword = keyword
        self.arity = arity

    @property
    def is_primitive(self) -> bool:
        return self in PRIMITIVE_TYPES

    @property
    def is_enum(self) -> bool:
        return self in (BaseType.ENUM, BaseType.ENUM_NAME)

    @property
    def is_scalar(self) -> bool:
        """Whether values of this kind can be list elements or dict keys/values."""
        return self.is_primitive or self.is_enum

    @classmethod
    def from_keyword(cls, keyword: str) -> Optional["BaseType"]:
        keyword = keyword.strip().lower()
        keyword = TYPE_ALIASES.get(keyword, keyword)
        return _BY_KEYWORD.get(keyword)


PRIMITIVE_TYPES = frozenset({
    BaseType.BOOL, BaseType.BYTE, BaseType.SHORT, BaseType.INT,
    BaseType.LONG, BaseType.FLOAT, BaseType.DOUBLE, BaseType.STRING,
})

TYPE_ALIASES = {
    "boolean": "bool",
    "int32": "int",
    "int64": "long",
    "single": "float",
    "str": "string",
    "map": "dict",
    "vector": "vector3",
}

_BY_KEYWORD = {base.keyword: base for base in BaseType}


@dataclass(frozen=True)
class ColumnType:
    """Canonical (base type, subtypes) pair."""

    base: BaseType
    sub_types: Tuple[str, ...] = ()

    @property
    def declaration(self) -> str:
        return format_type(self.base, self.sub_types)

    def __str__(self) -> str:
        return self.declaration


def format_type(base: BaseType, sub_types=()) -> str:
    """Serialise a canonical type back to declared-type syntax."""
    if not sub_types:
        return base.keyword
    return f"{base.keyword}<{','.join(sub_types)}>"


def _split_declaration(declared: str) -> Tuple[str, Optional[List[str]]]:
    """
    Split ``base<a,b<c>>`` into ``("base", ["a", "b<c>"])``.

    Returns ``(keyword, None)`` when there are no brackets.

    Raises:
        TypeDeclarationError: On unbalanced or misplaced brackets
    """
    text = declared.strip()
    open_at = text.find("<")
    if open_at == -1:
        if ">" in text:
            raise TypeDeclarationError("Unbalanced '>' in type declaration", text=declared)
        return text, None
    if not text.endswith(">"):
        raise TypeDeclarationError("Type declaration must end with '>'", text=declared)

    keyword = text[:open_at]
    inner = text[open_at + 1:-1]
    parts = []
    depth = 0
    start = 0
    for position, char in enumerate(inner):
        if char == "<":
            depth += 1
        elif char == ">":
            depth -= 1
            if depth < 0:
                raise TypeDeclarationError("Unbalanced '>' in type declaration", text=declared)
        elif char == "," and depth == 0:
            parts.append(inner[start:position])
            start = position + 1
    if depth != 0:
        raise TypeDeclarationError("Unbalanced '<' in type declaration", text=declared)
    parts.append(inner[start:])
    parts = [part.strip() for part in parts]
    if any(not part for part in parts):
        raise TypeDeclarationError("Empty subtype in type declaration", text=declared)
    return keyword, parts


def resolve(declared: str, enums: Optional["EnumRegistry"] = None) -> ColumnType:
    """
    Resolve a declared type string to its canonical form.

    Args:
        declared: The type as written in the header, e.g. ``list<int>``
        enums: Registry used to check enumeration names. When omitted,
            enumeration names are only checked to be identifiers.

    Returns:
        The canonical ColumnType

    Raises:
        TypeDeclarationError: Unknown base type, wrong arity, bad brackets,
            unsupported subtype or unknown enumeration
    """
    if enums is None:
        return _resolve_cached(declared)
    return _resolve(declared, enums)


@lru_cache(maxsize=256)
def _resolve_cached(declared: str) -> ColumnType:
    return _resolve(declared, None)


def _resolve(declared: str, enums: Optional["EnumRegistry"]) -> ColumnType:
    if not declared or not declared.strip():
        raise TypeDeclarationError("Empty type declaration", text=declared)

    keyword, parts = _split_declaration(declared)
    base = BaseType.from_keyword(keyword)
    if base is None:
        raise TypeDeclarationError("Unknown base type", text=declared)

    parts = parts or []
    if len(parts) != base.arity:
        raise TypeDeclarationError(
            f"'{base.keyword}' takes {base.arity} subtype(s), got {len(parts)}", text=declared
        )

    if base.is_enum:
        enum_name = parts[0]
        if not enum_name.isidentifier():
            raise TypeDeclarationError("Invalid enumeration name", text=declared)
        if enums is not None and enum_name not in enums:
            raise TypeDeclarationError(f"Unknown enumeration '{enum_name}'", text=declared)
        return ColumnType(base, (enum_name,))

    sub_types = []
    for part in parts:
        sub = _resolve(part, enums)
        if not sub.base.is_scalar:
            raise TypeDeclarationError(
                f"'{sub.declaration}' cannot be used as a subtype of '{base.keyword}'", text=declared
            )
        sub_types.append(sub.declaration)
    return ColumnType(base, tuple(sub_types))


def is_valid_type(declared: str, enums: Optional["EnumRegistry"] = None) -> bool:
    """Whether ``declared`` resolves without error."""
    try:
        resolve(declared, enums)
    except TypeDeclarationError:
        return False
    return True
