"""
Value parsers for turning raw cell text into typed values.

Each base type has one parser class, kept in a registry keyed by BaseType.
Composite parsers (list, dict) resolve their subtypes and recurse through
the same registry.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, NamedTuple, Optional, Protocol, Sequence, Type

from .config import get_config
from .enums import EnumRegistry
from .errors import CellValueError, EnumDefinitionError, TypeDeclarationError
from .type_grammar import BaseType, ColumnType, resolve
from .utils.text_utils import (
    matching_brace,
    replace_special_chars,
    scan_params,
    split_brace_entries,
    split_first_unescaped,
    split_unescaped,
    unescape,
)


class Vector3(NamedTuple):
    x: float
    y: float
    z: float


@dataclass(frozen=True)
class ParseContext:
    """Settings shared by every parser during one load."""

    enums: Optional[EnumRegistry] = None
    vector_separator: str = ","

    def enum(self, name: str) -> Type[IntEnum]:
        if self.enums is None:
            raise CellValueError(f"Enumeration '{name}' is not available, no enum registry configured")
        try:
            return self.enums.get(name)
        except EnumDefinitionError as e:
            raise CellValueError(e.message) from None


class ValueParser(Protocol):
    """
    Protocol for value parser objects.

    Anything with a matching ``parse`` method can be registered.
    """

    def parse(self, text: str, sub_types: Sequence[str], context: ParseContext) -> Any:
        ...


class ParserBase(ABC):
    """
    Abstract base class for value parsers.

    Subclasses MUST define:
    - base_type: BaseType - The kind this parser handles
    - parse(text, sub_types, context): method - The conversion logic
    """

    base_type: BaseType

    @abstractmethod
    def parse(self, text: str, sub_types: Sequence[str], context: ParseContext) -> Any:
        """
        Parse raw cell text.

        Args:
            text: The raw cell text, never None
            sub_types: Canonical subtype declarations, empty for non-composites
            context: Shared parse settings

        Returns:
            The typed value

        Raises:
            CellValueError: If the text does not conform to the type
        """
        pass


# ASCII-only literals, no digit grouping, nan or inf
INTEGER_LITERAL = re.compile(r"[-+]?[0-9]+")
FLOAT_LITERAL = re.compile(r"[-+]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][-+]?[0-9]+)?")


def _is_blank(text: str) -> bool:
    return not text or not text.strip()


def _parse_integer(text: str) -> int:
    stripped = text.strip()
    if not INTEGER_LITERAL.fullmatch(stripped):
        raise CellValueError("Not an integer", text=text)
    return int(stripped)


def _parse_float(text: str) -> float:
    stripped = text.strip()
    if not FLOAT_LITERAL.fullmatch(stripped):
        raise CellValueError("Not a number", text=text)
    return float(stripped)


class StringParser(ParserBase):
    base_type = BaseType.STRING

    def parse(self, text, sub_types, context):
        if not text:
            return ""
        return replace_special_chars(text)


class BoolParser(ParserBase):
    """Integers above zero are true."""

    base_type = BaseType.BOOL

    def parse(self, text, sub_types, context):
        if _is_blank(text):
            return False
        return _parse_integer(text) > 0


class IntegerParser(ParserBase):
    """Signed 32-bit integer; subclasses narrow or widen the range."""

    base_type = BaseType.INT
    min_value = -2 ** 31
    max_value = 2 ** 31 - 1

    def parse(self, text, sub_types, context):
        if _is_blank(text):
            return 0
        value = _parse_integer(text)
        if not self.min_value <= value <= self.max_value:
            raise CellValueError(
                f"Value out of range for {self.base_type.keyword} "
                f"[{self.min_value}, {self.max_value}]",
                text=text,
            )
        return value


class ByteParser(IntegerParser):
    base_type = BaseType.BYTE
    min_value = 0
    max_value = 255


class ShortParser(IntegerParser):
    base_type = BaseType.SHORT
    min_value = -2 ** 15
    max_value = 2 ** 15 - 1


class LongParser(IntegerParser):
    base_type = BaseType.LONG
    min_value = -2 ** 63
    max_value = 2 ** 63 - 1


class FloatParser(ParserBase):
    base_type = BaseType.FLOAT

    def parse(self, text, sub_types, context):
        if _is_blank(text):
            return 0.0
        return _parse_float(text)


class DoubleParser(FloatParser):
    base_type = BaseType.DOUBLE


class ListParser(ParserBase):
    """
    Comma separated elements; ``\\,`` is a literal comma.

    Empty fragments are skipped, so ``"1,,2"`` has two elements.
    """

    base_type = BaseType.LIST

    def parse(self, text, sub_types, context):
        element_type = resolve(sub_types[0])
        values = []
        if not text:
            return values
        for fragment in split_unescaped(text, ","):
            if not fragment:
                continue
            values.append(parse_value(element_type.base, element_type.sub_types,
                                      unescape(fragment, ","), context))
        return values


class DictParser(ParserBase):
    """
    Entries written as ``{key,value},{key,value}``.

    Key and value are split at the first unescaped comma; ``\\}`` and ``\\,``
    are unescaped before the key and value are parsed.
    """

    base_type = BaseType.DICT

    def parse(self, text, sub_types, context):
        key_type = resolve(sub_types[0])
        value_type = resolve(sub_types[1])
        result: Dict[Any, Any] = {}
        if _is_blank(text):
            return result
        for entry in split_brace_entries(text):
            key_text, value_text = self._split_entry(entry)
            key = parse_value(key_type.base, key_type.sub_types, key_text, context)
            if key in result:
                raise CellValueError(f"Duplicate dictionary key {key!r}", text=entry)
            result[key] = parse_value(value_type.base, value_type.sub_types, value_text, context)
        return result

    @staticmethod
    def _split_entry(entry: str):
        if not entry.startswith("{"):
            raise CellValueError("Dictionary entry must start with '{'", text=entry)
        if matching_brace(entry) != len(entry) - 1:
            raise CellValueError("Unbalanced braces in dictionary entry", text=entry)
        pair = split_first_unescaped(entry[1:-1], ",")
        if pair is None:
            raise CellValueError("Dictionary entry has no key/value separator", text=entry)
        key_text, value_text = pair
        return unescape(key_text, "},"), unescape(value_text, "},")


class EnumParser(ParserBase):
    """Enumeration member given by its ordinal."""

    base_type = BaseType.ENUM

    def parse(self, text, sub_types, context):
        enum_name = sub_types[0]
        enum_cls = context.enum(enum_name)
        try:
            index = _parse_integer(text)
        except CellValueError:
            raise CellValueError(f"Enum {enum_name} index is not an integer", text=text) from None
        try:
            return enum_cls(index)
        except ValueError:
            raise CellValueError(f"Enum {enum_name} does not define index {index}", text=text) from None


class EnumNameParser(ParserBase):
    """Enumeration member given by its exact name."""

    base_type = BaseType.ENUM_NAME

    def parse(self, text, sub_types, context):
        enum_name = sub_types[0]
        enum_cls = context.enum(enum_name)
        member = enum_cls.__members__.get(text)
        if member is None:
            raise CellValueError(f"Enum {enum_name} does not define name {text!r}", text=text)
        return member


class Vector3Parser(ParserBase):
    base_type = BaseType.VECTOR3

    def parse(self, text, sub_types, context):
        components = text.split(context.vector_separator)
        if len(components) != 3:
            raise CellValueError(
                f"vector3 needs 3 components separated by {context.vector_separator!r}, "
                f"got {len(components)}",
                text=text,
            )
        return Vector3(*(_parse_float(component) for component in components))


class ParamsParser(ParserBase):
    """
    Every ``{number}`` marker embedded in free text, in order.

    Text outside the markers is ignored.
    """

    base_type = BaseType.PARAMS

    def parse(self, text, sub_types, context):
        return [_parse_float(literal) for literal in scan_params(text)]


# Registry of all value parsers
PARSER_REGISTRY: Dict[BaseType, ValueParser] = {
    parser.base_type: parser
    for parser in (
        StringParser(), BoolParser(), ByteParser(), ShortParser(), IntegerParser(),
        LongParser(), FloatParser(), DoubleParser(), ListParser(), DictParser(),
        EnumParser(), EnumNameParser(), Vector3Parser(), ParamsParser(),
    )
}


def get_parser(base_type: BaseType) -> ValueParser:
    """
    Get the parser for a base type.

    Raises:
        TypeDeclarationError: If no parser handles the base type
    """
    if base_type not in PARSER_REGISTRY:
        raise TypeDeclarationError(f"No value parser for base type {base_type!r}")
    return PARSER_REGISTRY[base_type]


def parse_value(
    base_type: BaseType,
    sub_types: Sequence[str],
    text: Optional[str],
    context: Optional[ParseContext] = None,
) -> Any:
    """
    Parse raw cell text as ``base_type<sub_types>``.

    Args:
        base_type: The canonical base kind
        sub_types: Canonical subtype declarations
        text: Raw cell text; None is treated as empty
        context: Parse settings; defaults to the configured vector separator
            and no enumerations

    Raises:
        CellValueError: If the text does not conform to the type
    """
    if context is None:
        context = ParseContext(vector_separator=get_config().vector_separator)
    return get_parser(base_type).parse(text or "", tuple(sub_types), context)


def parse_column_value(column_type: ColumnType, text: Optional[str],
                       context: Optional[ParseContext] = None) -> Any:
    """Parse raw cell text for a resolved column type."""
    return parse_value(column_type.base, column_type.sub_types, text, context)


def parse_declared(declared: str, text: Optional[str], context: Optional[ParseContext] = None) -> Any:
    """Resolve ``declared`` and parse ``text`` as that type."""
    enums = context.enums if context is not None else None
    return parse_column_value(resolve(declared, enums), text, context)

