"""
Text helpers shared by the value parsers.

The splitting helpers are small tokenizers that honour backslash escapes:
a separator preceded by a backslash is literal. Any other backslash sequence
is left untouched so later stages (e.g. special-character replacement) still
see it.
"""

import re
from typing import List

# Brace-delimited signed decimal, e.g. {-1.5} or {+3}
PARAM_TOKEN = re.compile(r"\{[-+]?[0-9]+\.?[0-9]*\}")

ESCAPE = "\\"


def replace_special_chars(text: str) -> str:
    """
    Replace the two-character escapes \\n, \\r and \\t with control characters.

    \\r becomes a quote followed by a carriage return, matching what existing
    exported data expects.
    """
    return text.replace("\\n", "\n").replace("\\r", "'\r").replace("\\t", "\t")


def unescape(text: str, chars: str) -> str:
    """Turn each backslash-escaped character in ``chars`` back into itself."""
    for char in chars:
        text = text.replace(ESCAPE + char, char)
    return text


def split_unescaped(text: str, separator: str = ",") -> List[str]:
    """
    Split on every ``separator`` that is not preceded by a backslash.

    Escapes are kept in the returned fragments; use ``unescape`` afterwards.
    """
    fragments = []
    current = []
    escaped = False
    for char in text:
        if char == separator and not escaped:
            fragments.append("".join(current))
            current = []
        else:
            current.append(char)
        escaped = char == ESCAPE and not escaped
    fragments.append("".join(current))
    return fragments


def split_first_unescaped(text: str, separator: str = ","):
    """
    Split at the first unescaped ``separator``.

    Returns:
        (head, tail) or None if the separator does not occur unescaped
    """
    escaped = False
    for position, char in enumerate(text):
        if char == separator and not escaped:
            return text[:position], text[position + 1:]
        escaped = char == ESCAPE and not escaped
    return None


def split_brace_entries(text: str) -> List[str]:
    """
    Split ``{k,v},{k,v}`` into entries.

    A comma separates entries only when the last non-whitespace character
    before it is an unescaped closing brace. Whitespace between entries is
    dropped; the entries themselves are returned verbatim.
    """
    entries = []
    current = []
    escaped = False
    after_close = False
    for char in text:
        if char == "," and not escaped and after_close:
            entries.append("".join(current).strip())
            current = []
            after_close = False
            escaped = False
            continue
        current.append(char)
        if not char.isspace():
            after_close = char == "}" and not escaped
        escaped = char == ESCAPE and not escaped
    entries.append("".join(current).strip())
    return entries


def matching_brace(text: str) -> int:
    """
    Index of the unescaped ``}`` that closes the ``{`` at position 0.

    Escaped braces do not count. Returns -1 if ``text`` does not start with
    ``{`` or the brace is never closed.
    """
    if not text.startswith("{"):
        return -1
    depth = 0
    escaped = False
    for position, char in enumerate(text):
        if not escaped:
            if char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    return position
        escaped = char == ESCAPE and not escaped
    return -1


def scan_params(text: str) -> List[str]:
    """Numeric literals of every ``{number}`` token in ``text``, left to right."""
    return [match.group(0)[1:-1] for match in PARAM_TOKEN.finditer(text)]
