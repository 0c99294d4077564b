"""
Utility modules for sheetbake.

This package contains reusable helpers for:
- Escape-aware text splitting (text_utils)
- JSON schema validation of definition files (schema_utils)
"""

from .schema_utils import load_schema, validate_definition
from .text_utils import (
    replace_special_chars,
    scan_params,
    split_brace_entries,
    split_first_unescaped,
    split_unescaped,
    unescape,
)

__all__ = [
    'load_schema',
    'validate_definition',
    'replace_special_chars',
    'scan_params',
    'split_brace_entries',
    'split_first_unescaped',
    'split_unescaped',
    'unescape',
]
