"""Table loading configuration."""
import os
from typing import Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Type row, name row, comment row
HEADER_ROW_COUNT = 3


class TableConfig:
    """Table loading configuration class."""

    def __init__(
        self,
        note_marker: Optional[str] = None,
        key_column: Optional[str] = None,
        vector_separator: Optional[str] = None,
        enums_file: Optional[str] = None,
    ):
        self.note_marker = note_marker or os.getenv('SHEET_NOTE_MARKER', '#')
        self.key_column = key_column or os.getenv('SHEET_KEY_COLUMN', 'id')
        self.vector_separator = vector_separator or os.getenv('SHEET_VECTOR_SEPARATOR', ',')
        self.enums_file = enums_file or os.getenv('SHEET_ENUMS_FILE') or None
        if len(self.vector_separator) != 1:
            raise ValueError(f"Vector separator must be a single character, got {self.vector_separator!r}")
        if not self.note_marker:
            raise ValueError("Note marker must not be empty")

    def is_note(self, text: str) -> bool:
        """Whether a header type or first-cell text marks a note column/row."""
        return self.note_marker.lower() in text.lower()


_DEFAULT_CONFIG: Optional[TableConfig] = None


def get_config() -> TableConfig:
    """Get the process-wide configuration, built from the environment once."""
    global _DEFAULT_CONFIG
    if _DEFAULT_CONFIG is None:
        _DEFAULT_CONFIG = TableConfig()
    return _DEFAULT_CONFIG


def reset_config() -> None:
    """Forget the cached configuration so the environment is read again."""
    global _DEFAULT_CONFIG
    _DEFAULT_CONFIG = None
