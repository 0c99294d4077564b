"""
Tests for the escape-aware text helpers.
"""

import sys
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sheetbake.utils.text_utils import (
    matching_brace,
    replace_special_chars,
    scan_params,
    split_brace_entries,
    split_first_unescaped,
    split_unescaped,
    unescape,
)


def test_split_unescaped_keeps_escaped_commas():
    """Test that a backslash-escaped comma does not split."""
    assert split_unescaped("1\\,2,3") == ["1\\,2", "3"]


def test_split_unescaped_double_backslash_does_not_escape():
    """Test that an escaped backslash leaves the following comma a separator."""
    assert split_unescaped("a\\\\,b") == ["a\\\\", "b"]


def test_split_first_unescaped():
    """Test splitting at the first unescaped separator only."""
    assert split_first_unescaped("a\\,b,c,d") == ("a\\,b", "c,d")
    assert split_first_unescaped("abc") is None


def test_split_brace_entries():
    """Test that entries split only after a closing brace."""
    assert split_brace_entries("{1,a}, {2,b}") == ["{1,a}", "{2,b}"]
    assert split_brace_entries("{1,a\\},b},{2,c}") == ["{1,a\\},b}", "{2,c}"]


def test_matching_brace():
    """Test finding the brace that closes the opening one."""
    assert matching_brace("{1,{a}}x") == 6
    assert matching_brace("{a\\}b}") == 5
    assert matching_brace("{a\\}") == -1
    assert matching_brace("a}") == -1


def test_unescape():
    """Test unescaping selected characters only."""
    assert unescape("a\\,b\\}c\\n", ",}") == "a,b}c\\n"


def test_replace_special_chars():
    """Test control-character escapes, including the quoted carriage return."""
    assert replace_special_chars("a\\nb\\tc") == "a\nb\tc"
    assert replace_special_chars("x\\ry") == "x'\ry"


def test_scan_params():
    """Test extracting brace-delimited numbers from free text."""
    assert scan_params("deal {10} damage, heal {-1.5} and {+2.}") == ["10", "-1.5", "+2."]
    assert scan_params("no markers {x} here") == []
