"""
String literal unescaping tests.

Single quoted strings only decode ``\\\\`` and ``\\'``; double quoted
strings decode the full escape set. Unknown escapes keep their backslash.
"""

import pytest

from php_literal_parser._string import UnescapeError
from php_literal_parser._string import parse_string
from php_literal_parser._string import unescape_double
from php_literal_parser._string import unescape_single


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("abc", "abc"),
        (r"ab\nc", "ab\\nc"),
        (r"ab\zc", "ab\\zc"),
        (r' \"abc\" ', ' \\"abc\\" '),
        ("𝄞", "𝄞"),
        ("\\𝄞", "\\𝄞"),
        (r"\xD834\xDD1E", "\\xD834\\xDD1E"),
        (r"\xD834", "\\xD834"),
        (r"it\'s", "it's"),
        (r"a\\b", "a\\b"),
        (r"\\\'", "\\'"),
    ],
)
def test_unescape_single(raw: str, expected: str) -> None:
    assert unescape_single(raw) == expected


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("abc", "abc"),
        (r"ab\nc", "ab\nc"),
        (r"ab\zc", "ab\\zc"),
        (r' \"abc\" ', ' "abc" '),
        ("𝄞", "𝄞"),
        ("\\𝄞", "\\𝄞"),
        (r"\u{1D11E}", "𝄞"),
        (r"\u{41}\u{00e9}", "Aé"),
        (r"\xD834", "\xd834"),
        (r"\xDD1E", "\xdd1E"),
        (r"\xD", "\r"),
        (r"\x41", "A"),
        ("\t", "\t"),
        (r"\t\r\v\f", "\t\r\x0b\x0c"),
        (r"\$name", "$name"),
        (r"\\", "\\"),
        (r"\101\60", "A0"),
        (r"\1012", "A2"),
        ("\\uABCD", "\\uABCD"),
        (r"\xZ", "\\xZ"),
        (r"\'", "\\'"),
    ],
)
def test_unescape_double(raw: str, expected: str) -> None:
    assert unescape_double(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [
        r"\u{D800}",
        r"\u{110000}",
        r"\u{41",
        r"\u{}",
        "abc\\",
    ],
)
def test_unescape_double_errors(raw: str) -> None:
    """
    Validates surrogates, out-of-range scalars and truncated escapes fail.
    """
    with pytest.raises(UnescapeError):
        unescape_double(raw)


def test_single_quote_dangling_backslash() -> None:
    with pytest.raises(UnescapeError, match="dangling backslash"):
        unescape_single("abc\\")


def test_quote_styles_diverge() -> None:
    """
    Validates the same escape means different things per quote style.
    """
    assert parse_string(r"'\"'") == '\\"'
    assert parse_string(r'"\x41"') == "A"
    assert parse_string(r"'\x41'") == "\\x41"


@pytest.mark.parametrize("literal", ["a", "'a", "'a\"", ""])
def test_parse_string_requires_matching_quotes(literal: str) -> None:
    with pytest.raises(UnescapeError):
        parse_string(literal)
