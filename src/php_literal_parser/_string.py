"""
Unescaping of PHP string literals.

Single quoted strings only know ``\\\\`` and ``\\'``; double quoted strings
additionally decode control characters, ``\\x``, ``\\u{...}`` and octal
escapes. Unknown escapes are kept verbatim, backslash included.
"""

from ._profile import ProfileContext

_DOUBLE_SIMPLE = {
    "\\": "\\",
    '"': '"',
    "$": "$",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\x0b",
    "f": "\x0c",
}

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_OCT_DIGITS = frozenset("01234567")

MAX_UNICODE = 0x10FFFF


class UnescapeError(ValueError):
    """Raised for malformed numeric escapes or invalid scalar values."""


def _scalar(code_point: int) -> str:
    if code_point > MAX_UNICODE or 0xD800 <= code_point <= 0xDFFF:
        raise UnescapeError(f"invalid unicode scalar value: {code_point:#x}")
    return chr(code_point)


def _take_digits(s: str, i: int, digits: frozenset[str], limit: int) -> int:
    """Returns the end index of up to ``limit`` digits starting at ``i``."""
    end = i
    while end < len(s) and end - i < limit and s[end] in digits:
        end += 1
    return end


def unescape_single(s: str) -> str:
    """Un-escapes the inside of a single quoted literal."""
    with ProfileContext("unescape_single", len(s)):
        if "\\" not in s:
            return s

        result = []
        i = 0
        while (escape := s.find("\\", i)) >= 0:
            result.append(s[i:escape])
            if escape + 1 >= len(s):
                raise UnescapeError("dangling backslash at end of string")
            char = s[escape + 1]
            if char in "\\'":
                result.append(char)
            else:
                result.append("\\" + char)
            i = escape + 2

        result.append(s[i:])
        return "".join(result)


def _double_escape(s: str, i: int) -> tuple[str, int]:
    """Decodes the escape whose backslash is at ``i``; returns text and new index."""
    if i + 1 >= len(s):
        raise UnescapeError("dangling backslash at end of string")

    char = s[i + 1]
    start = i + 2

    if char in _DOUBLE_SIMPLE:
        return _DOUBLE_SIMPLE[char], start

    if char == "x":
        end = _take_digits(s, start, _HEX_DIGITS, 2)
        if end == start:
            return "\\x", start
        return _scalar(int(s[start:end], 16)), end

    if char == "u":
        if not s.startswith("{", start):
            return "\\u", start
        end = _take_digits(s, start + 1, _HEX_DIGITS, len(s))
        if end >= len(s) or s[end] != "}":
            raise UnescapeError("unterminated \\u{ escape")
        if end == start + 1:
            raise UnescapeError("empty \\u{} escape")
        return _scalar(int(s[start + 1 : end], 16)), end + 1

    if char in _OCT_DIGITS:
        end = _take_digits(s, i + 1, _OCT_DIGITS, 3)
        return _scalar(int(s[i + 1 : end], 8)), end

    return "\\" + char, start


def unescape_double(s: str) -> str:
    """Un-escapes the inside of a double quoted literal."""
    with ProfileContext("unescape_double", len(s)):
        if "\\" not in s:
            return s

        result = []
        i = 0
        while (escape := s.find("\\", i)) >= 0:
            result.append(s[i:escape])
            text, i = _double_escape(s, escape)
            result.append(text)

        result.append(s[i:])
        return "".join(result)


def parse_string(literal: str) -> str:
    """Decodes a quoted string token, dispatching on its quote character."""
    quote = literal[:1]
    if quote not in ("'", '"') or len(literal) < 2 or literal[-1] != quote:
        raise UnescapeError(f"malformed string literal: {literal!r}")

    inner = literal[1:-1]
    if quote == "'":
        return unescape_single(inner)
    return unescape_double(inner)


__all__ = ["UnescapeError", "parse_string", "unescape_double", "unescape_single"]
