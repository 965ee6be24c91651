"""Tokenizer for PHP literal source text."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias

from ._errors import Span
from ._profile import ProfileContext

Position: TypeAlias = int


class TokenKind(Enum):
    """
    Classification of a lexical unit.

    Whitespace and comments never surface as tokens.
    """

    ARRAY = "array"
    BOOL = "bool"
    NULL = "null"
    ARROW = "=>"
    BRACKET_OPEN = "("
    BRACKET_CLOSE = ")"
    SQUARE_OPEN = "["
    SQUARE_CLOSE = "]"
    COMMA = ","
    SEMICOLON = ";"
    LITERAL_STRING = "string"
    FLOAT = "float"
    INTEGER = "integer"
    ERROR = "error"
    EOF = "end of input"

    def describe(self) -> str:
        if self in _PUNCTUATION:
            return f"'{self.value}'"
        return self.value


_PUNCTUATION = frozenset(
    {
        TokenKind.ARROW,
        TokenKind.BRACKET_OPEN,
        TokenKind.BRACKET_CLOSE,
        TokenKind.SQUARE_OPEN,
        TokenKind.SQUARE_CLOSE,
        TokenKind.COMMA,
        TokenKind.SEMICOLON,
    }
)

# Token kinds that can start a value
VALUE_START = (
    TokenKind.BOOL,
    TokenKind.INTEGER,
    TokenKind.FLOAT,
    TokenKind.LITERAL_STRING,
    TokenKind.NULL,
    TokenKind.ARRAY,
    TokenKind.SQUARE_OPEN,
)

SCALAR_KINDS = frozenset(VALUE_START[:5])


@dataclass(frozen=True, slots=True)
class Token:
    """A classified lexical unit and its ``[start, end)`` range in the source."""

    kind: TokenKind
    text: str
    start: Position
    end: Position

    @property
    def span(self) -> Span:
        return Span(self.start, self.end)


_DIGITS = r"[0-9]+(?:_[0-9]+)*"
_OPT_DIGITS = r"[0-9]*(?:_[0-9]+)*"

INTEGER_RE = re.compile(
    r"-?(?:"
    r"0[xX][0-9a-fA-F]+(?:_[0-9a-fA-F]+)*"
    r"|0[bB][01]+(?:_[01]+)*"
    r"|0[0-7]+(?:_[0-7]+)*"
    r"|[1-9][0-9]*(?:_[0-9]+)*"
    r"|0"
    r")"
)

_FRACTION = (
    rf"(?:{_OPT_DIGITS}\.{_DIGITS}|{_DIGITS}\.{_OPT_DIGITS})"
)

FLOAT_RE = re.compile(
    rf"-?(?:(?:{_FRACTION}|{_DIGITS})[eE][+-]?{_DIGITS}|{_FRACTION})"
)

_IDENTIFIER_RE = re.compile(r"[A-Za-z_\x80-\U0010ffff][A-Za-z0-9_\x80-\U0010ffff]*")

_KEYWORDS = {
    "array": TokenKind.ARRAY,
    "null": TokenKind.NULL,
    "true": TokenKind.BOOL,
    "false": TokenKind.BOOL,
}

_STRUCTURAL = {
    "(": TokenKind.BRACKET_OPEN,
    ")": TokenKind.BRACKET_CLOSE,
    "[": TokenKind.SQUARE_OPEN,
    "]": TokenKind.SQUARE_CLOSE,
    ",": TokenKind.COMMA,
    ";": TokenKind.SEMICOLON,
}

_WHITESPACE = " \t\n\r\f"

# Characters that end an unrecognised run of input
_ERROR_STOP = _WHITESPACE + "()[],;'\"#"


class Lexer:
    """
    Pull-based tokenizer over an in-memory source string.

    Each call to ``next_token`` classifies one token; once the input is
    exhausted every further call returns an ``EOF`` token. Unrecognised
    input becomes an ``ERROR`` token so the parser can report it.
    """

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.length = len(text)

    def __iter__(self) -> Iterator[Token]:
        while (token := self.next_token()).kind is not TokenKind.EOF:
            yield token

    def peek(self) -> str:
        """Returns current character without advancing."""
        return self.text[self.pos] if self.pos < self.length else "\0"

    def _token(self, kind: TokenKind, start: Position) -> Token:
        return Token(kind, self.text[start : self.pos], start, self.pos)

    def skip_trivia(self) -> Token | None:
        """
        Skips whitespace and comments.

        Returns an error token for an unterminated block comment.
        """
        with ProfileContext("skip_trivia"):
            text = self.text
            while self.pos < self.length:
                char = text[self.pos]
                if char in _WHITESPACE:
                    self.pos += 1
                elif char == "#" or text.startswith("//", self.pos):
                    newline = text.find("\n", self.pos)
                    self.pos = self.length if newline < 0 else newline + 1
                elif text.startswith("/*", self.pos):
                    start = self.pos
                    close = text.find("*/", self.pos + 2)
                    if close < 0:
                        self.pos = self.length
                        return self._token(TokenKind.ERROR, start)
                    self.pos = close + 2
                else:
                    break
            return None

    def scan_string(self) -> Token:
        """Scans a single or double quoted string including its quotes."""
        with ProfileContext("scan_string"):
            start = self.pos
            quote = self.text[self.pos]
            self.pos += 1

            while self.pos < self.length:
                char = self.text[self.pos]
                self.pos += 1
                if char == quote:
                    return self._token(TokenKind.LITERAL_STRING, start)
                if char == "\\":
                    # Skip escaped character
                    self.pos = min(self.pos + 1, self.length)

            return self._token(TokenKind.ERROR, start)

    def scan_number(self) -> Token:
        """Scans an integer or float literal, preferring the longer match."""
        with ProfileContext("scan_number"):
            start = self.pos
            int_match = INTEGER_RE.match(self.text, start)
            float_match = FLOAT_RE.match(self.text, start)
            int_end = int_match.end() if int_match else start
            float_end = float_match.end() if float_match else start

            if float_end > int_end:
                self.pos = float_end
                return self._token(TokenKind.FLOAT, start)
            if int_end > start:
                self.pos = int_end
                return self._token(TokenKind.INTEGER, start)
            return self.scan_error()

    def scan_word(self) -> Token:
        """Scans an identifier run and classifies it as a keyword."""
        start = self.pos
        match = _IDENTIFIER_RE.match(self.text, start)
        assert match is not None
        self.pos = match.end()
        kind = _KEYWORDS.get(match.group().lower(), TokenKind.ERROR)
        return self._token(kind, start)

    def scan_error(self) -> Token:
        start = self.pos
        self.pos += 1
        while self.pos < self.length and self.text[self.pos] not in _ERROR_STOP:
            self.pos += 1
        return self._token(TokenKind.ERROR, start)

    def next_token(self) -> Token:
        """Returns the next token, or an ``EOF`` token at end of input."""
        error = self.skip_trivia()
        if error is not None:
            return error

        if self.pos >= self.length:
            return Token(TokenKind.EOF, "", self.length, self.length)

        char = self.peek()
        start = self.pos

        if char in _STRUCTURAL:
            self.pos += 1
            return self._token(_STRUCTURAL[char], start)
        elif char == "=" and self.text.startswith("=>", start):
            self.pos += 2
            return self._token(TokenKind.ARROW, start)
        elif char in "\"'":
            return self.scan_string()
        elif char.isascii() and (char.isdigit() or char in "-."):
            return self.scan_number()
        elif _IDENTIFIER_RE.match(char):
            return self.scan_word()
        else:
            return self.scan_error()


__all__ = [
    "FLOAT_RE",
    "INTEGER_RE",
    "SCALAR_KINDS",
    "VALUE_START",
    "Lexer",
    "Token",
    "TokenKind",
]
