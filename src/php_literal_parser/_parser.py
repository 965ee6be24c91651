"""
Recursive descent parser turning a token stream into ``Value`` trees.

Grammar::

    value       := bool | integer | float | string | "null" | array
    array       := "array" "(" array_body? ")" | "[" array_body? "]"
    array_body  := item ("," item)* ","?
    item        := value ( "=>" value )?
"""

from __future__ import annotations

import math
from enum import Enum

from ._config import ParseConfig
from ._errors import ErrorKind
from ._errors import ParseError
from ._errors import Span
from ._lexer import VALUE_START
from ._lexer import Lexer
from ._lexer import Token
from ._lexer import TokenKind
from ._num import ParseIntError
from ._num import is_i64
from ._num import parse_bool
from ._num import parse_float
from ._num import parse_int
from ._profile import ProfileContext
from ._string import UnescapeError
from ._string import parse_string
from ._value import NULL
from ._value import Array
from ._value import Bool
from ._value import Float
from ._value import Int
from ._value import Key
from ._value import Null
from ._value import String
from ._value import Value
from ._value import string_key


class ArraySyntax(Enum):
    LONG = "array(...)"
    SHORT = "[...]"

    @property
    def close(self) -> TokenKind:
        if self is ArraySyntax.LONG:
            return TokenKind.BRACKET_CLOSE
        return TokenKind.SQUARE_CLOSE


def decode_bool(token: Token) -> bool:
    try:
        return parse_bool(token.text)
    except ValueError as e:
        raise ParseError(
            ErrorKind.INVALID_BOOL_LITERAL,
            f"Invalid boolean literal: {e}",
            token.span,
        ) from e


def decode_int(token: Token) -> int:
    try:
        return parse_int(token.text)
    except ParseIntError as e:
        raise ParseError(
            ErrorKind.INVALID_INT_LITERAL,
            f"Invalid integer literal: {e}",
            token.span,
            int_error=e.kind,
        ) from e


def decode_float(token: Token) -> float:
    try:
        return parse_float(token.text)
    except ValueError as e:
        raise ParseError(
            ErrorKind.INVALID_FLOAT_LITERAL,
            f"Invalid float literal: {e}",
            token.span,
        ) from e


def decode_string(token: Token) -> str:
    try:
        return parse_string(token.text)
    except UnescapeError as e:
        raise ParseError(
            ErrorKind.INVALID_STRING_LITERAL,
            f"Invalid string literal: {e}",
            token.span,
        ) from e


def decode_scalar(token: Token) -> Value:
    """Decodes a leaf token into its ``Value``."""
    match token.kind:
        case TokenKind.BOOL:
            return Bool(decode_bool(token))
        case TokenKind.INTEGER:
            return Int(decode_int(token))
        case TokenKind.FLOAT:
            return Float(decode_float(token))
        case TokenKind.LITERAL_STRING:
            return String(decode_string(token))
        case TokenKind.NULL:
            return NULL
        case _:
            raise ParseError.unexpected_token(VALUE_START[:5], token)


def array_key(value: Value, span: Span | None = None) -> Key:
    """
    Coerces the left-hand side of ``=>`` into an array key.

    Raises:
        ParseError: ``INVALID_ARRAY_KEY`` for arrays and for floats that
            have no integer truncation.
    """
    match value:
        case Int(number):
            return Key(number)
        case Float(number):
            if math.isfinite(number) and is_i64(math.trunc(number)):
                return Key(math.trunc(number))
        case String(text):
            return string_key(text)
        case Bool(flag):
            return Key(1 if flag else 0)
        case Null():
            return Key("")

    raise ParseError(
        ErrorKind.INVALID_ARRAY_KEY,
        f"Invalid array key {value!r} expected number or string",
        span,
    )


class ArrayBuilder:
    """Collects array entries while tracking PHP's next auto-index."""

    def __init__(self) -> None:
        self.next_int_key = 0
        self.data: dict[Key, Value] = {}

    def push_value(self, value: Value) -> None:
        self.data[Key(self.next_int_key)] = value
        self.next_int_key += 1

    def push_key_value(self, key: Key, value: Value) -> None:
        if isinstance(key.value, int):
            self.next_int_key = key.value + 1
        self.data[key] = value

    def finish(self) -> Array:
        return Array(self.data)


class Parser:
    """
    Parses one literal value from a lexer.

    Errors are never recovered from: the first ``ParseError`` aborts the
    whole parse.
    """

    def __init__(self, lexer: Lexer, config: ParseConfig | None = None):
        self.lexer = lexer
        self.config = config or ParseConfig()
        self.current_token = Token(TokenKind.EOF, "", 0, 0)
        self.previous_end = 0
        self.depth = 0

    def advance_token(self) -> Token:
        """Advances to next token and returns it."""
        self.previous_end = self.current_token.end
        self.current_token = self.lexer.next_token()
        return self.current_token

    def expect_token(self, *expected: TokenKind) -> Token:
        """Expects one of the given token kinds and advances past it."""
        token = self.current_token
        if token.kind not in expected:
            raise ParseError.unexpected_token(expected, token)
        self.advance_token()
        return token

    def parse_value(self) -> Value:
        """Parses any literal value starting at the current token."""
        token = self.expect_token(*VALUE_START)

        if token.kind is TokenKind.ARRAY:
            self.expect_token(TokenKind.BRACKET_OPEN)
            return self.parse_array(ArraySyntax.LONG, token)
        if token.kind is TokenKind.SQUARE_OPEN:
            return self.parse_array(ArraySyntax.SHORT, token)
        return decode_scalar(token)

    def enter_array(self, opening: Token) -> None:
        self.depth += 1
        if self.depth > self.config.max_depth:
            raise ParseError(
                ErrorKind.DEPTH_LIMIT_EXCEEDED,
                f"Array nesting exceeds the maximum depth of {self.config.max_depth}",
                opening.span,
            )

    def parse_array(self, syntax: ArraySyntax, opening: Token) -> Array:
        """Parses array entries up to and including the closing bracket."""
        with ProfileContext("parse_array"):
            self.enter_array(opening)
            builder = ArrayBuilder()
            close = syntax.close

            # Empty array or trailing comma
            while self.current_token.kind is not close:
                key_token = self.current_token
                key_or_value = self.parse_value()
                key_span = Span(key_token.start, self.previous_end)
                separator = self.expect_token(
                    close, TokenKind.COMMA, TokenKind.ARROW
                )

                if separator.kind is not TokenKind.ARROW:
                    builder.push_value(key_or_value)
                    if separator.kind is close:
                        break
                    continue

                key = array_key(key_or_value, key_span)
                value_token = self.current_token
                value = self.parse_value()
                if self.current_token.kind is TokenKind.ARROW and value.is_array():
                    # "k" => [..] => v: the nested array is being used as a key
                    array_key(value, Span(value_token.start, self.previous_end))
                builder.push_key_value(key, value)
                if self.expect_token(close, TokenKind.COMMA).kind is close:
                    break
            else:
                self.advance_token()

            self.depth -= 1
            return builder.finish()

    def parse_document(self) -> Value:
        """Parses a complete source: one value and nothing after it."""
        self.advance_token()
        value = self.parse_value()
        self.finish()
        return value

    def finish(self) -> None:
        """Requires end of input, tolerating one trailing ``;`` if configured."""
        token = self.current_token
        if (
            token.kind is TokenKind.SEMICOLON
            and self.config.allow_trailing_semicolon
        ):
            token = self.advance_token()
        if token.kind is not TokenKind.EOF:
            raise trailing_characters(token)


def trailing_characters(token: Token) -> ParseError:
    return ParseError(
        ErrorKind.TRAILING_CHARACTERS,
        "Trailing characters after the value",
        token.span,
    )


def parse(source: str, config: ParseConfig | None = None) -> Value:
    """Parses ``source`` into a ``Value`` tree."""
    with ProfileContext("parse", len(source)):
        return Parser(Lexer(source), config).parse_document()


__all__ = [
    "ArrayBuilder",
    "ArraySyntax",
    "Parser",
    "array_key",
    "decode_scalar",
    "parse",
    "string_key",
]
