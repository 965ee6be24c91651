"""Error type shared by the lexer, parser and deserialization walker."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import TYPE_CHECKING
from typing import NamedTuple

if TYPE_CHECKING:
    from ._lexer import Token
    from ._lexer import TokenKind


class Span(NamedTuple):
    """Half-open ``[start, end)`` character range into the parsed source."""

    start: int
    end: int


class ErrorKind(Enum):
    UNEXPECTED_TOKEN = "unexpected_token"
    INVALID_BOOL_LITERAL = "invalid_bool_literal"
    INVALID_INT_LITERAL = "invalid_int_literal"
    INVALID_FLOAT_LITERAL = "invalid_float_literal"
    INVALID_STRING_LITERAL = "invalid_string_literal"
    INVALID_ARRAY_KEY = "invalid_array_key"
    UNEXPECTED_ARRAY_KEY = "unexpected_array_key"
    TRAILING_CHARACTERS = "trailing_characters"
    DEPTH_LIMIT_EXCEEDED = "depth_limit_exceeded"
    CUSTOM = "custom"


class IntErrorKind(Enum):
    EMPTY = "cannot parse integer from empty string"
    INVALID_DIGIT = "invalid digit found in string"
    OVERFLOW = "number too large or small to fit in target type"


class ParseError(ValueError):
    """
    Reports a failed parse together with the offending source span.

    The source text itself is not kept; pass it to ``render`` or
    ``position`` when a human readable report is needed.
    """

    def __init__(
        self,
        kind: ErrorKind,
        msg: str,
        span: Span | None = None,
        *,
        expected: tuple[TokenKind, ...] = (),
        found: Token | None = None,
        int_error: IntErrorKind | None = None,
    ) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")

        self.kind = kind
        self.msg = msg
        self.span = span
        self.expected = expected
        self.found = found
        self.int_error = int_error

        if span is None:
            super().__init__(msg)
        else:
            super().__init__(f"{msg} at {span.start}..{span.end}")

    @classmethod
    def unexpected_token(
        cls, expected: Iterable[TokenKind], found: Token
    ) -> ParseError:
        from ._lexer import TokenKind

        expected = tuple(expected)
        names = ", ".join(kind.describe() for kind in expected)
        if found.kind is TokenKind.EOF:
            msg = f"Unexpected end of input, expected one of [{names}]"
        elif found.kind is TokenKind.ERROR:
            msg = f"No valid token found, expected one of [{names}]"
        else:
            msg = (
                f"Unexpected token, found {found.kind.describe()} "
                f"expected one of [{names}]"
            )
        return cls(
            ErrorKind.UNEXPECTED_TOKEN,
            msg,
            found.span,
            expected=expected,
            found=found,
        )

    @classmethod
    def custom(cls, msg: str, span: Span | None = None) -> ParseError:
        return cls(ErrorKind.CUSTOM, msg, span)

    def with_span(self, span: Span) -> ParseError:
        """Returns a copy of this error located at ``span``."""
        return type(self)(
            self.kind,
            self.msg,
            span,
            expected=self.expected,
            found=self.found,
            int_error=self.int_error,
        )

    def position(self, source: str) -> tuple[int, int]:
        """Returns the 1-based ``(lineno, colno)`` of the error in ``source``."""
        from ._diagnostics import line_col

        return line_col(source, self.span.start if self.span else 0)

    def render(self, source: str) -> str:
        """Renders the error with the offending source lines underlined."""
        from ._diagnostics import render_error

        return render_error(self.msg, self.span, source)


__all__ = ["ErrorKind", "IntErrorKind", "ParseError", "Span"]
