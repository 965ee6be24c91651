"""
Visitor-driven deserialization straight off the token stream.

A consumer describes the shape it expects by calling one of the
``deserialize_*`` operations with a ``Visitor``; the deserializer feeds
the visitor scalars, or hands it a ``SeqAccess``, ``MapAccess`` or
``EnumAccess`` to pull nested units from. No intermediate ``Value`` tree
is built unless the visitor builds one.

One token of lookahead is needed to tell keys from values and elements
from the end of an array, so pulled-but-unconsumed tokens wait in a
small deque in front of the lexer.
"""

from __future__ import annotations

from abc import ABC
from abc import abstractmethod
from collections import deque
from collections.abc import Callable
from collections.abc import Sequence
from typing import Any
from typing import Generic
from typing import TypeAlias
from typing import TypeVar

from ._config import ParseConfig
from ._errors import ErrorKind
from ._errors import ParseError
from ._errors import Span
from ._lexer import SCALAR_KINDS
from ._lexer import VALUE_START
from ._lexer import Lexer
from ._lexer import Token
from ._lexer import TokenKind
from ._parser import ArraySyntax
from ._parser import array_key
from ._parser import decode_bool
from ._parser import decode_float
from ._parser import decode_int
from ._parser import decode_scalar
from ._parser import decode_string
from ._parser import trailing_characters
from ._value import NULL
from ._value import Array
from ._value import Bool
from ._value import Float
from ._value import Int
from ._value import Key
from ._value import String
from ._value import Value

T = TypeVar("T")
V = TypeVar("V")
R = TypeVar("R")

# Deserializes one unit from whatever deserializer it is handed
Seed: TypeAlias = "Callable[[Deserializer], R]"

_ARRAY_START = (TokenKind.ARRAY, TokenKind.SQUARE_OPEN)


def invalid_type(unexpected: str, expected: str) -> ParseError:
    return ParseError.custom(f"invalid type: {unexpected}, expected {expected}")


class Visitor(Generic[T]):
    """
    Receives what the deserializer found.

    Every ``visit_*`` method rejects its input by default; subclasses
    override the ones matching the shape they accept.
    """

    def expecting(self) -> str:
        return "a PHP value"

    def visit_bool(self, value: bool) -> T:
        raise invalid_type(f"boolean `{str(value).lower()}`", self.expecting())

    def visit_int(self, value: int) -> T:
        raise invalid_type(f"integer `{value}`", self.expecting())

    def visit_float(self, value: float) -> T:
        raise invalid_type(f"floating point `{value}`", self.expecting())

    def visit_str(self, value: str) -> T:
        raise invalid_type(f"string {value!r}", self.expecting())

    def visit_none(self) -> T:
        raise invalid_type("null", self.expecting())

    def visit_some(self, de: Deserializer) -> T:
        return de.deserialize_any(self)

    def visit_unit(self) -> T:
        raise invalid_type("null", self.expecting())

    def visit_seq(self, seq: SeqAccess) -> T:
        raise invalid_type("sequence", self.expecting())

    def visit_map(self, access: MapAccess) -> T:
        raise invalid_type("map", self.expecting())

    def visit_enum(self, data: EnumAccess) -> T:
        raise invalid_type("enum", self.expecting())


class SeqAccess(ABC):
    @abstractmethod
    def has_next(self) -> bool:
        """Returns whether another element follows, consuming the end marker if not."""

    @abstractmethod
    def next_element(self, seed: Seed[T]) -> T: ...


class MapAccess(ABC):
    @abstractmethod
    def has_next(self) -> bool: ...

    @abstractmethod
    def next_key(self, seed: Seed[T]) -> T: ...

    @abstractmethod
    def next_value(self, seed: Seed[T]) -> T: ...

    def next_entry(self, key_seed: Seed[T], value_seed: Seed[V]) -> tuple[T, V]:
        return self.next_key(key_seed), self.next_value(value_seed)


class VariantAccess(ABC):
    @abstractmethod
    def unit_variant(self) -> None: ...

    @abstractmethod
    def newtype_variant(self, seed: Seed[T]) -> T: ...

    @abstractmethod
    def tuple_variant(self, length: int, visitor: Visitor[T]) -> T: ...

    @abstractmethod
    def struct_variant(self, fields: Sequence[str], visitor: Visitor[T]) -> T: ...


class EnumAccess(ABC):
    @abstractmethod
    def variant(self, seed: Seed[T]) -> tuple[T, VariantAccess]:
        """Deserializes the variant name and returns access to its payload."""


class Deserializer(ABC):
    """
    The expect-and-consume operations a visitor-driven consumer calls.

    Only ``deserialize_any`` is required; the typed operations default to
    it, so a self-describing source works with any visitor.
    """

    @abstractmethod
    def deserialize_any(self, visitor: Visitor[T]) -> T: ...

    def deserialize_bool(self, visitor: Visitor[T]) -> T:
        return self.deserialize_any(visitor)

    def deserialize_int(self, visitor: Visitor[T]) -> T:
        return self.deserialize_any(visitor)

    def deserialize_float(self, visitor: Visitor[T]) -> T:
        return self.deserialize_any(visitor)

    def deserialize_str(self, visitor: Visitor[T]) -> T:
        return self.deserialize_any(visitor)

    def deserialize_unit(self, visitor: Visitor[T]) -> T:
        return self.deserialize_any(visitor)

    def deserialize_option(self, visitor: Visitor[T]) -> T:
        return visitor.visit_some(self)

    def deserialize_seq(self, visitor: Visitor[T]) -> T:
        return self.deserialize_any(visitor)

    def deserialize_tuple(self, length: int, visitor: Visitor[T]) -> T:
        return self.deserialize_seq(visitor)

    def deserialize_map(self, visitor: Visitor[T]) -> T:
        return self.deserialize_any(visitor)

    def deserialize_struct(
        self, name: str, fields: Sequence[str], visitor: Visitor[T]
    ) -> T:
        return self.deserialize_map(visitor)

    def deserialize_enum(
        self, name: str, variants: Sequence[str], visitor: Visitor[T]
    ) -> T:
        return self.deserialize_any(visitor)

    def deserialize_identifier(self, visitor: Visitor[T]) -> T:
        return self.deserialize_str(visitor)

    def deserialize_ignored_any(self, visitor: Visitor[T]) -> T:
        return self.deserialize_any(visitor)


class LiteralDeserializer(Deserializer):
    """Drives visitors directly from the tokens of one PHP literal."""

    def __init__(self, source: str, config: ParseConfig | None = None):
        self.lexer = Lexer(source)
        self.config = config or ParseConfig()
        self.peeked: deque[Token] = deque()
        self.last_span = Span(0, 0)
        self.depth = 0

    def next_token(self) -> Token:
        token = self.peeked.popleft() if self.peeked else self.lexer.next_token()
        self.last_span = token.span
        return token

    def peek_token(self) -> Token:
        if not self.peeked:
            self.peeked.append(self.lexer.next_token())
        return self.peeked[0]

    def push_front(self, token: Token) -> None:
        self.peeked.appendleft(token)

    def expect(self, *expected: TokenKind) -> Token:
        token = self.next_token()
        if token.kind not in expected:
            raise ParseError.unexpected_token(expected, token)
        return token

    def end(self) -> None:
        """Requires that nothing but an optional ``;`` follows the value."""
        token = self.next_token()
        if (
            token.kind is TokenKind.SEMICOLON
            and self.config.allow_trailing_semicolon
        ):
            token = self.next_token()
        if token.kind is not TokenKind.EOF:
            raise trailing_characters(token)

    def deserialize_any(self, visitor: Visitor[T]) -> T:
        token = self.peek_token()
        match token.kind:
            case TokenKind.NULL:
                return self.deserialize_unit(visitor)
            case TokenKind.BOOL:
                return self.deserialize_bool(visitor)
            case TokenKind.LITERAL_STRING:
                return self.deserialize_str(visitor)
            case TokenKind.INTEGER:
                return self.deserialize_int(visitor)
            case TokenKind.FLOAT:
                return self.deserialize_float(visitor)
            case TokenKind.ARRAY | TokenKind.SQUARE_OPEN:
                return self.deserialize_map(visitor)
            case _:
                raise ParseError.unexpected_token(VALUE_START, self.next_token())

    def deserialize_bool(self, visitor: Visitor[T]) -> T:
        return visitor.visit_bool(decode_bool(self.expect(TokenKind.BOOL)))

    def deserialize_int(self, visitor: Visitor[T]) -> T:
        return visitor.visit_int(decode_int(self.expect(TokenKind.INTEGER)))

    def deserialize_float(self, visitor: Visitor[T]) -> T:
        token = self.expect(TokenKind.FLOAT, TokenKind.INTEGER)
        if token.kind is TokenKind.INTEGER:
            return visitor.visit_float(float(decode_int(token)))
        return visitor.visit_float(decode_float(token))

    def deserialize_str(self, visitor: Visitor[T]) -> T:
        return visitor.visit_str(decode_string(self.expect(TokenKind.LITERAL_STRING)))

    def deserialize_unit(self, visitor: Visitor[T]) -> T:
        self.expect(TokenKind.NULL)
        return visitor.visit_unit()

    def deserialize_option(self, visitor: Visitor[T]) -> T:
        if self.peek_token().kind is TokenKind.NULL:
            self.next_token()
            return visitor.visit_none()
        return visitor.visit_some(self)

    def open_array(self) -> ArraySyntax:
        """Consumes ``array(`` or ``[`` and returns which syntax opened the array."""
        token = self.expect(*_ARRAY_START)
        self.depth += 1
        if self.depth > self.config.max_depth:
            raise ParseError(
                ErrorKind.DEPTH_LIMIT_EXCEEDED,
                f"Array nesting exceeds the maximum depth of {self.config.max_depth}",
                token.span,
            )
        if token.kind is TokenKind.ARRAY:
            self.expect(TokenKind.BRACKET_OPEN)
            return ArraySyntax.LONG
        return ArraySyntax.SHORT

    def deserialize_seq(self, visitor: Visitor[T]) -> T:
        walker = SeqWalker(self, self.open_array())
        value = visitor.visit_seq(walker)
        walker.end()
        self.depth -= 1
        return value

    def deserialize_map(self, visitor: Visitor[T]) -> T:
        walker = MapWalker(self, self.open_array())
        value = visitor.visit_map(walker)
        walker.end()
        self.depth -= 1
        return value

    def deserialize_enum(
        self, name: str, variants: Sequence[str], visitor: Visitor[T]
    ) -> T:
        token = self.peek_token()
        if token.kind is TokenKind.LITERAL_STRING:
            self.next_token()
            return visitor.visit_enum(UnitVariant(decode_string(token), token.span))
        if token.kind not in _ARRAY_START:
            raise ParseError.unexpected_token(
                (TokenKind.LITERAL_STRING, *_ARRAY_START), self.next_token()
            )

        close = self.open_array().close
        value = visitor.visit_enum(EnumWalker(self))
        if self.expect(close, TokenKind.COMMA).kind is TokenKind.COMMA:
            self.expect(close)
        self.depth -= 1
        return value


class ArrayWalker:
    """Shared state for walking the entries of one array body."""

    def __init__(self, de: LiteralDeserializer, syntax: ArraySyntax):
        self.de = de
        self.close = syntax.close
        self.next_int_key = 0
        self.done = False

    def has_next(self) -> bool:
        if self.done:
            return False
        if self.de.peek_token().kind is self.close:
            self.de.next_token()
            self.done = True
            return False
        return True

    def ensure_next(self) -> None:
        if not self.has_next():
            raise ParseError.custom("no more entries in array", self.de.last_span)

    def take_explicit_key(self) -> Key | None:
        """Consumes ``key =>`` if the entry has an explicit key."""
        first = self.de.next_token()
        if first.kind in SCALAR_KINDS and self.de.peek_token().kind is TokenKind.ARROW:
            key = array_key(decode_scalar(first), first.span)
            self.de.next_token()
            return key
        self.de.push_front(first)
        return None

    def take_value(self, seed: Seed[T]) -> T:
        start = self.de.peek_token()
        value = seed(self.de)
        following = self.de.peek_token()
        if following.kind is TokenKind.ARROW and start.kind in _ARRAY_START:
            raise ParseError(
                ErrorKind.INVALID_ARRAY_KEY,
                "Invalid array key: arrays cannot be used as keys",
                Span(start.start, self.de.last_span.end),
            )
        if self.de.expect(self.close, TokenKind.COMMA).kind is self.close:
            self.done = True
        return value

    def end(self) -> None:
        if self.has_next():
            raise ParseError.custom(
                "invalid length: array has more entries than expected",
                self.de.peek_token().span,
            )


class SeqWalker(ArrayWalker, SeqAccess):
    """
    Feeds array entries to a sequence visitor.

    Explicit keys are allowed only when they equal the next auto-index,
    so ``[0 => "a", 1 => "b"]`` is a sequence but ``[1 => "a"]`` is not.
    """

    def next_element(self, seed: Seed[T]) -> T:
        self.ensure_next()
        span = self.de.peek_token().span
        key = self.take_explicit_key()
        if key is not None and key != Key(self.next_int_key):
            raise ParseError(
                ErrorKind.UNEXPECTED_ARRAY_KEY,
                f"Unexpected array key {key.value!r}, expected {self.next_int_key}",
                span,
            )
        self.next_int_key += 1
        return self.take_value(seed)


class MapWalker(ArrayWalker, MapAccess):
    """Feeds array entries to a map visitor, synthesizing implicit keys."""

    def next_key(self, seed: Seed[T]) -> T:
        self.ensure_next()
        span = self.de.peek_token().span
        key = self.take_explicit_key()
        if key is None:
            key = Key(self.next_int_key)
            self.next_int_key += 1
        elif isinstance(key.value, int):
            self.next_int_key = key.value + 1
        return seed(KeyDeserializer(key, span))

    def next_value(self, seed: Seed[T]) -> T:
        return self.take_value(seed)


class EnumWalker(EnumAccess, VariantAccess):
    """Access to a ``["Variant" => payload]`` enum encoding."""

    def __init__(self, de: LiteralDeserializer):
        self.de = de

    def variant(self, seed: Seed[T]) -> tuple[T, VariantAccess]:
        name = seed(self.de)
        self.de.expect(TokenKind.ARROW)
        return name, self

    def unit_variant(self) -> None:
        self.de.expect(TokenKind.NULL)

    def newtype_variant(self, seed: Seed[T]) -> T:
        return seed(self.de)

    def tuple_variant(self, length: int, visitor: Visitor[T]) -> T:
        return self.de.deserialize_tuple(length, visitor)

    def struct_variant(self, fields: Sequence[str], visitor: Visitor[T]) -> T:
        return self.de.deserialize_struct("", fields, visitor)


class UnitVariant(EnumAccess, VariantAccess):
    """A bare string naming a unit variant."""

    def __init__(self, name: str, span: Span):
        self.name = name
        self.span = span

    def variant(self, seed: Seed[T]) -> tuple[T, VariantAccess]:
        return seed(KeyDeserializer(Key(self.name), self.span)), self

    def unit_variant(self) -> None:
        return None

    def _not_unit(self, expected: str) -> ParseError:
        return ParseError.custom(
            f"invalid type: unit variant, expected {expected}", self.span
        )

    def newtype_variant(self, seed: Seed[T]) -> T:
        raise self._not_unit("newtype variant")

    def tuple_variant(self, length: int, visitor: Visitor[T]) -> T:
        raise self._not_unit("tuple variant")

    def struct_variant(self, fields: Sequence[str], visitor: Visitor[T]) -> T:
        raise self._not_unit("struct variant")


class KeyDeserializer(Deserializer):
    """
    Presents one array key as its own deserializable unit.

    Integer keys are offered as strings to consumers asking for a string,
    since PHP turns numeric string keys into integers.
    """

    def __init__(self, key: Key, span: Span | None = None):
        self.key = key
        self.span = span

    def _error(self, expected: str) -> ParseError:
        return ParseError.custom(
            f"invalid type: array key {self.key.value!r}, expected {expected}",
            self.span,
        )

    def deserialize_any(self, visitor: Visitor[T]) -> T:
        if isinstance(self.key.value, int):
            return visitor.visit_int(self.key.value)
        return visitor.visit_str(self.key.value)

    def deserialize_str(self, visitor: Visitor[T]) -> T:
        return visitor.visit_str(str(self.key.value))

    def deserialize_int(self, visitor: Visitor[T]) -> T:
        if not isinstance(self.key.value, int):
            raise self._error("an integer key")
        return visitor.visit_int(self.key.value)

    def deserialize_float(self, visitor: Visitor[T]) -> T:
        if not isinstance(self.key.value, int):
            raise self._error("a numeric key")
        return visitor.visit_float(float(self.key.value))

    def deserialize_bool(self, visitor: Visitor[T]) -> T:
        if self.key.value not in (0, 1) or isinstance(self.key.value, str):
            raise self._error("a boolean key")
        return visitor.visit_bool(self.key.value == 1)

    def deserialize_enum(
        self, name: str, variants: Sequence[str], visitor: Visitor[T]
    ) -> T:
        return visitor.visit_enum(
            UnitVariant(str(self.key.value), self.span or Span(0, 0))
        )


class KeyVisitor(Visitor[Key]):
    def expecting(self) -> str:
        return "an array key"

    def visit_int(self, value: int) -> Key:
        return Key(value)

    def visit_str(self, value: str) -> Key:
        return Key(value)


class ValueVisitor(Visitor[Value]):
    """Builds a ``Value`` tree, the same one ``parse`` would return."""

    def visit_bool(self, value: bool) -> Value:
        return Bool(value)

    def visit_int(self, value: int) -> Value:
        return Int(value)

    def visit_float(self, value: float) -> Value:
        return Float(value)

    def visit_str(self, value: str) -> Value:
        return String(value)

    def visit_none(self) -> Value:
        return NULL

    def visit_unit(self) -> Value:
        return NULL

    def visit_seq(self, seq: SeqAccess) -> Value:
        entries: dict[Key, Value] = {}
        while seq.has_next():
            entries[Key(len(entries))] = seq.next_element(deserialize_value)
        return Array(entries)

    def visit_map(self, access: MapAccess) -> Value:
        entries: dict[Key, Value] = {}
        while access.has_next():
            key, value = access.next_entry(_deserialize_key, deserialize_value)
            entries[key] = value
        return Array(entries)


class IgnoredAny(Visitor[None]):
    """Accepts and discards any value."""

    def visit_bool(self, value: bool) -> None:
        return None

    def visit_int(self, value: int) -> None:
        return None

    def visit_float(self, value: float) -> None:
        return None

    def visit_str(self, value: str) -> None:
        return None

    def visit_none(self) -> None:
        return None

    def visit_unit(self) -> None:
        return None

    def visit_seq(self, seq: SeqAccess) -> None:
        while seq.has_next():
            seq.next_element(ignore)

    def visit_map(self, access: MapAccess) -> None:
        while access.has_next():
            access.next_entry(ignore, ignore)


IGNORED_ANY = IgnoredAny()


def ignore(de: Deserializer) -> None:
    de.deserialize_ignored_any(IGNORED_ANY)


def deserialize_value(de: Deserializer) -> Value:
    return de.deserialize_any(ValueVisitor())


def _deserialize_key(de: Deserializer) -> Key:
    return de.deserialize_any(KeyVisitor())


def from_str(source: str, seed: Seed[T], config: ParseConfig | None = None) -> T:
    """
    Runs ``seed`` against a deserializer over ``source``.

    Fails with ``TRAILING_CHARACTERS`` if anything but whitespace, comments
    or a single ``;`` follows the value. Visitor errors that carry no span
    are located at the last consumed token.
    """
    de = LiteralDeserializer(source, config)
    try:
        value = seed(de)
        de.end()
    except ParseError as e:
        if e.span is None:
            raise e.with_span(de.last_span) from None
        raise
    return value


__all__ = [
    "Deserializer",
    "EnumAccess",
    "IgnoredAny",
    "KeyDeserializer",
    "LiteralDeserializer",
    "MapAccess",
    "SeqAccess",
    "VariantAccess",
    "Visitor",
    "ValueVisitor",
    "deserialize_value",
    "from_str",
    "ignore",
    "invalid_type",
]
