"""
Dynamic value model for parsed PHP literals.

``Value`` is a tagged union with one subclass per PHP type. Arrays map
``Key`` objects to values and keep insertion order, as PHP arrays do.
Indexing a non-array or a missing key yields the shared ``NULL``
sentinel instead of raising.
"""

from __future__ import annotations

import functools
import math
import re
from collections.abc import ItemsView
from collections.abc import Iterator
from collections.abc import KeysView
from collections.abc import Mapping
from collections.abc import ValuesView
from dataclasses import dataclass
from dataclasses import field
from typing import Any
from typing import TypeAlias

from ._num import is_i64

# Strings PHP treats as integer keys: no sign other than "-", no leading zeros
_INT_KEY_RE = re.compile(r"-?(?:0|[1-9][0-9]*)")


@functools.total_ordering
@dataclass(frozen=True, slots=True)
class Key:
    """
    Array key, either an ``int`` or a ``str``.

    Equality and hashing are variant-strict: ``Key(1) != Key("1")``.
    Ordering compares integers numerically and strings lexically; mixed
    pairs compare the integer's decimal form against the string, and on a
    tie (``Key(9)`` against ``Key("9")``) the integer sorts first.

    A hand-built ``Key("8")`` has no literal form, since PHP reads ``'8'``
    as the integer key ``8``; use ``string_key`` to apply that rule.
    """

    value: int | str

    def __post_init__(self) -> None:
        if isinstance(self.value, bool):
            object.__setattr__(self, "value", int(self.value))
        elif not isinstance(self.value, int | str):
            raise TypeError(
                f"array keys must be int or str, not {type(self.value).__name__}"
            )

    def is_int(self) -> bool:
        return isinstance(self.value, int)

    def is_string(self) -> bool:
        return isinstance(self.value, str)

    def into_int(self) -> int | None:
        return self.value if isinstance(self.value, int) else None

    def into_string(self) -> str | None:
        return self.value if isinstance(self.value, str) else None

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Key):
            return NotImplemented
        a, b = self.value, other.value
        if isinstance(a, int) and isinstance(b, int):
            return a < b
        if isinstance(a, str) and isinstance(b, str):
            return a < b
        if str(a) != str(b):
            return str(a) < str(b)
        return isinstance(a, int)

    def __str__(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        return f"Key({self.value!r})"


def string_key(s: str) -> Key:
    """Applies PHP's integer-string rule: ``"8"`` is ``8``, ``"08"`` stays a string."""
    if _INT_KEY_RE.fullmatch(s) and s != "-0":
        number = int(s)
        if is_i64(number):
            return Key(number)
    return Key(s)


IndexLike: TypeAlias = Key | int | str


def _as_key(index: IndexLike) -> Key:
    return index if isinstance(index, Key) else Key(index)


def _mapping_key(key: IndexLike) -> Key:
    return string_key(key) if isinstance(key, str) else _as_key(key)


class Value:
    """Base of the ``Bool | Int | Float | String | Array | Null`` union."""

    __slots__ = ()

    # Cross-type equality with native scalars makes a consistent hash impossible
    __hash__ = None  # type: ignore[assignment]

    def is_bool(self) -> bool:
        return isinstance(self, Bool)

    def is_int(self) -> bool:
        return isinstance(self, Int)

    def is_float(self) -> bool:
        return isinstance(self, Float)

    def is_string(self) -> bool:
        return isinstance(self, String)

    def is_array(self) -> bool:
        return isinstance(self, Array)

    def is_null(self) -> bool:
        return isinstance(self, Null)

    def into_bool(self) -> bool | None:
        return self.value if isinstance(self, Bool) else None

    def into_int(self) -> int | None:
        return self.value if isinstance(self, Int) else None

    def into_float(self) -> float | None:
        return self.value if isinstance(self, Float) else None

    def into_string(self) -> str | None:
        return self.value if isinstance(self, String) else None

    def into_dict(self) -> dict[Key, Value] | None:
        return dict(self.entries) if isinstance(self, Array) else None

    def __getitem__(self, index: IndexLike) -> Value:
        return NULL

    def get(self, index: IndexLike, default: Value | None = None) -> Value | None:
        return default

    def to_python(self) -> Any:
        """Converts to plain Python; arrays become ``dict`` keyed by ``int``/``str``."""
        raise NotImplementedError

    @staticmethod
    def from_python(obj: Any) -> Value:
        """
        Builds a ``Value`` from plain Python data.

        Lists and tuples become arrays with auto-incremented integer keys.
        String mapping keys go through ``string_key``, as in a PHP array
        literal, so ``{"8": 1}`` becomes ``[8 => 1]``.
        """
        if isinstance(obj, Value):
            return obj
        if obj is None:
            return NULL
        if isinstance(obj, bool):
            return Bool(obj)
        if isinstance(obj, int):
            return Int(obj)
        if isinstance(obj, float):
            return Float(obj)
        if isinstance(obj, str):
            return String(obj)
        if isinstance(obj, Mapping):
            return Array(
                {_mapping_key(k): Value.from_python(v) for k, v in obj.items()}
            )
        if isinstance(obj, list | tuple):
            return Array({Key(i): Value.from_python(v) for i, v in enumerate(obj)})
        raise TypeError(f"Object of type {type(obj).__name__} is not a PHP value")


@dataclass(frozen=True, slots=True, eq=False)
class Bool(Value):
    value: bool

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Bool):
            return self.value == other.value
        return type(other) is bool and self.value == other

    def to_python(self) -> bool:
        return self.value


@dataclass(frozen=True, slots=True, eq=False)
class Int(Value):
    value: int

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Int):
            return self.value == other.value
        return type(other) is int and self.value == other

    def to_python(self) -> int:
        return self.value


@dataclass(frozen=True, slots=True, eq=False)
class Float(Value):
    value: float

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Float):
            return self.value == other.value
        return type(other) is float and self.value == other

    def to_python(self) -> float:
        return self.value

    def is_finite(self) -> bool:
        return math.isfinite(self.value)


@dataclass(frozen=True, slots=True, eq=False)
class String(Value):
    value: str

    def __eq__(self, other: object) -> bool:
        if isinstance(other, String):
            return self.value == other.value
        return isinstance(other, str) and self.value == other

    def to_python(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True, eq=False)
class Array(Value):
    entries: dict[Key, Value] = field(default_factory=dict)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Array):
            return self.entries == other.entries
        return False

    def __getitem__(self, index: IndexLike) -> Value:
        return self.entries.get(_as_key(index), NULL)

    def get(self, index: IndexLike, default: Value | None = None) -> Value | None:
        return self.entries.get(_as_key(index), default)

    def __contains__(self, index: object) -> bool:
        if not isinstance(index, Key | int | str):
            return False
        return _as_key(index) in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[Key]:
        return iter(self.entries)

    def keys(self) -> KeysView[Key]:
        return self.entries.keys()

    def values(self) -> ValuesView[Value]:
        return self.entries.values()

    def items(self) -> ItemsView[Key, Value]:
        return self.entries.items()

    def to_python(self) -> dict[int | str, Any]:
        return {key.value: value.to_python() for key, value in self.entries.items()}


@dataclass(frozen=True, slots=True, eq=False)
class Null(Value):
    def __eq__(self, other: object) -> bool:
        return isinstance(other, Null) or other is None

    def to_python(self) -> None:
        return None

    def __str__(self) -> str:
        return "null"


NULL = Null()


__all__ = [
    "NULL",
    "Array",
    "Bool",
    "Float",
    "Int",
    "Key",
    "Null",
    "String",
    "Value",
    "string_key",
]
