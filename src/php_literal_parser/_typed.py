"""
Builds visitors from Python type hints.

``deserialize_as(de, hint)`` reads one unit of the hinted type. Supported
hints: ``Value``, ``Key`` (coerced like the left side of ``=>``), ``Any``,
``bool``, ``int``, ``float``, ``str``, ``None``, optionals,
``list``/``Sequence``/``set``/``frozenset``/``tuple`` and
``dict``/``Mapping`` generics, ``typing.NewType`` and ``Annotated``
(read as their underlying type), dataclasses, ``NamedTuple`` classes,
``enum.Enum`` subclasses and unions of variant classes, which use the
externally tagged ``["Variant" => payload]`` encoding.
"""

from __future__ import annotations

import dataclasses
import enum
import types
import typing
from collections.abc import Mapping
from collections.abc import Sequence
from collections.abc import Set
from typing import Annotated
from typing import Any
from typing import Union
from typing import get_args
from typing import get_origin
from typing import get_type_hints

from ._de import Deserializer
from ._de import EnumAccess
from ._de import MapAccess
from ._de import SeqAccess
from ._de import Visitor
from ._de import deserialize_value
from ._de import ignore
from ._errors import ParseError
from ._parser import array_key
from ._value import Key
from ._value import Value

_SCALARS = (bool, int, float, str)


class BoolVisitor(Visitor[bool]):
    def expecting(self) -> str:
        return "a boolean"

    def visit_bool(self, value: bool) -> bool:
        return value


class IntVisitor(Visitor[int]):
    def expecting(self) -> str:
        return "an integer"

    def visit_int(self, value: int) -> int:
        return value


class FloatVisitor(Visitor[float]):
    def expecting(self) -> str:
        return "a float"

    def visit_float(self, value: float) -> float:
        return value

    def visit_int(self, value: int) -> float:
        return float(value)


class StrVisitor(Visitor[str]):
    def expecting(self) -> str:
        return "a string"

    def visit_str(self, value: str) -> str:
        return value


class UnitVisitor(Visitor[None]):
    def expecting(self) -> str:
        return "null"

    def visit_unit(self) -> None:
        return None

    def visit_none(self) -> None:
        return None


class PythonVisitor(Visitor[Any]):
    """Builds plain Python data: arrays become ``dict`` keyed by ``int``/``str``."""

    def visit_bool(self, value: bool) -> bool:
        return value

    def visit_int(self, value: int) -> int:
        return value

    def visit_float(self, value: float) -> float:
        return value

    def visit_str(self, value: str) -> str:
        return value

    def visit_none(self) -> None:
        return None

    def visit_unit(self) -> None:
        return None

    def visit_seq(self, seq: SeqAccess) -> dict[int | str, Any]:
        items: dict[int | str, Any] = {}
        while seq.has_next():
            items[len(items)] = seq.next_element(_python)
        return items

    def visit_map(self, access: MapAccess) -> dict[int | str, Any]:
        items: dict[int | str, Any] = {}
        while access.has_next():
            key, value = access.next_entry(_python_key, _python)
            items[key] = value
        return items


def _python(de: Deserializer) -> Any:
    return de.deserialize_any(PythonVisitor())


def _python_key(de: Deserializer) -> int | str:
    key: int | str = de.deserialize_any(PythonVisitor())
    return key


class OptionVisitor(Visitor[Any]):
    def __init__(self, hint: Any):
        self.hint = hint

    def expecting(self) -> str:
        return f"an optional {_describe(self.hint)}"

    def visit_none(self) -> None:
        return None

    def visit_some(self, de: Deserializer) -> Any:
        return deserialize_as(de, self.hint)


class ListVisitor(Visitor[list[Any]]):
    def __init__(self, item: Any):
        self.item = item

    def expecting(self) -> str:
        return f"a sequence of {_describe(self.item)}"

    def visit_seq(self, seq: SeqAccess) -> list[Any]:
        items = []
        while seq.has_next():
            items.append(seq.next_element(lambda de: deserialize_as(de, self.item)))
        return items


class TupleVisitor(Visitor[tuple[Any, ...]]):
    def __init__(self, items: Sequence[Any]):
        self.items = items

    def expecting(self) -> str:
        return f"a tuple of size {len(self.items)}"

    def visit_seq(self, seq: SeqAccess) -> tuple[Any, ...]:
        values = []
        for index, hint in enumerate(self.items):
            if not seq.has_next():
                raise invalid_length(index, self.expecting())
            values.append(seq.next_element(lambda de, h=hint: deserialize_as(de, h)))
        return tuple(values)


class DictVisitor(Visitor[dict[Any, Any]]):
    def __init__(self, key: Any, value: Any):
        self.key = key
        self.value = value

    def expecting(self) -> str:
        return f"a map of {_describe(self.key)} to {_describe(self.value)}"

    def visit_map(self, access: MapAccess) -> dict[Any, Any]:
        result = {}
        while access.has_next():
            key, value = access.next_entry(
                lambda de: deserialize_as(de, self.key),
                lambda de: deserialize_as(de, self.value),
            )
            result[key] = value
        return result


class StructVisitor(Visitor[Any]):
    """Fills a dataclass from a string-keyed array; unknown keys are skipped."""

    def __init__(self, cls: type):
        self.cls = cls
        self.fields = {f.name: f for f in dataclasses.fields(cls) if f.init}
        self.hints = get_type_hints(cls, include_extras=True)

    def expecting(self) -> str:
        return f"struct {self.cls.__name__}"

    def visit_map(self, access: MapAccess) -> Any:
        values: dict[str, Any] = {}
        while access.has_next():
            name = access.next_key(_identifier)
            if name not in self.fields:
                access.next_value(ignore)
                continue
            if name in values:
                raise ParseError.custom(f"duplicate field `{name}`")
            hint = self.hints[name]
            values[name] = access.next_value(lambda de: deserialize_as(de, hint))

        for name, f in self.fields.items():
            if name in values:
                continue
            if (
                f.default is dataclasses.MISSING
                and f.default_factory is dataclasses.MISSING
            ):
                raise ParseError.custom(f"missing field `{name}`")

        return self.cls(**values)


class NamedTupleVisitor(Visitor[Any]):
    """Fills a ``NamedTuple`` positionally; trailing defaulted fields may be left out."""

    def __init__(self, cls: type):
        self.cls = cls
        self.hints = get_type_hints(cls, include_extras=True)
        self.fields: tuple[str, ...] = cls._fields  # type: ignore[attr-defined]
        self.defaults: dict[str, Any] = cls._field_defaults  # type: ignore[attr-defined]

    def expecting(self) -> str:
        return f"tuple struct {self.cls.__name__} with {len(self.fields)} elements"

    def visit_seq(self, seq: SeqAccess) -> Any:
        values = []
        for index, name in enumerate(self.fields):
            if not seq.has_next():
                if name in self.defaults:
                    break
                raise invalid_length(index, self.expecting())
            hint = self.hints.get(name, Any)
            values.append(seq.next_element(lambda de, h=hint: deserialize_as(de, h)))
        return self.cls(*values)


class EnumVisitor(Visitor[enum.Enum]):
    """Maps a unit variant name onto an ``enum.Enum`` member."""

    def __init__(self, cls: type[enum.Enum]):
        self.cls = cls

    def expecting(self) -> str:
        return f"enum {self.cls.__name__}"

    def visit_enum(self, data: EnumAccess) -> enum.Enum:
        name, variant = data.variant(_identifier)
        member = self.cls.__members__.get(name)
        if member is None:
            raise unknown_variant(name, list(self.cls.__members__))
        variant.unit_variant()
        return member


class VariantsVisitor(Visitor[Any]):
    """
    Decodes a union of variant classes.

    The variant is picked by class name; ``NamedTuple`` classes read a
    tuple payload, dataclasses a struct payload and ``typing.NewType``
    aliases a newtype payload.
    """

    def __init__(self, variants: Mapping[str, Any]):
        self.variants = variants

    def expecting(self) -> str:
        return f"one of the variants {', '.join(self.variants)}"

    def visit_enum(self, data: EnumAccess) -> Any:
        name, variant = data.variant(_identifier)
        target = self.variants.get(name)
        if target is None:
            raise unknown_variant(name, list(self.variants))

        if isinstance(target, typing.NewType):
            inner = target.__supertype__
            return variant.newtype_variant(lambda de: deserialize_as(de, inner))
        if _is_namedtuple(target):
            visitor = NamedTupleVisitor(target)
            return variant.tuple_variant(len(visitor.fields), visitor)
        struct = StructVisitor(target)
        return variant.struct_variant(list(struct.fields), struct)


class ScalarUnionVisitor(PythonVisitor):
    """Accepts any scalar whose type is one of a union's members."""

    def __init__(self, allowed: Sequence[type]):
        self.allowed = tuple(allowed)

    def expecting(self) -> str:
        return " or ".join(t.__name__ for t in self.allowed)

    def _check(self, value: Any, description: str) -> Any:
        if type(value) in self.allowed:
            return value
        if type(value) is int and float in self.allowed:
            return float(value)
        raise ParseError.custom(
            f"invalid type: {description}, expected {self.expecting()}"
        )

    def visit_bool(self, value: bool) -> Any:
        return self._check(value, "boolean")

    def visit_int(self, value: int) -> Any:
        return self._check(value, "integer")

    def visit_float(self, value: float) -> Any:
        return self._check(value, "floating point")

    def visit_str(self, value: str) -> Any:
        return self._check(value, "string")

    def visit_unit(self) -> Any:
        return self._check(None, "null")

    def visit_map(self, access: MapAccess) -> Any:
        return self._check(super().visit_map(access), "map")


def invalid_length(length: int, expected: str) -> ParseError:
    return ParseError.custom(f"invalid length {length}, expected {expected}")


def unknown_variant(name: str, expected: Sequence[str]) -> ParseError:
    names = ", ".join(f"`{v}`" for v in expected)
    return ParseError.custom(f"unknown variant `{name}`, expected one of {names}")


def _identifier(de: Deserializer) -> str:
    return de.deserialize_identifier(StrVisitor())


def _describe(hint: Any) -> str:
    return getattr(hint, "__name__", None) or repr(hint)


def _is_namedtuple(hint: Any) -> bool:
    return (
        isinstance(hint, type)
        and issubclass(hint, tuple)
        and hasattr(hint, "_fields")
    )


def _is_variant(hint: Any) -> bool:
    return (
        isinstance(hint, typing.NewType)
        or _is_namedtuple(hint)
        or (isinstance(hint, type) and dataclasses.is_dataclass(hint))
    )


def _deserialize_union(de: Deserializer, hint: Any, args: tuple[Any, ...]) -> Any:
    members = [a for a in args if a is not type(None)]
    if len(members) < len(args):
        inner = members[0] if len(members) == 1 else Union[tuple(members)]  # noqa: UP007
        return de.deserialize_option(OptionVisitor(inner))

    if all(_is_variant(m) for m in members):
        variants = {m.__name__: m for m in members}
        return de.deserialize_enum(
            _describe(hint), list(variants), VariantsVisitor(variants)
        )
    if all(m in _SCALARS for m in members):
        return de.deserialize_any(ScalarUnionVisitor(members))
    raise TypeError(f"Unsupported union type: {hint!r}")


def deserialize_as(de: Deserializer, hint: Any) -> Any:  # noqa: PLR0911, PLR0912
    """Deserializes one unit of the type described by ``hint``."""
    if isinstance(hint, Visitor):
        return de.deserialize_any(hint)
    if hint is Value:
        return deserialize_value(de)
    if hint is Any or hint is object:
        return _python(de)
    if hint is None or hint is type(None):
        return de.deserialize_unit(UnitVisitor())
    if hint is bool:
        return de.deserialize_bool(BoolVisitor())
    if hint is int:
        return de.deserialize_int(IntVisitor())
    if hint is float:
        return de.deserialize_float(FloatVisitor())
    if hint is str:
        return de.deserialize_str(StrVisitor())
    if hint is Key:
        return array_key(deserialize_value(de))
    if isinstance(hint, typing.NewType):
        return deserialize_as(de, hint.__supertype__)

    origin = get_origin(hint)
    args = get_args(hint)

    if origin is Annotated:
        return deserialize_as(de, args[0])
    if origin is Union or origin is types.UnionType:
        return _deserialize_union(de, hint, args)

    container = origin or hint
    if container is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return tuple(de.deserialize_seq(ListVisitor(args[0])))
        if not args:
            return tuple(de.deserialize_seq(ListVisitor(Any)))
        return de.deserialize_tuple(len(args), TupleVisitor(args))
    if container in (list, Sequence):
        return de.deserialize_seq(ListVisitor(args[0] if args else Any))
    if container in (set, frozenset, Set):
        items = de.deserialize_seq(ListVisitor(args[0] if args else Any))
        return frozenset(items) if container is frozenset else set(items)
    if container in (dict, Mapping):
        key, value = args if args else (Any, Any)
        return de.deserialize_map(DictVisitor(key, value))

    if isinstance(hint, type):
        if issubclass(hint, enum.Enum):
            return de.deserialize_enum(
                hint.__name__, list(hint.__members__), EnumVisitor(hint)
            )
        if _is_namedtuple(hint):
            visitor = NamedTupleVisitor(hint)
            return de.deserialize_tuple(len(visitor.fields), visitor)
        if dataclasses.is_dataclass(hint):
            struct = StructVisitor(hint)
            return de.deserialize_struct(hint.__name__, list(struct.fields), struct)

    raise TypeError(f"Unsupported target type: {hint!r}")


__all__ = ["PythonVisitor", "deserialize_as"]
