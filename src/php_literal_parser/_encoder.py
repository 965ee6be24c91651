"""Serializes Python data and ``Value`` trees back to PHP literal syntax."""

from __future__ import annotations

import math
from collections.abc import Iterable
from collections.abc import Mapping
from typing import Any

from ._config import EncodeConfig
from ._num import I64_MIN
from ._num import is_i64
from ._value import Array
from ._value import Bool
from ._value import Float
from ._value import Int
from ._value import Key
from ._value import Null
from ._value import String
from ._value import Value
from ._value import string_key


def _encode_string(s: str) -> str:
    """Encode string as a single-quoted literal, which only escapes ``\\`` and ``'``."""
    return "'" + s.replace("\\", "\\\\").replace("'", "\\'") + "'"


def _encode_number(n: int | float) -> str:
    """Encode numeric values within PHP's integer and float domains."""
    if isinstance(n, float):
        if math.isnan(n) or math.isinf(n):
            msg = "Out of range float values are not PHP literals"
            raise ValueError(msg)
        return repr(n)
    # The literal's magnitude is read before the sign, so I64_MIN has no literal form
    if not is_i64(n) or n == I64_MIN:
        msg = f"Integer {n} has no 64-bit PHP integer literal"
        raise ValueError(msg)
    return str(n)


def _encode_key(key: Any, config: EncodeConfig) -> int | str | None:
    """Normalizes a mapping key; ``None`` means the entry is skipped."""
    if isinstance(key, Key):
        # '8' would be read back as the integer key 8
        if key.is_string() and string_key(key.value).is_int():
            msg = f"String key {key.value!r} has no PHP literal form"
            raise ValueError(msg)
        return key.value
    if isinstance(key, bool):
        return int(key)
    if isinstance(key, str):
        return string_key(key).value
    if isinstance(key, int):
        return key
    if config.skipkeys:
        return None
    msg = f"keys must be int or str, not {type(key).__name__}"
    raise TypeError(msg)


def _encode_mapping(
    items: Iterable[tuple[Any, Any]], config: EncodeConfig, level: int
) -> str:
    """Encode key/value pairs with explicit ``=>`` keys."""
    entries: list[tuple[int | str, str]] = []
    for key, value in items:
        normalized = _encode_key(key, config)
        if normalized is None:
            continue
        entries.append((normalized, _encode_value(value, config, level + 1)))

    if config.sort_keys:
        entries.sort(key=lambda entry: Key(entry[0]))

    encoded = [f"{_encode_key_literal(key)} => {value}" for key, value in entries]
    return _format_array(encoded, config, level)


def _encode_key_literal(key: int | str) -> str:
    if isinstance(key, int):
        return _encode_number(key)
    return _encode_string(key)


def _encode_list(
    arr: list[Any] | tuple[Any, ...], config: EncodeConfig, level: int
) -> str:
    """Encode sequence with implicit, auto-incremented keys."""
    encoded_items = [_encode_value(item, config, level + 1) for item in arr]
    return _format_array(encoded_items, config, level)


def _format_array(items: list[str], config: EncodeConfig, level: int) -> str:
    """Wraps encoded entries in the configured array syntax."""
    opening, closing = ("[", "]") if config.short_syntax else ("array(", ")")
    if not items:
        return opening + closing

    if config.indent is None:
        return opening + ", ".join(items) + closing

    indent_str = _get_indent_string(config.indent, level)
    inner_indent = _get_indent_string(config.indent, level + 1)

    lines = [opening]
    lines.extend(f"{inner_indent}{item}," for item in items)
    lines.append(f"{indent_str}{closing}")
    return "\n".join(lines)


def _get_indent_string(indent: str | int | None, level: int) -> str:
    """Generate indentation string for given level."""
    if indent is None:
        return ""
    elif isinstance(indent, int):
        return " " * (indent * level)
    else:
        return indent * level


def _encode_php_value(value: Value, config: EncodeConfig, level: int) -> str:
    match value:
        case Null():
            return "null"
        case Bool(flag):
            return "true" if flag else "false"
        case Int(number) | Float(number):
            return _encode_number(number)
        case String(text):
            return _encode_string(text)
        case Array(entries):
            return _encode_mapping(entries.items(), config, level)
    msg = f"Unknown value type {type(value).__name__}"
    raise TypeError(msg)


def _encode_value(obj: Any, config: EncodeConfig, level: int = 0) -> str:  # noqa: PLR0911
    """Encode any PHP-representable value."""
    if obj is None:
        return "null"
    elif obj is True:
        return "true"
    elif obj is False:
        return "false"
    elif isinstance(obj, Value):
        return _encode_php_value(obj, config, level)
    elif isinstance(obj, str):
        return _encode_string(obj)
    elif isinstance(obj, int | float):
        return _encode_number(obj)
    elif isinstance(obj, Mapping):
        return _encode_mapping(obj.items(), config, level)
    elif isinstance(obj, list | tuple):
        return _encode_list(obj, config, level)
    elif config.default is not None:
        return _encode_value(config.default(obj), config, level)
    else:
        msg = f"Object of type {type(obj).__name__} is not PHP serializable"
        raise TypeError(msg)


def encode(obj: Any, config: EncodeConfig | None = None) -> str:
    return _encode_value(obj, config or EncodeConfig())


__all__ = ["encode"]
