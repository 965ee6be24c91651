"""
Parser for PHP literal syntax.

Reads the subset of PHP produced by ``var_export`` and hand-written
configuration files (booleans, integers, floats, strings, ``null`` and
nested ``array(...)`` / ``[...]`` arrays) into a ``Value`` tree, plain
Python data, or typed Python objects through a visitor-driven walker.
"""

import logging
from typing import IO
from typing import Any

from ._config import DEFAULT_MAX_DEPTH
from ._config import EncodeConfig
from ._config import ParseConfig
from ._de import Deserializer
from ._de import EnumAccess
from ._de import LiteralDeserializer
from ._de import MapAccess
from ._de import SeqAccess
from ._de import VariantAccess
from ._de import Visitor
from ._de import deserialize_value
from ._de import from_str as _walk
from ._de import ignore
from ._diagnostics import line_col
from ._diagnostics import render_error
from ._encoder import encode
from ._errors import ErrorKind
from ._errors import IntErrorKind
from ._errors import ParseError
from ._errors import Span
from ._lexer import Lexer
from ._lexer import Token
from ._lexer import TokenKind
from ._parser import Parser
from ._parser import parse as _parse
from ._profile import HotPathStats
from ._profile import clear_hot_path_stats
from ._profile import format_hot_path_stats
from ._profile import get_hot_path_stats
from ._typed import PythonVisitor
from ._typed import deserialize_as
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

__version__ = "0.1.0"

logger = logging.getLogger(__name__)


def parse(source: str, **kwargs: Any) -> Value:
    """
    Parses one PHP literal into a ``Value`` tree.

    Raises:
        ParseError: on the first lexical, syntactic or decoding failure.
    """
    if not isinstance(source, str):
        raise TypeError(f"the PHP literal must be str, not {type(source).__name__}")

    config = ParseConfig(**kwargs)
    logger.debug("Parsing %d characters", len(source))
    return _parse(source, config)


def deserialize_into(source: str, target: Any, **kwargs: Any) -> Any:
    """
    Deserializes ``source`` directly into ``target``.

    ``target`` is a type hint (``list[int]``, a dataclass, an ``Enum``...)
    or a ``Visitor`` instance. No intermediate ``Value`` tree is built.
    """
    if not isinstance(source, str):
        raise TypeError(f"the PHP literal must be str, not {type(source).__name__}")

    config = ParseConfig(**kwargs)
    logger.debug("Deserializing %d characters into %r", len(source), target)
    return _walk(source, lambda de: deserialize_as(de, target), config)


def from_str(source: str, target: Any = Value, **kwargs: Any) -> Any:
    """Deserializes ``source`` into ``target``, a ``Value`` tree by default."""
    return deserialize_into(source, target, **kwargs)


def _to_python(value: Value, config: ParseConfig) -> Any:
    if not isinstance(value, Array):
        return value.to_python()
    pairs = [(key.value, _to_python(item, config)) for key, item in value.items()]
    if config.array_hook is not None:
        return config.array_hook(pairs)
    return dict(pairs)


def loads(s: str, **kwargs: Any) -> Any:
    """
    Parses a PHP literal into plain Python objects.

    Arrays become ``dict`` keyed by ``int``/``str`` unless ``array_hook``
    is given, in which case it receives each array's ``(key, value)`` pairs.
    """
    if not isinstance(s, str):
        raise TypeError(f"the PHP literal must be str, not {type(s).__name__}")

    config = ParseConfig(**kwargs)
    logger.debug("Parsing %d characters into plain Python", len(s))
    return _to_python(_parse(s, config), config)


def load(fp: IO[str], **kwargs: Any) -> Any:
    """Parses a PHP literal from a file-like object."""
    if not hasattr(fp, "read"):
        raise TypeError("fp must have a read() method")

    return loads(fp.read(), **kwargs)


def dumps(obj: Any, **kwargs: Any) -> str:
    """
    Serializes Python objects or ``Value`` trees to PHP literal syntax.

    Uses immutable configuration to ensure consistent encoding behavior.
    """
    config = EncodeConfig(**kwargs)
    return encode(obj, config)


def dump(obj: Any, fp: IO[str], **kwargs: Any) -> None:
    """Serializes Python objects to a file-like object."""
    if not hasattr(fp, "write"):
        raise TypeError("fp must have a write() method")

    fp.write(dumps(obj, **kwargs))


__all__ = [
    "DEFAULT_MAX_DEPTH",
    "NULL",
    "Array",
    "Bool",
    "Deserializer",
    "EncodeConfig",
    "EnumAccess",
    "ErrorKind",
    "Float",
    "HotPathStats",
    "Int",
    "IntErrorKind",
    "Key",
    "Lexer",
    "LiteralDeserializer",
    "MapAccess",
    "Null",
    "ParseConfig",
    "ParseError",
    "Parser",
    "PythonVisitor",
    "SeqAccess",
    "Span",
    "String",
    "Token",
    "TokenKind",
    "Value",
    "VariantAccess",
    "Visitor",
    "clear_hot_path_stats",
    "deserialize_as",
    "deserialize_into",
    "deserialize_value",
    "dump",
    "dumps",
    "format_hot_path_stats",
    "from_str",
    "get_hot_path_stats",
    "ignore",
    "line_col",
    "load",
    "loads",
    "parse",
    "render_error",
    "string_key",
]
