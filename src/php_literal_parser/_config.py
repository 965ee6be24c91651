"""Immutable parse and encode settings."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

ArrayHook = Callable[[list[tuple[int | str, Any]]], Any] | None

DEFAULT_MAX_DEPTH = 128


@dataclass(frozen=True)
class ParseConfig:
    """
    Configures parsing behavior with immutable settings.

    ``max_depth`` bounds array nesting so adversarial input fails with a
    ``ParseError`` instead of exhausting the interpreter stack.
    ``array_hook`` is only consulted by ``loads``.
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    allow_trailing_semicolon: bool = True
    array_hook: ArrayHook = None

    def __post_init__(self) -> None:
        if not isinstance(self.max_depth, int) or isinstance(self.max_depth, bool):
            raise TypeError("max_depth must be an integer")
        if self.max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        if not isinstance(self.allow_trailing_semicolon, bool):
            raise TypeError("allow_trailing_semicolon must be a boolean")
        if self.array_hook is not None and not callable(self.array_hook):
            raise TypeError("array_hook must be callable")


@dataclass(frozen=True)
class EncodeConfig:
    """
    Configures PHP literal output with immutable settings.

    ``short_syntax`` selects ``[...]`` over ``array(...)``; ``indent``
    switches to one entry per line like ``var_export``.
    """

    short_syntax: bool = True
    indent: str | int | None = None
    sort_keys: bool = False
    skipkeys: bool = False
    default: Callable[[Any], Any] | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.short_syntax, bool):
            raise TypeError("short_syntax must be a boolean")
        if not isinstance(self.sort_keys, bool):
            raise TypeError("sort_keys must be a boolean")
        if not isinstance(self.skipkeys, bool):
            raise TypeError("skipkeys must be a boolean")


__all__ = ["DEFAULT_MAX_DEPTH", "EncodeConfig", "ParseConfig"]
