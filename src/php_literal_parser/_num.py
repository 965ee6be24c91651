"""Decoders for integer, float and boolean literal tokens."""

from ._errors import IntErrorKind

I64_MIN = -(2**63)
I64_MAX = 2**63 - 1

_RADIX_PREFIXES = {"0x": 16, "0X": 16, "0b": 2, "0B": 2}


class ParseIntError(ValueError):
    def __init__(self, kind: IntErrorKind) -> None:
        self.kind = kind
        super().__init__(kind.value)


def parse_int(literal: str) -> int:
    """
    Parses a PHP integer literal into a signed 64-bit value.

    Handles ``0x`` hexadecimal, ``0b`` binary and leading-zero octal forms
    plus ``_`` digit separators. The magnitude is accumulated with overflow
    checks and the sign applied last, so ``-0x10`` is ``-16``.

    Raises:
        ParseIntError: the digit run is empty, holds a digit outside the
            radix, or does not fit in 64 bits.
    """
    if not literal:
        raise ParseIntError(IntErrorKind.EMPTY)

    sign = 1
    digits = literal
    if digits[0] in "+-":
        sign = -1 if digits[0] == "-" else 1
        digits = digits[1:]

    radix = _RADIX_PREFIXES.get(digits[:2])
    if radix is not None:
        digits = digits[2:]
    elif digits.startswith("0") and len(digits) > 1:
        radix = 8
        digits = digits[1:]
    else:
        radix = 10

    digits = digits.replace("_", "")
    if not digits:
        raise ParseIntError(IntErrorKind.EMPTY)

    result = 0
    for char in digits:
        if not char.isascii():
            raise ParseIntError(IntErrorKind.INVALID_DIGIT)
        try:
            digit = int(char, radix)
        except ValueError:
            raise ParseIntError(IntErrorKind.INVALID_DIGIT) from None
        result = result * radix + digit
        if result > I64_MAX:
            raise ParseIntError(IntErrorKind.OVERFLOW)

    return result * sign


def parse_float(literal: str) -> float:
    """Parses a float literal after stripping ``_`` separators."""
    stripped = literal.replace("_", "")
    # float() would also accept "inf", "nan" and surrounding whitespace
    if not stripped or not all(c in "0123456789.-+eE" for c in stripped):
        raise ValueError(f"invalid float literal: {literal!r}")
    return float(stripped)


def parse_bool(literal: str) -> bool:
    lowered = literal.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise ValueError(f"provided string was not `true` or `false`: {literal!r}")


def is_i64(value: int) -> bool:
    return I64_MIN <= value <= I64_MAX


__all__ = [
    "I64_MAX",
    "I64_MIN",
    "ParseIntError",
    "is_i64",
    "parse_bool",
    "parse_float",
    "parse_int",
]
