"""
Pytest configuration and shared fixtures for php_literal_parser tests.

Provides immutable test case containers plus literal documents shaped
like real ``var_export`` output and hand-written config files.
"""

from dataclasses import dataclass
from typing import Any

import pytest

from php_literal_parser import ErrorKind


@dataclass(frozen=True)
class LiteralTestCase:
    """
    Immutable container for PHP literal test case data.

    ``expected_output`` is the plain Python result of ``loads``;
    ``error_kind`` is set for inputs that must fail.
    """

    description: str
    input_data: str
    expected_output: Any = None
    error_kind: ErrorKind | None = None


@pytest.fixture
def basic_literal_values() -> list[LiteralTestCase]:
    """
    Provides scalar and small array cases covering every value kind.
    """
    return [
        LiteralTestCase("null", "null", None),
        LiteralTestCase("upper case null", "NULL", None),
        LiteralTestCase("true", "true", True),
        LiteralTestCase("mixed case true", "True", True),
        LiteralTestCase("upper case false", "FALSE", False),
        LiteralTestCase("integer", "42", 42),
        LiteralTestCase("negative integer", "-17", -17),
        LiteralTestCase("float", "3.14", 3.14),
        LiteralTestCase("empty single quoted", "''", ""),
        LiteralTestCase("double quoted", '"hello"', "hello"),
        LiteralTestCase("empty long array", "array()", {}),
        LiteralTestCase("empty short array", "[]", {}),
        LiteralTestCase("list", "[1, 2, 3]", {0: 1, 1: 2, 2: 3}),
        LiteralTestCase("map", "['key' => 'value']", {"key": "value"}),
    ]


@pytest.fixture
def literal_fail_cases() -> list[LiteralTestCase]:
    """
    Provides malformed literals with the error kind each must raise.
    """
    return [
        LiteralTestCase("empty input", "", error_kind=ErrorKind.UNEXPECTED_TOKEN),
        LiteralTestCase(
            "unclosed array", "[1, 2", error_kind=ErrorKind.UNEXPECTED_TOKEN
        ),
        LiteralTestCase(
            "missing comma", "[1 2]", error_kind=ErrorKind.UNEXPECTED_TOKEN
        ),
        LiteralTestCase(
            "leading comma", "[,]", error_kind=ErrorKind.UNEXPECTED_TOKEN
        ),
        LiteralTestCase(
            "double comma", "[1,,]", error_kind=ErrorKind.UNEXPECTED_TOKEN
        ),
        LiteralTestCase(
            "mismatched close", "array(1]", error_kind=ErrorKind.UNEXPECTED_TOKEN
        ),
        LiteralTestCase(
            "array keyword without parenthesis",
            "array[1]",
            error_kind=ErrorKind.UNEXPECTED_TOKEN,
        ),
        LiteralTestCase(
            "bare word", "foo", error_kind=ErrorKind.UNEXPECTED_TOKEN
        ),
        LiteralTestCase(
            "unterminated string",
            "'unterminated",
            error_kind=ErrorKind.UNEXPECTED_TOKEN,
        ),
        LiteralTestCase(
            "unterminated block comment",
            "/* open",
            error_kind=ErrorKind.UNEXPECTED_TOKEN,
        ),
        LiteralTestCase(
            "missing value after arrow",
            "['a' => ]",
            error_kind=ErrorKind.UNEXPECTED_TOKEN,
        ),
        LiteralTestCase(
            "two values", "1 2", error_kind=ErrorKind.TRAILING_CHARACTERS
        ),
        LiteralTestCase(
            "two semicolons", "[1];;", error_kind=ErrorKind.TRAILING_CHARACTERS
        ),
        LiteralTestCase(
            "array as key", "[[1] => 2]", error_kind=ErrorKind.INVALID_ARRAY_KEY
        ),
        LiteralTestCase(
            "nested array used as key",
            '["k" => [1, 2] => 3]',
            error_kind=ErrorKind.INVALID_ARRAY_KEY,
        ),
        LiteralTestCase(
            "infinite float key",
            "[1e999 => 1]",
            error_kind=ErrorKind.INVALID_ARRAY_KEY,
        ),
        LiteralTestCase(
            "integer overflow",
            "9223372036854775808",
            error_kind=ErrorKind.INVALID_INT_LITERAL,
        ),
        LiteralTestCase(
            "surrogate escape",
            '"\\u{D800}"',
            error_kind=ErrorKind.INVALID_STRING_LITERAL,
        ),
        LiteralTestCase(
            "escape beyond unicode",
            '"\\u{110000}"',
            error_kind=ErrorKind.INVALID_STRING_LITERAL,
        ),
        LiteralTestCase(
            "unterminated unicode escape",
            '"\\u{41"',
            error_kind=ErrorKind.INVALID_STRING_LITERAL,
        ),
    ]


@pytest.fixture
def var_export_document() -> str:
    """
    Provides a config file as PHP's ``var_export`` writes it.
    """
    return """array (
  'debug' => false,
  'name' => 'Acme Shop',
  'db' =>
  array (
    'host' => 'localhost',
    'port' => 3306,
    'options' => NULL,
  ),
  'ratios' =>
  array (
    0 => 0.5,
    1 => 1.25,
  ),
  'motd' => 'It\\'s a \\\\ test',
);
"""
