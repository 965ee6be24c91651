"""
PHP literal encoding tests.

Validates ``dumps``/``dump`` output for Python data and ``Value`` trees,
formatting options and rejection of unrepresentable values.
"""

import sys
from io import StringIO

import pytest

import php_literal_parser
from php_literal_parser import NULL
from php_literal_parser import Array
from php_literal_parser import Float
from php_literal_parser import Int
from php_literal_parser import Key
from php_literal_parser import String


@pytest.mark.parametrize(
    "obj,expected",
    [
        (None, "null"),
        (True, "true"),
        (False, "false"),
        (0, "0"),
        (-17, "-17"),
        (1.5, "1.5"),
        (1e16, "1e+16"),
        ("", "''"),
        ("it's", "'it\\'s'"),
        ("C:\\path", "'C:\\\\path'"),
        ("line\nbreak", "'line\nbreak'"),
        ([], "[]"),
        ([1, "a"], "[1, 'a']"),
        ({"a": 1, 2: None}, "['a' => 1, 2 => null]"),
        ({"n": [True, {"x": 1.0}]}, "['n' => [true, ['x' => 1.0]]]"),
    ],
)
def test_dumps(obj: object, expected: str) -> None:
    assert php_literal_parser.dumps(obj) == expected


def test_dumps_long_syntax() -> None:
    assert (
        php_literal_parser.dumps({"a": [1, 2]}, short_syntax=False)
        == "array('a' => array(1, 2))"
    )
    assert php_literal_parser.dumps([], short_syntax=False) == "array()"


def test_dumps_indent_like_var_export() -> None:
    """
    Validates one entry per line with trailing commas.
    """
    result = php_literal_parser.dumps(
        {"db": {"host": "h", "port": 1}, "tags": []}, indent=2
    )
    assert result == (
        "[\n"
        "  'db' => [\n"
        "    'host' => 'h',\n"
        "    'port' => 1,\n"
        "  ],\n"
        "  'tags' => [],\n"
        "]"
    )
    assert php_literal_parser.dumps([1], indent="\t", short_syntax=False) == (
        "array(\n\t1,\n)"
    )


def test_dumps_sort_keys() -> None:
    result = php_literal_parser.dumps({"b": 1, 10: 2, "a": 3, 2: 4}, sort_keys=True)
    assert result == "[2 => 4, 10 => 2, 'a' => 3, 'b' => 1]"


def test_dumps_bool_keys_become_ints() -> None:
    assert php_literal_parser.dumps({True: "t", False: "f"}) == "[1 => 't', 0 => 'f']"


def test_dumps_integer_string_keys() -> None:
    """
    Validates string keys are written as the key PHP would read back.
    """
    assert php_literal_parser.dumps({"8": 1, "08": 2}) == "[8 => 1, '08' => 2]"
    assert php_literal_parser.loads(php_literal_parser.dumps({"-3": "x"})) == {-3: "x"}


def test_dumps_rejects_string_key_without_literal_form() -> None:
    with pytest.raises(ValueError, match="has no PHP literal form"):
        php_literal_parser.dumps(Array({Key("8"): Int(1)}))


def test_dumps_rejects_unsupported_keys() -> None:
    with pytest.raises(TypeError, match=r"keys must be int or str, not tuple"):
        php_literal_parser.dumps({"a": 1, (1, 2): 2})


def test_dumps_skipkeys() -> None:
    assert php_literal_parser.dumps({"a": 1, (1, 2): 2}, skipkeys=True) == "['a' => 1]"


def test_dumps_default_hook() -> None:
    assert php_literal_parser.dumps([{3, 1}], default=sorted) == "[[1, 3]]"


def test_module_not_serializable() -> None:
    with pytest.raises(TypeError, match=r"Object of type module is not PHP serializable"):
        php_literal_parser.dumps(sys)


@pytest.mark.parametrize(
    "obj", [float("nan"), float("inf"), -float("inf"), 2**63, -(2**63)]
)
def test_dumps_rejects_out_of_range_numbers(obj: float) -> None:
    with pytest.raises(ValueError):
        php_literal_parser.dumps(obj)


def test_dumps_value_tree() -> None:
    value = Array(
        {
            Key("s"): String("x"),
            Key(3): Int(4),
            Key("f"): Float(0.5),
            Key("n"): NULL,
            Key("a"): Array(),
        }
    )
    assert php_literal_parser.dumps(value) == (
        "['s' => 'x', 3 => 4, 'f' => 0.5, 'n' => null, 'a' => []]"
    )


def test_dumps_then_parse() -> None:
    """
    Validates output is read back as the same tree.
    """
    value = php_literal_parser.parse("array('a' => array(1, 'b' => \"q'\\\\\"), 7 => null)")
    assert php_literal_parser.parse(php_literal_parser.dumps(value)) == value


def test_dump_to_file_object() -> None:
    out = StringIO()
    php_literal_parser.dump({"a": 1}, out)
    assert out.getvalue() == "['a' => 1]"


def test_dump_requires_write() -> None:
    with pytest.raises(TypeError, match="write"):
        php_literal_parser.dump({"a": 1}, "not a file")  # type: ignore[arg-type]


def test_invalid_encode_option() -> None:
    with pytest.raises(TypeError):
        php_literal_parser.dumps(1, short_syntax="yes")
