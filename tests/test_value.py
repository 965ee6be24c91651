"""
Value model tests: keys, indexing, conversions and equality.
"""

from typing import Any

import pytest

import php_literal_parser
from php_literal_parser import NULL
from php_literal_parser import Array
from php_literal_parser import Bool
from php_literal_parser import Float
from php_literal_parser import Int
from php_literal_parser import Key
from php_literal_parser import Null
from php_literal_parser import String
from php_literal_parser import Value
from php_literal_parser import string_key


def test_key_equality_is_variant_strict() -> None:
    assert Key(1) == Key(1)
    assert Key("a") == Key("a")
    assert Key(1) != Key("1")
    assert len({Key(1), Key("1"), Key(1)}) == 2


def test_key_normalizes_bools() -> None:
    assert Key(True) == Key(1)
    assert Key(False).is_int()


@pytest.mark.parametrize("bad", [1.5, None, b"x", (1,)])
def test_key_rejects_other_types(bad: Any) -> None:
    with pytest.raises(TypeError, match="array keys must be int or str"):
        Key(bad)


def test_key_accessors() -> None:
    assert Key(3).into_int() == 3
    assert Key(3).into_string() is None
    assert Key("x").into_string() == "x"
    assert Key("x").into_int() is None
    assert Key("x").is_string()
    assert str(Key(3)) == "3"
    assert repr(Key("x")) == "Key('x')"


def test_key_ordering() -> None:
    """
    Validates integers sort numerically, strings lexically, mixed by text.
    """
    assert sorted([Key(10), Key(2), Key(-1)]) == [Key(-1), Key(2), Key(10)]
    assert sorted([Key("b"), Key("a")]) == [Key("a"), Key("b")]
    assert Key(10) < Key("9")
    assert Key("a") > Key(1)
    assert Key(2) <= Key(2)


def test_key_ordering_ties_put_integers_first() -> None:
    """
    Validates sorting is independent of input order for equal text.
    """
    assert sorted([Key("9"), Key(9)]) == [Key(9), Key("9")]
    assert sorted([Key(9), Key("9")]) == [Key(9), Key("9")]
    assert Key(9) < Key("9")
    assert not Key("9") < Key(9)
    assert Key("9") >= Key(9)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("8", Key(8)),
        ("-8", Key(-8)),
        ("0", Key(0)),
        ("08", Key("08")),
        (" 8", Key(" 8")),
        ("+8", Key("+8")),
        ("-0", Key("-0")),
        ("9223372036854775808", Key("9223372036854775808")),
    ],
)
def test_string_key(text: str, expected: Key) -> None:
    assert string_key(text) == expected


def test_indexing_missing_returns_null() -> None:
    """
    Validates indexing never raises on absent keys or non-arrays.
    """
    value = php_literal_parser.parse("['a' => ['b' => 1]]")
    assert value["a"]["b"] == Int(1)
    assert value["missing"] is NULL
    assert value["a"]["b"]["deeper"] is NULL
    assert Int(5)[0] is NULL
    assert String("abc")["x"] is NULL
    assert NULL["anything"] is NULL


def test_indexing_by_int_str_and_key() -> None:
    value = php_literal_parser.parse("[3 => 'x', 'k' => 'y']")
    assert value[3] == "x"
    assert value[Key(3)] == "x"
    assert value["k"] == "y"
    assert value["3"] is NULL


def test_get_mirrors_dict() -> None:
    value = php_literal_parser.parse("['a' => 1]")
    assert value.get("a") == Int(1)
    assert value.get("b") is None
    assert value.get("b", NULL) is NULL
    assert Int(1).get("a", Bool(True)) == Bool(True)


def test_array_container_protocol() -> None:
    value = php_literal_parser.parse("['a' => 1, 2 => 'b']")
    assert isinstance(value, Array)
    assert len(value) == 2
    assert "a" in value
    assert 2 in value
    assert 1.5 not in value
    assert list(value) == [Key("a"), Key(2)]
    assert list(value.keys()) == [Key("a"), Key(2)]
    assert list(value.values()) == [Int(1), String("b")]
    assert dict(value.items()) == {Key("a"): Int(1), Key(2): String("b")}


def test_predicates_and_converters() -> None:
    assert Bool(True).is_bool() and Bool(True).into_bool() is True
    assert Int(1).is_int() and Int(1).into_int() == 1
    assert Float(1.5).is_float() and Float(1.5).into_float() == 1.5
    assert String("s").is_string() and String("s").into_string() == "s"
    assert NULL.is_null()
    assert Array().is_array() and Array().into_dict() == {}

    assert Int(1).into_string() is None
    assert String("1").into_int() is None
    assert NULL.into_bool() is None
    assert Bool(True).into_dict() is None


def test_float_is_finite() -> None:
    assert Float(1.0).is_finite()
    assert not Float(float("inf")).is_finite()
    assert not Float(float("nan")).is_finite()


def test_equality_with_native_values() -> None:
    """
    Validates scalars equal native values of the same type only.
    """
    assert Int(1) == 1
    assert Int(1) != 1.0
    assert Int(1) != True  # noqa: E712
    assert Bool(True) == True  # noqa: E712
    assert Bool(True) != 1
    assert Float(1.0) == 1.0
    assert Float(1.0) != 1
    assert String("a") == "a"
    assert NULL == None  # noqa: E711
    assert Null() == NULL
    assert Array() != {}


def test_values_are_unhashable() -> None:
    with pytest.raises(TypeError):
        hash(Int(1))


def test_to_python() -> None:
    value = php_literal_parser.parse("[1, 'a' => [true, null, 1.5, 's']]")
    assert value.to_python() == {0: 1, "a": {0: True, 1: None, 2: 1.5, 3: "s"}}


def test_from_python() -> None:
    value = Value.from_python({"a": [1, 2.5], 3: None, True: "t"})
    assert value == Array(
        {
            Key("a"): Array({Key(0): Int(1), Key(1): Float(2.5)}),
            Key(3): NULL,
            Key(1): String("t"),
        }
    )
    existing = Int(4)
    assert Value.from_python(existing) is existing


def test_from_python_applies_integer_string_keys() -> None:
    """
    Validates string keys are coerced the way a PHP array literal would.
    """
    value = Value.from_python({"8": 1, "08": 2, "-3": 3, "x": 4})
    assert isinstance(value, Array)
    assert list(value.keys()) == [Key(8), Key("08"), Key(-3), Key("x")]
    assert php_literal_parser.parse(php_literal_parser.dumps(value)) == value


def test_from_python_rejects_unknown_types() -> None:
    with pytest.raises(TypeError, match="not a PHP value"):
        Value.from_python(object())


def test_str_of_scalars() -> None:
    assert str(String("abc")) == "abc"
    assert str(NULL) == "null"
