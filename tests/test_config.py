"""
Configuration validation and profiling helper tests.
"""

import dataclasses

import pytest

import php_literal_parser
from php_literal_parser import EncodeConfig
from php_literal_parser import HotPathStats
from php_literal_parser import ParseConfig
from php_literal_parser import format_hot_path_stats
from php_literal_parser._profile import ProfileContext


def test_parse_config_defaults() -> None:
    config = ParseConfig()
    assert config.max_depth == php_literal_parser.DEFAULT_MAX_DEPTH == 128
    assert config.allow_trailing_semicolon is True
    assert config.array_hook is None


def test_configs_are_frozen() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        ParseConfig().max_depth = 3  # type: ignore[misc]
    with pytest.raises(dataclasses.FrozenInstanceError):
        EncodeConfig().indent = 2  # type: ignore[misc]


@pytest.mark.parametrize(
    "kwargs,error",
    [
        ({"max_depth": "10"}, TypeError),
        ({"max_depth": True}, TypeError),
        ({"max_depth": 0}, ValueError),
        ({"allow_trailing_semicolon": 1}, TypeError),
        ({"array_hook": "dict"}, TypeError),
    ],
)
def test_parse_config_validation(kwargs: dict[str, object], error: type) -> None:
    with pytest.raises(error):
        ParseConfig(**kwargs)  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "kwargs", [{"short_syntax": None}, {"sort_keys": "yes"}, {"skipkeys": 0}]
)
def test_encode_config_validation(kwargs: dict[str, object]) -> None:
    with pytest.raises(TypeError):
        EncodeConfig(**kwargs)  # type: ignore[arg-type]


def test_unknown_option_rejected() -> None:
    with pytest.raises(TypeError):
        php_literal_parser.parse("1", strict=True)


def test_hot_path_stats_record() -> None:
    stats = HotPathStats("scan_string")
    stats.record(2_000, chars=10)
    stats.record(4_000, chars=30)

    assert stats.calls == 2
    assert stats.total_ns == 6_000
    assert stats.max_ns == 4_000
    assert stats.mean_ns == 3_000
    assert stats.chars_per_second == 40 * 1_000_000_000 / 6_000


def test_empty_hot_path_stats() -> None:
    stats = HotPathStats("idle")
    assert stats.mean_ns == 0.0
    assert stats.chars_per_second == 0.0


def test_format_hot_path_stats_slowest_first() -> None:
    fast = HotPathStats("fast", calls=1, total_ns=1_000_000)
    slow = HotPathStats("slow", calls=2, total_ns=5_000_000)

    lines = format_hot_path_stats({"fast": fast, "slow": slow}).splitlines()
    assert lines[0].split() == ["section", "calls", "total", "ms", "mean", "us"]
    assert lines[1].split() == ["slow", "2", "5.000", "2500.000"]
    assert lines[2].split() == ["fast", "1", "1.000", "1000.000"]


def test_profile_context_is_transparent() -> None:
    """
    Validates profiling never changes results, enabled or not.
    """
    with ProfileContext("outer", 3) as context:
        value = php_literal_parser.parse("[1, 2]")
    assert context is not None
    assert value == php_literal_parser.parse("array(1, 2)")

    for stats in php_literal_parser.get_hot_path_stats().values():
        assert stats.calls >= 1
    php_literal_parser.clear_hot_path_stats()
