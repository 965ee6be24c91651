"""
Test data generators for PHP literal parsing benchmarks.

Each generator builds plain Python data once and renders it twice, as a
PHP literal and as the equivalent JSON document, so both parsers see the
same shape:
- Different sizes (small/large)
- Different complexity levels (flat/nested/mixed)
- String-heavy content with escape sequences
"""

import json
import random
import string
from dataclasses import dataclass
from typing import Any

import php_literal_parser

# Constants for random data generation
_INT_TYPE = 1
_FLOAT_TYPE = 2
_STRING_TYPE = 3
_BOOL_TYPE = 4
_NULL_TYPE = 5
_ESCAPE_PROBABILITY = 0.3


@dataclass(frozen=True)
class BenchmarkDocument:
    """One payload rendered as both a PHP literal and JSON."""

    php: str
    json: str


def generate_test_data(data_type: str, *, long_syntax: bool = False) -> BenchmarkDocument:
    """Generates a benchmark document of the specified type."""
    generators = {
        "small_config": _generate_small_config,
        "large_config": _generate_large_config,
        "mixed_array": _generate_mixed_array,
        "nested_structure": _generate_nested_structure,
        "string_heavy": _generate_string_heavy,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    data = generators[data_type]()
    return BenchmarkDocument(
        php=php_literal_parser.dumps(data, short_syntax=not long_syntax),
        json=json.dumps(data),
    )


def _generate_small_config() -> dict[str, Any]:
    """Generates a small settings array like a typical config.php."""
    return {
        "debug": False,
        "name": "Acme Shop",
        "timezone": "Europe/Berlin",
        "cache_ttl": 3600,
        "ratio": 0.75,
        "db": {"host": "localhost", "port": 3306, "user": "shop", "pass": None},
    }


def _generate_large_config() -> dict[str, Any]:
    """Generates a large export (> 10KB) with many fields."""
    return {
        "site_id": random.randint(1000000, 9999999),
        "modules": {
            f"module_{i}": {
                "enabled": random.choice([True, False]),
                "weight": random.randint(-50, 50),
                "label": _random_string(12),
                "options": {
                    "limit": random.randint(1, 500),
                    "factor": round(random.uniform(0.0, 10.0), 3),
                    "mode": random.choice(["auto", "manual", "off"]),
                },
            }
            for i in range(60)
        },
        "routes": [
            {
                "path": f"/{_random_string(6)}/{_random_string(8)}",
                "methods": random.sample(["GET", "POST", "PUT", "DELETE"], 2),
                "handler": f"App\\Controller\\{_random_string(10)}::index",
            }
            for _ in range(80)
        ],
    }


def _generate_mixed_array() -> list[Any]:
    """Generates a large list with mixed data types."""
    array: list[Any] = []

    for i in range(200):
        choice = random.randint(1, 6)
        if choice == _INT_TYPE:
            array.append(random.randint(-1000, 1000))
        elif choice == _FLOAT_TYPE:
            array.append(round(random.uniform(-100.0, 100.0), 3))
        elif choice == _STRING_TYPE:
            array.append(_random_string(random.randint(5, 30)))
        elif choice == _BOOL_TYPE:
            array.append(random.choice([True, False]))
        elif choice == _NULL_TYPE:
            array.append(None)
        else:
            array.append(
                {
                    "index": i,
                    "value": _random_string(10),
                    "score": round(random.uniform(0, 100), 2),
                }
            )

    return array


def _generate_nested_structure() -> dict[str, Any]:
    """Generates a deeply nested array structure."""

    def create_nested(depth: int) -> dict[str, Any]:
        if depth <= 0:
            return {"value": _random_string(10)}

        return {
            "level": depth,
            "data": _random_string(15),
            "items": [create_nested(depth - 1) for _ in range(3)],
            "nested": create_nested(depth - 1),
        }

    return create_nested(7)


def _generate_string_heavy() -> dict[str, Any]:
    """Generates strings full of quotes and backslashes that need escaping."""

    def create_escaped_string() -> str:
        chars = []
        for _ in range(50):
            if random.random() < _ESCAPE_PROBABILITY:
                chars.append(random.choice(["'", "\\", '"', "\n", "\t", "$"]))
            else:
                chars.append(
                    random.choice(string.ascii_letters + string.digits + " ")
                )
        return "".join(chars)

    return {
        "strings": [create_escaped_string() for _ in range(100)],
        "paths": {
            f"key_{i}": f"C:\\Users\\{_random_string(8)}\\Documents\\file_{i}.txt"
            for i in range(20)
        },
    }


def _random_string(length: int) -> str:
    """Generates a random string of specified length."""
    return "".join(random.choices(string.ascii_letters, k=length))
