"""
Hot-path profiling for the tokenizer and parser.

Enabled by setting ``PHP_LITERAL_PROFILE`` in the environment before
import; otherwise ``ProfileContext`` is a no-op and the stats accessors
return nothing.
"""

import os
import time
from collections import defaultdict
from dataclasses import dataclass
from typing import Any

PROFILE_HOT_PATHS = __debug__ and "PHP_LITERAL_PROFILE" in os.environ


@dataclass
class HotPathStats:
    """Timings collected for one profiled section."""

    section: str
    calls: int = 0
    total_ns: int = 0
    max_ns: int = 0
    chars: int = 0

    def record(self, duration_ns: int, chars: int = 0) -> None:
        self.calls += 1
        self.total_ns += duration_ns
        self.max_ns = max(self.max_ns, duration_ns)
        self.chars += chars

    @property
    def mean_ns(self) -> float:
        return self.total_ns / self.calls if self.calls else 0.0

    @property
    def chars_per_second(self) -> float:
        if not self.total_ns:
            return 0.0
        return self.chars * 1_000_000_000 / self.total_ns


def format_hot_path_stats(stats: dict[str, HotPathStats]) -> str:
    """Renders stats as a table, slowest section first."""
    rows = sorted(stats.values(), key=lambda s: s.total_ns, reverse=True)
    lines = [f"{'section':<20} {'calls':>8} {'total ms':>10} {'mean us':>10}"]
    for s in rows:
        lines.append(
            f"{s.section:<20} {s.calls:>8} "
            f"{s.total_ns / 1e6:>10.3f} {s.mean_ns / 1e3:>10.3f}"
        )
    return "\n".join(lines)


if PROFILE_HOT_PATHS:
    _hot_path_stats: defaultdict[str, HotPathStats] = defaultdict(
        lambda: HotPathStats("")
    )

    class ProfileContext:
        """Times the enclosed block under ``section``."""

        def __init__(self, section: str, chars: int = 0):
            self.section = section
            self.chars = chars
            self.start_ns = 0

        def __enter__(self) -> "ProfileContext":
            self.start_ns = time.perf_counter_ns()
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            stats = _hot_path_stats[self.section]
            stats.section = self.section
            stats.record(time.perf_counter_ns() - self.start_ns, self.chars)

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        return dict(_hot_path_stats)

    def clear_hot_path_stats() -> None:
        _hot_path_stats.clear()

else:

    class ProfileContext:  # type: ignore[no-redef]
        def __init__(self, section: str, chars: int = 0) -> None:
            pass

        def __enter__(self) -> "ProfileContext":
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            pass

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        return {}

    def clear_hot_path_stats() -> None:
        pass


__all__ = [
    "PROFILE_HOT_PATHS",
    "HotPathStats",
    "ProfileContext",
    "clear_hot_path_stats",
    "format_hot_path_stats",
    "get_hot_path_stats",
]
