import time
from collections.abc import Callable, Iterable


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class MonotonicIds:
    """Numeric ids that look like epoch milliseconds but never repeat.

    Each id is ``max(now_ms, highest_seen + 1)``. Callers serialize access
    (the stores call ``next_id`` while holding their write lock), so two
    records created within the same millisecond still get distinct ids.
    """

    def __init__(self, clock: Callable[[], int] = _now_ms) -> None:
        self._clock = clock
        self._last = 0

    def next_id(self, existing: Iterable[object] = ()) -> int:
        floor = max((_as_int(value) for value in existing), default=0)
        candidate = max(self._clock(), self._last + 1, floor + 1)
        self._last = candidate
        return candidate


def _as_int(value: object) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0
