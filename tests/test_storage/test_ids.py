"""Tests for MonotonicIds."""

from basecamp.storage.ids import MonotonicIds


def test_uses_clock_when_ahead():
    ids = MonotonicIds(clock=lambda: 1_700_000_000_000)
    assert ids.next_id() == 1_700_000_000_000


def test_same_instant_still_unique():
    ids = MonotonicIds(clock=lambda: 1000)
    issued = [ids.next_id() for _ in range(5)]
    assert issued == [1000, 1001, 1002, 1003, 1004]


def test_respects_existing_ids():
    ids = MonotonicIds(clock=lambda: 10)
    assert ids.next_id([5, "42", 7]) == 43


def test_ignores_non_numeric_existing():
    ids = MonotonicIds(clock=lambda: 10)
    assert ids.next_id(["abc", None]) == 10


def test_never_reuses_after_clock_goes_back():
    ticks = iter([500, 100])
    ids = MonotonicIds(clock=lambda: next(ticks))
    first = ids.next_id()
    second = ids.next_id()
    assert second > first
