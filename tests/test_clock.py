"""Tests for frostfin.ui.clock – the elapsed-time ticker."""

from __future__ import annotations

import pytest

from conftest import FakeClock
from frostfin.core.constants import TICK_INTERVAL_MS
from frostfin.ui.clock import PuzzleClock


@pytest.fixture()
def puzzle_clock(qapp, clock: FakeClock) -> PuzzleClock:
    c = PuzzleClock(now=clock)
    yield c
    c.stop()


class TestPuzzleClock:
    def test_initial_state(self, puzzle_clock: PuzzleClock):
        assert puzzle_clock.elapsed == 0.0
        assert not puzzle_clock.is_running()
        assert puzzle_clock.formatted_time() == "00:00"

    def test_tick_interval(self, puzzle_clock: PuzzleClock):
        assert puzzle_clock._timer.interval() == TICK_INTERVAL_MS

    def test_tick_publishes_elapsed(self, puzzle_clock: PuzzleClock, clock: FakeClock):
        seen = []
        puzzle_clock.elapsed_changed.connect(seen.append)
        puzzle_clock.start()
        assert puzzle_clock.is_running()
        clock.advance(75.4)
        puzzle_clock._on_tick()
        assert seen == [pytest.approx(75.4)]
        assert puzzle_clock.formatted_time() == "01:15"

    def test_tick_before_start_is_ignored(self, puzzle_clock: PuzzleClock, clock: FakeClock):
        clock.advance(10)
        puzzle_clock._on_tick()
        assert puzzle_clock.elapsed == 0.0

    def test_stop_keeps_value(self, puzzle_clock: PuzzleClock, clock: FakeClock):
        puzzle_clock.start()
        clock.advance(3)
        puzzle_clock._on_tick()
        puzzle_clock.stop()
        assert not puzzle_clock.is_running()
        assert puzzle_clock.elapsed == pytest.approx(3)

    def test_reset(self, puzzle_clock: PuzzleClock, clock: FakeClock):
        seen = []
        puzzle_clock.start()
        clock.advance(3)
        puzzle_clock._on_tick()
        puzzle_clock.elapsed_changed.connect(seen.append)
        puzzle_clock.reset()
        assert puzzle_clock.elapsed == 0.0
        assert seen == [0.0]
        assert not puzzle_clock.is_running()
