"""Tests for frostfin.core.engine – board interaction and win detection."""

from __future__ import annotations

import pytest

from conftest import FakeClock, element, make_puzzle
from frostfin.core.engine import EngineEventKind, PuzzleEngine
from frostfin.core.models import Difficulty, ElementState, ElementType, Position


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def board(clock: FakeClock) -> PuzzleEngine:
    """Fish at (200,100) with ice, mechanism, current nearby and a goal out of reach."""
    puzzle = make_puzzle(
        [
            element("ice", ElementType.ICE_BLOCK, 150, 100, ElementState.FROZEN),
            element("far_ice", ElementType.ICE_BLOCK, 380, 380, ElementState.FROZEN),
            element("fish", ElementType.FISH, 200, 100, ElementState.INACTIVE),
            element("mech", ElementType.MECHANISM, 200, 160, ElementState.INACTIVE),
            element("current", ElementType.CURRENT, 50, 300, ElementState.INACTIVE),
            element("goal", ElementType.GOAL, 300, 300),
        ],
        hints=["first", "second"],
    )
    return PuzzleEngine(puzzle, clock=clock)


def state_of(engine: PuzzleEngine, element_id: str) -> ElementState:
    return engine.puzzle.element(element_id).state


# ---------------------------------------------------------------------------
# activate_element – fish
# ---------------------------------------------------------------------------

class TestActivateFish:
    def test_fish_becomes_active(self, board: PuzzleEngine):
        board.activate_element("fish")
        assert state_of(board, "fish") is ElementState.ACTIVE

    def test_melts_frozen_ice_in_range(self, board: PuzzleEngine):
        board.activate_element("fish")
        assert state_of(board, "ice") is ElementState.MELTED

    def test_ignores_ice_out_of_range(self, board: PuzzleEngine):
        board.activate_element("fish")
        assert state_of(board, "far_ice") is ElementState.FROZEN

    def test_forces_mechanism_active(self, board: PuzzleEngine):
        board.activate_element("fish")
        assert state_of(board, "mech") is ElementState.ACTIVE
        board.activate_element("fish")
        assert state_of(board, "mech") is ElementState.ACTIVE

    def test_radius_is_exclusive(self, clock: FakeClock):
        engine = PuzzleEngine(
            make_puzzle(
                [
                    element("ice", ElementType.ICE_BLOCK, 100, 100, ElementState.FROZEN),
                    element("fish", ElementType.FISH, 200, 100, ElementState.ACTIVE),
                    element("goal", ElementType.GOAL, 300, 300),
                ]
            ),
            clock=clock,
        )
        engine.activate_element("fish")
        assert state_of(engine, "ice") is ElementState.FROZEN

    def test_does_not_touch_current(self, board: PuzzleEngine):
        board.activate_element("fish")
        assert state_of(board, "current") is ElementState.INACTIVE


# ---------------------------------------------------------------------------
# activate_element – other element types
# ---------------------------------------------------------------------------

class TestActivateOthers:
    def test_mechanism_toggles(self, board: PuzzleEngine):
        board.activate_element("mech")
        assert state_of(board, "mech") is ElementState.ACTIVE
        board.activate_element("mech")
        assert state_of(board, "mech") is ElementState.INACTIVE

    def test_current_becomes_active(self, board: PuzzleEngine):
        board.activate_element("current")
        assert state_of(board, "current") is ElementState.ACTIVE

    def test_goal_is_passive(self, board: PuzzleEngine):
        board.activate_element("goal")
        assert state_of(board, "goal") is ElementState.INACTIVE
        assert board.moves == 1

    def test_unknown_element_is_ignored(self, board: PuzzleEngine):
        board.activate_element("nope")
        assert board.moves == 0

    @pytest.mark.parametrize("prior", [ElementState.FROZEN, ElementState.MELTED, ElementState.ACTIVE])
    def test_ice_freezes_below_zero(self, clock: FakeClock, prior: ElementState):
        engine = PuzzleEngine(
            make_puzzle([element("ice", ElementType.ICE_BLOCK, 0, 0, prior)], temperature=-0.5),
            clock=clock,
        )
        engine.activate_element("ice")
        assert state_of(engine, "ice") is ElementState.FROZEN

    @pytest.mark.parametrize("temperature", [0.0, 1.0])
    @pytest.mark.parametrize("prior", [ElementState.FROZEN, ElementState.MELTED])
    def test_ice_melts_at_or_above_zero(self, clock: FakeClock, temperature: float, prior: ElementState):
        engine = PuzzleEngine(
            make_puzzle([element("ice", ElementType.ICE_BLOCK, 0, 0, prior)], temperature=temperature),
            clock=clock,
        )
        engine.activate_element("ice")
        assert state_of(engine, "ice") is ElementState.MELTED

    def test_every_activation_counts_a_move(self, board: PuzzleEngine):
        for element_id in ("fish", "mech", "ice", "current", "goal"):
            board.activate_element(element_id)
        assert board.moves == 5
        assert board.puzzle.current_moves == 5


# ---------------------------------------------------------------------------
# move_element
# ---------------------------------------------------------------------------

class TestMoveElement:
    def test_relocates_and_counts(self, board: PuzzleEngine):
        board.move_element("current", Position(10, 20))
        assert board.puzzle.element("current").position == Position(10, 20)
        assert board.moves == 1

    def test_no_clamping(self, board: PuzzleEngine):
        board.move_element("current", Position(-50, 900))
        assert board.puzzle.element("current").position == Position(-50, 900)

    def test_unknown_element_is_ignored(self, board: PuzzleEngine):
        board.move_element("nope", Position(1, 1))
        assert board.moves == 0


# ---------------------------------------------------------------------------
# Win condition
# ---------------------------------------------------------------------------

class TestWinCondition:
    def test_active_fish_near_goal_completes(self, clock: FakeClock):
        engine = PuzzleEngine(
            make_puzzle(
                [
                    element("goal", ElementType.GOAL, 200, 200),
                    element("fish", ElementType.FISH, 210, 205, ElementState.ACTIVE),
                ]
            ),
            clock=clock,
        )
        assert engine.check_win_condition()
        assert engine.is_completed()
        assert engine.puzzle.is_solved

    def test_inactive_fish_does_not_complete(self, clock: FakeClock):
        engine = PuzzleEngine(
            make_puzzle(
                [
                    element("goal", ElementType.GOAL, 200, 200),
                    element("fish", ElementType.FISH, 210, 205, ElementState.INACTIVE),
                ]
            ),
            clock=clock,
        )
        assert not engine.check_win_condition()
        assert not engine.is_completed()

    def test_no_goals_never_completes(self, clock: FakeClock):
        engine = PuzzleEngine(
            make_puzzle([element("fish", ElementType.FISH, 0, 0, ElementState.ACTIVE)]),
            clock=clock,
        )
        engine.activate_element("fish")
        assert not engine.is_completed()

    def test_every_goal_needs_a_fish(self, clock: FakeClock):
        engine = PuzzleEngine(
            make_puzzle(
                [
                    element("g1", ElementType.GOAL, 100, 100),
                    element("g2", ElementType.GOAL, 300, 300),
                    element("fish", ElementType.FISH, 100, 110, ElementState.ACTIVE),
                ]
            ),
            clock=clock,
        )
        engine.activate_element("fish")
        assert not engine.is_completed()
        engine.move_element("fish", Position(300, 290))
        assert not engine.is_completed()

    def test_move_into_goal_completes(self, board: PuzzleEngine):
        board.activate_element("fish")
        board.move_element("fish", Position(290, 300))
        assert board.is_completed()

    def test_actions_after_completion_are_noops(self, board: PuzzleEngine):
        board.activate_element("fish")
        board.move_element("fish", Position(290, 300))
        moves = board.moves
        board.activate_element("mech")
        board.move_element("fish", Position(0, 0))
        assert board.moves == moves
        assert board.puzzle.element("fish").position == Position(290, 300)

    def test_completion_event_emitted_once(self, board: PuzzleEngine, clock: FakeClock):
        events = []
        board.subscribe(events.append)
        board.activate_element("fish")
        clock.advance(42.0)
        board.record_hint()
        board.move_element("fish", Position(290, 300))
        board.check_win_condition()

        completed = [e for e in events if e.kind is EngineEventKind.COMPLETED]
        assert len(completed) == 1
        event = completed[0].completion
        assert event.moves == 2
        assert event.hints_used == 1
        assert event.elapsed == pytest.approx(42.0)
        assert event.difficulty is Difficulty.EASY
        assert event.max_moves == 10
        assert not event.is_daily

    def test_elapsed_frozen_after_completion(self, board: PuzzleEngine, clock: FakeClock):
        clock.advance(5.0)
        board.activate_element("fish")
        board.move_element("fish", Position(300, 300))
        clock.advance(100.0)
        assert board.elapsed() == pytest.approx(5.0)


# ---------------------------------------------------------------------------
# reset
# ---------------------------------------------------------------------------

class TestReset:
    def test_restores_type_defaults(self, clock: FakeClock):
        engine = PuzzleEngine(
            make_puzzle(
                [
                    element("ice", ElementType.ICE_BLOCK, 0, 0, ElementState.MELTED),
                    element("fish", ElementType.FISH, 300, 300, ElementState.INACTIVE),
                    element("mech", ElementType.MECHANISM, 0, 200, ElementState.ACTIVE),
                    element("current", ElementType.CURRENT, 200, 0, ElementState.INACTIVE),
                    element("goal", ElementType.GOAL, 100, 100, ElementState.COMPLETED),
                ]
            ),
            clock=clock,
        )
        engine.reset()
        assert state_of(engine, "ice") is ElementState.FROZEN
        assert state_of(engine, "fish") is ElementState.ACTIVE
        assert state_of(engine, "mech") is ElementState.INACTIVE
        assert state_of(engine, "current") is ElementState.ACTIVE
        assert state_of(engine, "goal") is ElementState.INACTIVE

    def test_clears_counters_and_completion(self, board: PuzzleEngine, clock: FakeClock):
        board.record_hint()
        board.next_hint()
        board.activate_element("fish")
        board.move_element("fish", Position(300, 300))
        assert board.is_completed()

        clock.advance(30.0)
        board.reset()
        assert not board.is_completed()
        assert not board.puzzle.is_solved
        assert board.moves == 0
        assert board.hints_used == 0
        assert board.hint_index == 0
        assert board.elapsed() == 0.0

    def test_actions_work_again_after_reset(self, board: PuzzleEngine):
        board.activate_element("fish")
        board.move_element("fish", Position(300, 300))
        board.reset()
        board.activate_element("mech")
        assert board.moves == 1


# ---------------------------------------------------------------------------
# Hints and subscriptions
# ---------------------------------------------------------------------------

class TestHints:
    def test_cursor_stops_at_last(self, board: PuzzleEngine):
        assert board.current_hint() == "first"
        assert board.next_hint() == "second"
        assert board.next_hint() == "second"

    def test_no_hints(self, clock: FakeClock):
        engine = PuzzleEngine(make_puzzle([element("g", ElementType.GOAL, 0, 0)]), clock=clock)
        assert not engine.has_hint_available()
        assert engine.current_hint() is None

    def test_record_hint_ignored_after_completion(self, board: PuzzleEngine):
        board.activate_element("fish")
        board.move_element("fish", Position(300, 300))
        board.record_hint()
        assert board.hints_used == 0


class TestSubscribe:
    def test_changed_event_per_action(self, board: PuzzleEngine):
        events = []
        board.subscribe(events.append)
        board.activate_element("mech")
        board.move_element("mech", Position(1, 1))
        assert [e.kind for e in events] == [EngineEventKind.CHANGED, EngineEventKind.CHANGED]

    def test_unsubscribe(self, board: PuzzleEngine):
        events = []
        unsubscribe = board.subscribe(events.append)
        unsubscribe()
        unsubscribe()
        board.activate_element("mech")
        assert events == []
