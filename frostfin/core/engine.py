from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from frostfin.core.constants import FISH_EFFECT_RADIUS, GOAL_REACH_RADIUS
from frostfin.core.models import (
    Difficulty,
    ElementState,
    ElementType,
    Position,
    Puzzle,
    PuzzleElement,
)

logger = logging.getLogger(__name__)

# State an element returns to on reset, regardless of how the puzzle was loaded.
RESET_STATES = {
    ElementType.ICE_BLOCK: ElementState.FROZEN,
    ElementType.FISH: ElementState.ACTIVE,
    ElementType.MECHANISM: ElementState.INACTIVE,
    ElementType.CURRENT: ElementState.ACTIVE,
    ElementType.GOAL: ElementState.INACTIVE,
}


@dataclass(frozen=True)
class CompletionEvent:
    """Emitted once when a puzzle transitions to completed."""

    puzzle_id: str
    difficulty: Difficulty
    moves: int
    max_moves: int
    hints_used: int
    elapsed: float
    is_daily: bool


class EngineEventKind(str, Enum):
    CHANGED = "changed"
    COMPLETED = "completed"


@dataclass(frozen=True)
class EngineEvent:
    kind: EngineEventKind
    puzzle_id: str
    completion: Optional[CompletionEvent] = None


Listener = Callable[[EngineEvent], None]


class PuzzleEngine:
    """Mutable board for one play session.

    The engine owns the ``Puzzle`` it is given. Every player action bumps the
    move counter and re-checks the win condition; once the puzzle is
    completed all actions are ignored until ``reset``.
    """

    def __init__(self, puzzle: Puzzle, clock: Callable[[], float] = time.monotonic) -> None:
        self._puzzle = puzzle
        self._clock = clock
        self._start_time = clock()
        self._finished_elapsed: Optional[float] = None
        self._completed = puzzle.is_solved
        self._hints_used = 0
        self._hint_index = 0
        self._listeners: List[Listener] = []

    @property
    def puzzle(self) -> Puzzle:
        return self._puzzle

    @property
    def moves(self) -> int:
        return self._puzzle.current_moves

    @property
    def hints_used(self) -> int:
        return self._hints_used

    @property
    def hint_index(self) -> int:
        return self._hint_index

    def is_completed(self) -> bool:
        return self._completed

    def elapsed(self) -> float:
        """Seconds since start or last reset; frozen once the puzzle is completed."""
        if self._finished_elapsed is not None:
            return self._finished_elapsed
        return max(0.0, self._clock() - self._start_time)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for engine events; returns a function that unregisters it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ------------------------------------------------------------------
    # Player actions
    # ------------------------------------------------------------------

    def activate_element(self, element_id: str) -> None:
        if self._completed:
            return
        element = self._puzzle.element(element_id)
        if element is None:
            logger.debug("activate: unknown element %s", element_id)
            return

        if element.type is ElementType.FISH:
            self._activate_fish(element)
        elif element.type is ElementType.MECHANISM:
            element.state = (
                ElementState.INACTIVE if element.state is ElementState.ACTIVE else ElementState.ACTIVE
            )
        elif element.type is ElementType.ICE_BLOCK:
            # Direct taps follow the water temperature, not the fish.
            element.state = ElementState.FROZEN if self._puzzle.temperature < 0 else ElementState.MELTED
        elif element.type is ElementType.CURRENT:
            element.state = ElementState.ACTIVE

        self._after_action(f"activate {element.type.value} {element_id}")

    def move_element(self, element_id: str, position: Position) -> None:
        """Relocate an element. Clamping to the board is left to the caller."""
        if self._completed:
            return
        element = self._puzzle.element(element_id)
        if element is None:
            logger.debug("move: unknown element %s", element_id)
            return
        element.position = position
        self._after_action(f"move {element_id} to ({position.x:.1f}, {position.y:.1f})")

    def reset(self) -> None:
        self._puzzle.current_moves = 0
        self._puzzle.is_solved = False
        self._completed = False
        self._hints_used = 0
        self._hint_index = 0
        self._start_time = self._clock()
        self._finished_elapsed = None
        for element in self._puzzle.elements:
            element.state = RESET_STATES[element.type]
        self._emit(EngineEvent(EngineEventKind.CHANGED, self._puzzle.id))

    # ------------------------------------------------------------------
    # Hints
    # ------------------------------------------------------------------

    def has_hint_available(self) -> bool:
        return self._hint_index < len(self._puzzle.hints)

    def current_hint(self) -> Optional[str]:
        if not self.has_hint_available():
            return None
        return self._puzzle.hints[self._hint_index]

    def next_hint(self) -> Optional[str]:
        """Advance the hint cursor, stopping on the last hint."""
        if self._hint_index < len(self._puzzle.hints) - 1:
            self._hint_index += 1
        return self.current_hint()

    def record_hint(self) -> None:
        """Count a revealed hint against the score. Ignored once completed."""
        if self._completed:
            return
        self._hints_used += 1
        self._emit(EngineEvent(EngineEventKind.CHANGED, self._puzzle.id))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _activate_fish(self, fish: PuzzleElement) -> None:
        # Every fish both melts nearby ice and triggers nearby mechanisms,
        # whatever its type.
        fish.state = ElementState.ACTIVE
        for other in self._puzzle.elements:
            if other is fish:
                continue
            if fish.position.distance_to(other.position) >= FISH_EFFECT_RADIUS:
                continue
            if other.type is ElementType.ICE_BLOCK and other.state is ElementState.FROZEN:
                other.state = ElementState.MELTED
            elif other.type is ElementType.MECHANISM:
                other.state = ElementState.ACTIVE

    def _after_action(self, description: str) -> None:
        self._puzzle.current_moves += 1
        logger.debug("%s: %s (move %d)", self._puzzle.id, description, self._puzzle.current_moves)
        self._emit(EngineEvent(EngineEventKind.CHANGED, self._puzzle.id))
        self.check_win_condition()

    def _goal_reached(self, goal: PuzzleElement) -> bool:
        return any(
            e.type is ElementType.FISH
            and e.state is ElementState.ACTIVE
            and e.position.distance_to(goal.position) < GOAL_REACH_RADIUS
            for e in self._puzzle.elements
        )

    def check_win_condition(self) -> bool:
        """Complete the puzzle if every goal has an active fish in reach."""
        if self._completed:
            return True
        goals = self._puzzle.elements_of(ElementType.GOAL)
        if not goals or not all(self._goal_reached(g) for g in goals):
            return False

        self._completed = True
        self._puzzle.is_solved = True
        self._finished_elapsed = max(0.0, self._clock() - self._start_time)
        event = CompletionEvent(
            puzzle_id=self._puzzle.id,
            difficulty=self._puzzle.difficulty,
            moves=self._puzzle.current_moves,
            max_moves=self._puzzle.max_moves,
            hints_used=self._hints_used,
            elapsed=self._finished_elapsed,
            is_daily=self._puzzle.is_daily,
        )
        logger.info(
            "Puzzle %s completed in %d moves, %.1fs, %d hints",
            self._puzzle.id,
            event.moves,
            event.elapsed,
            event.hints_used,
        )
        self._emit(EngineEvent(EngineEventKind.COMPLETED, self._puzzle.id, completion=event))
        return True

    def _emit(self, event: EngineEvent) -> None:
        for listener in list(self._listeners):
            listener(event)
