from __future__ import annotations

from typing import List

import pytest

from frostfin.core.models import (
    Difficulty,
    ElementState,
    ElementType,
    Position,
    Puzzle,
    PuzzleElement,
)
from frostfin.core.persistence import InMemoryGateway


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def element(
    element_id: str,
    element_type: ElementType,
    x: float,
    y: float,
    state: ElementState = ElementState.INACTIVE,
) -> PuzzleElement:
    return PuzzleElement(id=element_id, position=Position(x, y), type=element_type, state=state)


def make_puzzle(
    elements: List[PuzzleElement],
    temperature: float = -5.0,
    difficulty: Difficulty = Difficulty.EASY,
    max_moves: int = 10,
    hints: List[str] | None = None,
    is_daily: bool = False,
) -> Puzzle:
    return Puzzle(
        id="test",
        number=1,
        title="Test",
        description="",
        difficulty=difficulty,
        elements=elements,
        hints=list(hints or []),
        max_moves=max_moves,
        temperature=temperature,
        is_daily=is_daily,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def gateway() -> InMemoryGateway:
    return InMemoryGateway()


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    return app
