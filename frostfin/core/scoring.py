"""Puzzle scoring.

``score`` is the single scoring rule used for ``User.total_score``; coins for a
completion are always ``coin_reward`` (a tenth of the difficulty base).
"""

from __future__ import annotations

from typing import Dict

from frostfin.core.models import Difficulty

BASE_SCORES: Dict[Difficulty, int] = {
    Difficulty.EASY: 100,
    Difficulty.MEDIUM: 200,
    Difficulty.HARD: 400,
    Difficulty.EXPERT: 800,
}


def base_score(difficulty: Difficulty) -> int:
    return BASE_SCORES[difficulty]


def efficiency_bonus(base: int, moves_used: int, max_moves: int) -> int:
    """Half the base at or under 50% of the move budget, a quarter at or under 75%."""
    if max_moves <= 0:
        return 0
    # Integer comparisons for ratio <= 0.5 / <= 0.75.
    if moves_used * 2 <= max_moves:
        return base // 2
    if moves_used * 4 <= max_moves * 3:
        return base // 4
    return 0


def time_bonus(time_spent: float) -> int:
    if time_spent < 60:
        return 100
    if time_spent < 120:
        return 50
    if time_spent < 300:
        return 25
    return 0


def hint_penalty(base: int, hints_used: int) -> int:
    """Ten percent of the base per hint. Not capped."""
    return base * max(0, hints_used) // 10


def score(
    difficulty: Difficulty,
    moves_used: int,
    max_moves: int,
    time_spent: float,
    hints_used: int,
) -> int:
    base = base_score(difficulty)
    total = (
        base
        + efficiency_bonus(base, moves_used, max_moves)
        + time_bonus(time_spent)
        - hint_penalty(base, hints_used)
    )
    return max(0, total)


def coin_reward(difficulty: Difficulty) -> int:
    return base_score(difficulty) // 10
