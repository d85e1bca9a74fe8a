"""Achievement identifiers, their unlock predicates and the default set."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, List, Optional

from frostfin.core.models import Achievement, User


class AchievementId(str, Enum):
    FIRST_FREEZE = "first_freeze"
    ICE_NOVICE = "ice_novice"
    FROZEN_EXPLORER = "frozen_explorer"
    ARCTIC_MASTER = "arctic_master"
    STREAK_STARTER = "streak_starter"
    DEDICATED_DIVER = "dedicated_diver"
    SPEED_SWIMMER = "speed_swimmer"
    COIN_COLLECTOR = "coin_collector"


Predicate = Callable[[User], bool]

PREDICATES: Dict[AchievementId, Predicate] = {
    AchievementId.FIRST_FREEZE: lambda u: u.puzzles_solved >= 1,
    AchievementId.ICE_NOVICE: lambda u: u.puzzles_solved >= 5,
    AchievementId.FROZEN_EXPLORER: lambda u: u.puzzles_solved >= 10,
    AchievementId.ARCTIC_MASTER: lambda u: u.puzzles_solved >= 25,
    AchievementId.STREAK_STARTER: lambda u: u.daily_streak >= 3,
    AchievementId.DEDICATED_DIVER: lambda u: u.daily_streak >= 7,
    AchievementId.SPEED_SWIMMER: lambda u: 0 < u.best_time < 120,
    AchievementId.COIN_COLLECTOR: lambda u: u.coins >= 500,
}


def predicate_for(achievement: Achievement) -> Optional[Predicate]:
    """Look up the predicate for a stored achievement; unknown ids never unlock."""
    try:
        return PREDICATES[AchievementId(achievement.id)]
    except ValueError:
        return None


def default_achievements() -> List[Achievement]:
    return [
        Achievement(AchievementId.FIRST_FREEZE.value, "First Freeze", "Complete your first puzzle", "snowflake", 1, 50),
        Achievement(AchievementId.ICE_NOVICE.value, "Ice Novice", "Complete 5 puzzles", "star.fill", 5, 100),
        Achievement(AchievementId.FROZEN_EXPLORER.value, "Frozen Explorer", "Complete 10 puzzles", "star.circle.fill", 10, 200),
        Achievement(AchievementId.ARCTIC_MASTER.value, "Arctic Master", "Complete 25 puzzles", "crown.fill", 25, 500),
        Achievement(AchievementId.STREAK_STARTER.value, "Streak Starter", "Maintain a 3-day streak", "flame.fill", 3, 100),
        Achievement(AchievementId.DEDICATED_DIVER.value, "Dedicated Diver", "Maintain a 7-day streak", "flame.circle.fill", 7, 300),
        Achievement(AchievementId.SPEED_SWIMMER.value, "Speed Swimmer", "Complete a puzzle in under 2 minutes", "hare.fill", 1, 150),
        Achievement(AchievementId.COIN_COLLECTOR.value, "Coin Collector", "Accumulate 500 coins", "bitcoinsign.circle.fill", 500, 200),
    ]
