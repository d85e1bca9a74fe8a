from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Union

from frostfin.core.achievements import default_achievements, predicate_for
from frostfin.core.constants import DAILY_BONUS_COINS
from frostfin.core.engine import CompletionEvent
from frostfin.core.models import Achievement, Fish, User
from frostfin.core.persistence import (
    PersistenceGateway,
    load_fish,
    load_user,
    save_fish,
    save_user,
)
from frostfin.core.scoring import coin_reward, score

logger = logging.getLogger(__name__)


@dataclass
class CompletionReport:
    """What a single puzzle completion earned the player."""

    score: int
    coins_earned: int
    new_achievements: List[Achievement] = field(default_factory=list)
    new_fish: List[Fish] = field(default_factory=list)


def _as_date(day: Union[date, datetime]) -> date:
    return day.date() if isinstance(day, datetime) else day


class ProgressTracker:
    """Owns the player record and fish collection; applies results and persists them.

    Every mutation is written through to the gateway straight away. Loading
    never fails: unreadable blobs fall back to fresh defaults.
    """

    def __init__(self, gateway: PersistenceGateway) -> None:
        self._gateway = gateway
        self._user = load_user(gateway)
        self._fish = load_fish(gateway)

    @property
    def user(self) -> User:
        return self._user

    @property
    def fish(self) -> List[Fish]:
        return self._fish

    def initialize_achievements(self) -> None:
        """Seed the default achievements for a player who has none yet."""
        if self._user.achievements:
            return
        self._user.achievements = default_achievements()
        self._save_user()

    # ------------------------------------------------------------------
    # Puzzle results
    # ------------------------------------------------------------------

    def record_completion(self, event: CompletionEvent) -> CompletionReport:
        user = self._user
        user.puzzles_solved += 1
        points = score(event.difficulty, event.moves, event.max_moves, event.elapsed, event.hints_used)
        user.total_score += points
        coins = coin_reward(event.difficulty)
        user.coins += coins
        if user.best_time == 0 or event.elapsed < user.best_time:
            user.best_time = event.elapsed

        report = CompletionReport(score=points, coins_earned=coins)
        report.new_achievements = self.evaluate_achievements()
        report.new_fish = self.unlock_fish()
        self._save_user()
        logger.info(
            "Recorded %s: +%d score, +%d coins (solved=%d)",
            event.puzzle_id,
            points,
            coins,
            user.puzzles_solved,
        )
        return report

    def evaluate_achievements(self) -> List[Achievement]:
        """Unlock every locked achievement whose predicate now holds.

        Unlocked achievements are skipped, so calling this repeatedly never
        pays a reward twice.
        """
        unlocked: List[Achievement] = []
        for achievement in self._user.achievements:
            if achievement.is_unlocked:
                continue
            predicate = predicate_for(achievement)
            if predicate is None or not predicate(self._user):
                continue
            achievement.is_unlocked = True
            self._user.coins += achievement.reward_coins
            unlocked.append(achievement)
            logger.info("Achievement unlocked: %s (+%d coins)", achievement.title, achievement.reward_coins)
        if unlocked:
            self._save_user()
        return unlocked

    def unlock_fish(self) -> List[Fish]:
        unlocked: List[Fish] = []
        for fish in self._fish:
            if fish.is_unlocked or self._user.puzzles_solved < fish.unlock_requirement:
                continue
            fish.is_unlocked = True
            if fish.id not in self._user.unlocked_fish:
                self._user.unlocked_fish.append(fish.id)
            unlocked.append(fish)
            logger.info("Fish unlocked: %s", fish.name)
        if unlocked:
            self._save_fish()
            self._save_user()
        return unlocked

    # ------------------------------------------------------------------
    # Daily puzzle
    # ------------------------------------------------------------------

    def update_daily_streak(self, today: Union[date, datetime]) -> int:
        today = _as_date(today)
        last = self._user.last_played_date
        if last is None:
            self._user.daily_streak = 1
        else:
            diff = (today - last).days
            if diff == 1:
                self._user.daily_streak += 1
            elif diff > 1:
                self._user.daily_streak = 1
        self._user.last_played_date = today
        self._save_user()
        return self._user.daily_streak

    def complete_daily(self, today: Union[date, datetime]) -> List[Achievement]:
        """Streak update plus the daily bonus, then re-check achievements."""
        self.update_daily_streak(today)
        self.add_coins(DAILY_BONUS_COINS)
        return self.evaluate_achievements()

    # ------------------------------------------------------------------
    # Coins and hints
    # ------------------------------------------------------------------

    def add_coins(self, amount: int) -> None:
        self._user.coins += amount
        self._save_user()

    def spend_coins(self, amount: int) -> bool:
        if amount < 0 or self._user.coins < amount:
            return False
        self._user.coins -= amount
        self._save_user()
        return True

    def use_hint(self) -> bool:
        """Consume one hint from the inventory."""
        if self._user.hints_available <= 0:
            return False
        self._user.hints_available -= 1
        self._save_user()
        return True

    def buy_hints(self, count: int, cost: int) -> bool:
        if not self.spend_coins(cost):
            return False
        self._user.hints_available += count
        self._save_user()
        return True

    def reset_progress(self) -> User:
        self._user = User()
        self._save_user()
        return self._user

    def save(self) -> None:
        """Persist the current state (e.g. on app exit)."""
        self._save_user()
        self._save_fish()

    def _save_user(self) -> None:
        try:
            save_user(self._gateway, self._user)
        except OSError as e:
            logger.warning("Could not save user: %s", e)

    def _save_fish(self) -> None:
        try:
            save_fish(self._gateway, self._fish)
        except OSError as e:
            logger.warning("Could not save fish: %s", e)
