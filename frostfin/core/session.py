from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional

from frostfin.core.constants import HINT_COST_COINS
from frostfin.core.engine import EngineEvent, EngineEventKind, PuzzleEngine
from frostfin.core.progress import CompletionReport, ProgressTracker

logger = logging.getLogger(__name__)


class PuzzleSession:
    """One play session: routes the engine's completion into the tracker.

    Daily puzzles additionally update the streak and pay the daily bonus.
    """

    def __init__(
        self,
        engine: PuzzleEngine,
        tracker: ProgressTracker,
        today: Callable[[], date] = date.today,
        hint_cost: int = HINT_COST_COINS,
    ) -> None:
        self._engine = engine
        self._tracker = tracker
        self._today = today
        self._hint_cost = hint_cost
        self._report: Optional[CompletionReport] = None
        self._unsubscribe = engine.subscribe(self._on_engine_event)

    @property
    def engine(self) -> PuzzleEngine:
        return self._engine

    @property
    def report(self) -> Optional[CompletionReport]:
        """Result of the completion, once the puzzle has been solved."""
        return self._report

    def close(self) -> None:
        self._unsubscribe()

    def request_hint(self) -> Optional[str]:
        """Reveal the current hint, paying with an inventory hint or coins.

        Returns None without touching any state when the puzzle is finished,
        there is no hint left, or the player can pay neither way.
        """
        if self._engine.is_completed() or not self._engine.has_hint_available():
            return None
        if not self._tracker.use_hint() and not self._tracker.spend_coins(self._hint_cost):
            logger.info("Hint refused: no hints or coins left")
            return None
        self._engine.record_hint()
        return self._engine.current_hint()

    def restart(self) -> None:
        self._report = None
        self._engine.reset()

    def _on_engine_event(self, event: EngineEvent) -> None:
        if event.kind is not EngineEventKind.COMPLETED or event.completion is None:
            return
        completion = event.completion
        self._report = self._tracker.record_completion(completion)
        if completion.is_daily:
            self._report.new_achievements.extend(self._tracker.complete_daily(self._today()))
