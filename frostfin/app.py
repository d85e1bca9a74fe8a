"""Application wiring for the FrostFin core services."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Optional

from frostfin.core.catalog import PuzzleCatalog
from frostfin.core.engine import PuzzleEngine
from frostfin.core.leaderboard import Leaderboard
from frostfin.core.models import Puzzle
from frostfin.core.persistence import JsonFileGateway, PersistenceGateway
from frostfin.core.progress import ProgressTracker
from frostfin.core.session import PuzzleSession
from frostfin.core.settings import SettingsService


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


@dataclass
class GameServices:
    catalog: PuzzleCatalog
    tracker: ProgressTracker
    settings: SettingsService
    leaderboard: Leaderboard

    def start_puzzle(self, puzzle: Puzzle) -> PuzzleSession:
        return PuzzleSession(PuzzleEngine(puzzle), self.tracker)

    def start_daily(self, day: Optional[date] = None) -> PuzzleSession:
        day = day or date.today()
        return PuzzleSession(PuzzleEngine(self.catalog.daily_puzzle(day)), self.tracker, today=lambda: day)


def build_services(
    gateway: Optional[PersistenceGateway] = None,
    puzzle_dir: Optional[Path] = None,
) -> GameServices:
    """Construct the service graph. Each call yields independent instances."""
    gateway = gateway or JsonFileGateway()
    tracker = ProgressTracker(gateway)
    tracker.initialize_achievements()
    leaderboard = Leaderboard()
    leaderboard.generate(tracker.user)
    return GameServices(
        catalog=PuzzleCatalog(puzzle_dir),
        tracker=tracker,
        settings=SettingsService(gateway, tracker),
        leaderboard=leaderboard,
    )
