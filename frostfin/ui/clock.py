"""Elapsed-time ticker for the puzzle screen."""

from __future__ import annotations

import time
from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer, Signal

from frostfin.core.constants import TICK_INTERVAL_MS


class PuzzleClock(QObject):
    """Publishes elapsed seconds every 100 ms while running.

    Display only: the value never feeds back into puzzle or player state.
    """

    elapsed_changed = Signal(float)

    def __init__(
        self,
        parent: Optional[QObject] = None,
        now: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__(parent)
        self._now = now
        self._start: Optional[float] = None
        self._elapsed = 0.0
        self._timer = QTimer(self)
        self._timer.setInterval(TICK_INTERVAL_MS)
        self._timer.timeout.connect(self._on_tick)

    @property
    def elapsed(self) -> float:
        return self._elapsed

    def is_running(self) -> bool:
        return self._timer.isActive()

    def start(self) -> None:
        self._start = self._now()
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    def reset(self) -> None:
        self.stop()
        self._start = None
        self._elapsed = 0.0
        self.elapsed_changed.emit(self._elapsed)

    def formatted_time(self) -> str:
        minutes, seconds = divmod(int(self._elapsed), 60)
        return f"{minutes:02d}:{seconds:02d}"

    def _on_tick(self) -> None:
        if self._start is None:
            return
        self._elapsed = self._now() - self._start
        self.elapsed_changed.emit(self._elapsed)
