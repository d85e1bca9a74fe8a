"""Fixed game constants and the on-disk data location."""

from __future__ import annotations

import os
from pathlib import Path

DAILY_BONUS_COINS = 50
HINT_COST_COINS = 25

# Board geometry, in board units.
FISH_EFFECT_RADIUS = 100.0
GOAL_REACH_RADIUS = 50.0

DAILY_TITLE = "Daily Ice Challenge"

TICK_INTERVAL_MS = 100

USER_KEY = "FrostFinUser"
SETTINGS_KEY = "FrostFinSettings"
FISH_KEY = "FrostFinFish"


def data_dir() -> Path:
    """Directory holding the persisted blobs. ``FROSTFIN_HOME`` overrides ~/.frostfin."""
    override = os.getenv("FROSTFIN_HOME")
    if override:
        return Path(override)
    return Path.home() / ".frostfin"
