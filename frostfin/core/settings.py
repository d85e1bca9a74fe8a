from __future__ import annotations

import json
import logging
import re
from typing import Optional, Tuple

from frostfin.core.models import AppSettings
from frostfin.core.persistence import PersistenceGateway, load_settings, save_settings
from frostfin.core.progress import ProgressTracker

logger = logging.getLogger(__name__)

AVAILABLE_AVATARS: Tuple[str, ...] = ("default", "arctic", "explorer", "master", "legend")
AVAILABLE_THEMES: Tuple[str, ...] = ("arctic", "deep", "frozen", "crystal")

USERNAME_MIN = 3
USERNAME_MAX = 20
USERNAME_ERROR = f"Username must be {USERNAME_MIN}-{USERNAME_MAX} characters long"


def sanitize_username(username: str) -> str:
    """Keep letters, digits, ``_`` and ``-`` only."""
    return re.sub(r"[^\w-]", "", username)


def is_valid_username(username: str) -> bool:
    return USERNAME_MIN <= len(username.strip()) <= USERNAME_MAX


class SettingsService:
    """App preferences and the player's profile choices."""

    def __init__(self, gateway: PersistenceGateway, tracker: ProgressTracker) -> None:
        self._gateway = gateway
        self._tracker = tracker
        self._settings = load_settings(gateway)
        self.last_error: Optional[str] = None

    @property
    def settings(self) -> AppSettings:
        return self._settings

    def toggle_sound(self) -> bool:
        self._settings.sound_enabled = not self._settings.sound_enabled
        self._save()
        return self._settings.sound_enabled

    def toggle_music(self) -> bool:
        self._settings.music_enabled = not self._settings.music_enabled
        self._save()
        return self._settings.music_enabled

    def toggle_vibration(self) -> bool:
        self._settings.vibration_enabled = not self._settings.vibration_enabled
        self._save()
        return self._settings.vibration_enabled

    def update_username(self, username: str) -> bool:
        sanitized = sanitize_username(username)
        if not is_valid_username(sanitized):
            self.last_error = USERNAME_ERROR
            return False
        self.last_error = None
        self._tracker.user.username = sanitized
        self._tracker.save()
        return True

    def select_avatar(self, avatar: str) -> bool:
        if avatar not in AVAILABLE_AVATARS:
            return False
        self._tracker.user.selected_avatar = avatar
        self._tracker.save()
        return True

    def select_theme(self, theme: str) -> bool:
        if theme not in AVAILABLE_THEMES:
            return False
        self._tracker.user.selected_theme = theme
        self._tracker.save()
        return True

    def reset_progress(self) -> None:
        logger.info("Resetting player progress")
        self._tracker.reset_progress()

    def export_data(self) -> str:
        return json.dumps(self._tracker.user.to_dict(), indent=2)

    def _save(self) -> None:
        try:
            save_settings(self._gateway, self._settings)
        except OSError as e:
            logger.warning("Could not save settings: %s", e)
