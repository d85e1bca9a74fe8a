from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional, Protocol, TypeVar

from frostfin.core.constants import FISH_KEY, SETTINGS_KEY, USER_KEY, data_dir
from frostfin.core.models import AppSettings, Fish, User, default_fish

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PersistenceGateway(Protocol):
    """Key/blob store. ``load`` returns None for a missing key."""

    def load(self, key: str) -> Optional[bytes]:
        ...

    def save(self, key: str, blob: bytes) -> None:
        ...


class JsonFileGateway:
    """Stores each key as ``<dir>/<key>.json``. Writes are best effort.

    The directory is created on first save, not on construction.

    Defaults to ~/.frostfin (see ``constants.data_dir``).
    """

    def __init__(self, directory: Optional[Path] = None) -> None:
        self._dir = directory or data_dir()

    @property
    def directory(self) -> Path:
        return self._dir

    def _path(self, key: str) -> Path:
        return self._dir / f"{key}.json"

    def load(self, key: str) -> Optional[bytes]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_bytes()
        except OSError as e:
            logger.warning("Could not read %s: %s", path, e)
            return None

    def save(self, key: str, blob: bytes) -> None:
        path = self._path(key)
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            path.write_bytes(blob)
        except OSError as e:
            logger.warning("Could not save %s: %s", path, e)


class InMemoryGateway:
    def __init__(self) -> None:
        self.blobs: Dict[str, bytes] = {}

    def load(self, key: str) -> Optional[bytes]:
        return self.blobs.get(key)

    def save(self, key: str, blob: bytes) -> None:
        self.blobs[key] = blob


def _encode(payload: object) -> bytes:
    return json.dumps(payload, indent=2).encode("utf-8")


def _decode(gateway: PersistenceGateway, key: str, parse: Callable[[object], T], default: Callable[[], T]) -> T:
    blob = gateway.load(key)
    if blob is None:
        return default()
    try:
        return parse(json.loads(blob.decode("utf-8")))
    except (ArithmeticError, AttributeError, LookupError, TypeError, ValueError) as e:
        logger.warning("Discarding unreadable %s blob: %s", key, e)
        return default()


def _parse_fish(raw: object) -> List[Fish]:
    if not isinstance(raw, list):
        raise TypeError(f"expected a list, got {type(raw).__name__}")
    return [Fish.from_dict(item) for item in raw]


def load_user(gateway: PersistenceGateway) -> User:
    return _decode(gateway, USER_KEY, User.from_dict, User)


def save_user(gateway: PersistenceGateway, user: User) -> None:
    gateway.save(USER_KEY, _encode(user.to_dict()))


def load_settings(gateway: PersistenceGateway) -> AppSettings:
    return _decode(gateway, SETTINGS_KEY, AppSettings.from_dict, AppSettings)


def save_settings(gateway: PersistenceGateway, settings: AppSettings) -> None:
    gateway.save(SETTINGS_KEY, _encode(settings.to_dict()))


def load_fish(gateway: PersistenceGateway) -> List[Fish]:
    return _decode(gateway, FISH_KEY, _parse_fish, default_fish)


def save_fish(gateway: PersistenceGateway, fish: List[Fish]) -> None:
    gateway.save(FISH_KEY, _encode([f.to_dict() for f in fish]))
