"""Game data: puzzles, board elements, fish, achievements and the player."""

from __future__ import annotations

import math
import uuid
from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"
    EXPERT = "Expert"


class ElementType(str, Enum):
    ICE_BLOCK = "iceBlock"
    FISH = "fish"
    MECHANISM = "mechanism"
    CURRENT = "current"
    GOAL = "goal"


class ElementState(str, Enum):
    FROZEN = "frozen"
    MELTED = "melted"
    ACTIVE = "active"
    INACTIVE = "inactive"
    COMPLETED = "completed"


class FishType(str, Enum):
    ICE_BREAKER = "iceBreaker"
    CURRENT_GUIDE = "currentGuide"
    MECHANISM_TRIGGER = "mechanismTrigger"
    FREEZER = "freezer"
    HEATER = "heater"

    @property
    def display_name(self) -> str:
        return _FISH_DISPLAY_NAMES[self]

    @property
    def ability(self) -> str:
        return _FISH_ABILITIES[self]


_FISH_DISPLAY_NAMES = {
    FishType.ICE_BREAKER: "Ice Breaker",
    FishType.CURRENT_GUIDE: "Current Guide",
    FishType.MECHANISM_TRIGGER: "Mechanism Trigger",
    FishType.FREEZER: "Freezer",
    FishType.HEATER: "Heater",
}

_FISH_ABILITIES = {
    FishType.ICE_BREAKER: "Breaks through ice blocks",
    FishType.CURRENT_GUIDE: "Directs water currents",
    FishType.MECHANISM_TRIGGER: "Activates puzzle mechanisms",
    FishType.FREEZER: "Freezes water into ice",
    FishType.HEATER: "Melts ice blocks",
}


@dataclass(frozen=True)
class Position:
    x: float
    y: float

    def distance_to(self, other: Position) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass
class PuzzleElement:
    """A positioned, typed, stateful object on the board."""

    id: str
    position: Position
    type: ElementType
    state: ElementState = ElementState.INACTIVE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "x": self.position.x,
            "y": self.position.y,
            "type": self.type.value,
            "state": self.state.value,
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> PuzzleElement:
        return cls(
            id=str(raw["id"]),
            position=Position(float(raw["x"]), float(raw["y"])),
            type=ElementType(raw["type"]),
            state=ElementState(raw.get("state", ElementState.INACTIVE.value)),
        )


@dataclass
class Puzzle:
    """A board with a win condition, a difficulty and a move budget.

    ``max_moves`` is advisory: it feeds the efficiency bonus but the engine
    never stops the player from exceeding it.
    """

    id: str
    number: int
    title: str
    description: str
    difficulty: Difficulty
    elements: List[PuzzleElement] = field(default_factory=list)
    is_solved: bool = False
    hints: List[str] = field(default_factory=list)
    required_fish_types: List[FishType] = field(default_factory=list)
    max_moves: int = 50
    current_moves: int = 0
    temperature: float = -5.0
    is_daily: bool = False
    date: Optional[datetime] = None

    def __post_init__(self) -> None:
        if int(self.max_moves) <= 0:
            raise ValueError(f"{self.id}: max_moves must be positive, got {self.max_moves}")
        if self.current_moves < 0:
            raise ValueError(f"{self.id}: current_moves cannot be negative")
        ids = [e.id for e in self.elements]
        if len(ids) != len(set(ids)):
            raise ValueError(f"{self.id}: duplicate element ids")

    def element(self, element_id: str) -> Optional[PuzzleElement]:
        for e in self.elements:
            if e.id == element_id:
                return e
        return None

    def elements_of(self, element_type: ElementType) -> List[PuzzleElement]:
        return [e for e in self.elements if e.type is element_type]


@dataclass
class Fish:
    id: str
    type: FishType
    name: str
    is_unlocked: bool = False
    unlock_requirement: int = 0

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["type"] = self.type.value
        return payload

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> Fish:
        return cls(
            id=str(raw["id"]),
            type=FishType(raw["type"]),
            name=str(raw["name"]),
            is_unlocked=bool(raw.get("is_unlocked", False)),
            unlock_requirement=int(raw.get("unlock_requirement", 0)),
        )


def default_fish() -> List[Fish]:
    """The starting roster. Only the ice breaker is available from the start."""
    return [
        Fish(id=str(uuid.uuid4()), type=FishType.ICE_BREAKER, name="Frosty", is_unlocked=True, unlock_requirement=0),
        Fish(id=str(uuid.uuid4()), type=FishType.CURRENT_GUIDE, name="Current", unlock_requirement=2),
        Fish(id=str(uuid.uuid4()), type=FishType.MECHANISM_TRIGGER, name="Trigger", unlock_requirement=5),
        Fish(id=str(uuid.uuid4()), type=FishType.FREEZER, name="Chiller", unlock_requirement=10),
        Fish(id=str(uuid.uuid4()), type=FishType.HEATER, name="Warm", unlock_requirement=15),
    ]


@dataclass
class Achievement:
    id: str
    title: str
    description: str
    icon: str
    requirement: int
    reward_coins: int
    is_unlocked: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> Achievement:
        return cls(
            id=str(raw["id"]),
            title=str(raw["title"]),
            description=str(raw.get("description", "")),
            icon=str(raw.get("icon", "")),
            requirement=int(raw.get("requirement", 0)),
            reward_coins=int(raw.get("reward_coins", 0)),
            is_unlocked=bool(raw.get("is_unlocked", False)),
        )


@dataclass
class User:
    username: str = "Player"
    coins: int = 100
    puzzles_solved: int = 0
    daily_streak: int = 0
    last_played_date: Optional[date] = None
    total_score: int = 0
    unlocked_fish: List[str] = field(default_factory=list)
    achievements: List[Achievement] = field(default_factory=list)
    selected_avatar: str = "default"
    selected_theme: str = "arctic"
    best_time: float = 0.0
    hints_available: int = 3

    def to_dict(self) -> Dict[str, Any]:
        return {
            "username": self.username,
            "coins": self.coins,
            "puzzles_solved": self.puzzles_solved,
            "daily_streak": self.daily_streak,
            "last_played_date": self.last_played_date.isoformat() if self.last_played_date else None,
            "total_score": self.total_score,
            "unlocked_fish": list(self.unlocked_fish),
            "achievements": [a.to_dict() for a in self.achievements],
            "selected_avatar": self.selected_avatar,
            "selected_theme": self.selected_theme,
            "best_time": self.best_time,
            "hints_available": self.hints_available,
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> User:
        if not isinstance(raw, dict):
            raise TypeError(f"expected an object, got {type(raw).__name__}")
        last_played = raw.get("last_played_date")
        unlocked_fish = raw.get("unlocked_fish", [])
        achievements = raw.get("achievements", [])
        if not isinstance(unlocked_fish, list) or not isinstance(achievements, list):
            raise TypeError("unlocked_fish and achievements must be lists")
        return cls(
            username=str(raw.get("username", "Player")),
            coins=max(0, int(raw.get("coins", 100))),
            puzzles_solved=max(0, int(raw.get("puzzles_solved", 0))),
            daily_streak=max(0, int(raw.get("daily_streak", 0))),
            last_played_date=date.fromisoformat(last_played) if last_played else None,
            total_score=max(0, int(raw.get("total_score", 0))),
            unlocked_fish=[str(f) for f in unlocked_fish],
            achievements=[Achievement.from_dict(a) for a in achievements],
            selected_avatar=str(raw.get("selected_avatar", "default")),
            selected_theme=str(raw.get("selected_theme", "arctic")),
            best_time=float(raw.get("best_time", 0.0)),
            hints_available=max(0, int(raw.get("hints_available", 3))),
        )


@dataclass
class AppSettings:
    sound_enabled: bool = True
    music_enabled: bool = True
    vibration_enabled: bool = True
    language: str = "en"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> AppSettings:
        if not isinstance(raw, dict):
            raise TypeError(f"expected an object, got {type(raw).__name__}")
        return cls(
            sound_enabled=bool(raw.get("sound_enabled", True)),
            music_enabled=bool(raw.get("music_enabled", True)),
            vibration_enabled=bool(raw.get("vibration_enabled", True)),
            language=str(raw.get("language", "en")),
        )


@dataclass
class LeaderboardEntry:
    username: str
    score: int
    rank: int
    country: str = "Unknown"
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
