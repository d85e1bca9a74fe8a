from __future__ import annotations

import copy
import logging
import re
from datetime import date, datetime, time
from pathlib import Path
from typing import Dict, List, Optional, Union

import yaml

from frostfin.core.constants import DAILY_TITLE
from frostfin.core.models import (
    Difficulty,
    ElementState,
    ElementType,
    FishType,
    Position,
    Puzzle,
    PuzzleElement,
)

logger = logging.getLogger(__name__)

DEFAULT_PUZZLE_DIR = Path(__file__).resolve().parent.parent / "data" / "puzzles"


def day_of_year(day: Union[date, datetime]) -> int:
    """1-based ordinal of the day within its year."""
    return day.timetuple().tm_yday


def start_of_day(day: Union[date, datetime]) -> datetime:
    if isinstance(day, datetime):
        return datetime.combine(day.date(), time.min, tzinfo=day.tzinfo)
    return datetime.combine(day, time.min)


class PuzzleCatalog:
    """The canonical puzzle set, loaded from ``data/puzzles/puzzleNN.yaml``.

    Templates are never handed out directly: every accessor returns a deep
    copy, so a play session can mutate its board freely.
    """

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self._base_dir = base_dir or DEFAULT_PUZZLE_DIR
        self._puzzles = self._load_puzzles()

    def __len__(self) -> int:
        return len(self._puzzles)

    def list_puzzles(self) -> List[Puzzle]:
        return [copy.deepcopy(p) for p in self._puzzles.values()]

    def keys(self) -> List[str]:
        return list(self._puzzles.keys())

    def get(self, key: str) -> Puzzle:
        return copy.deepcopy(self._puzzles[key])

    def daily_index(self, day: Union[date, datetime]) -> int:
        return day_of_year(day) % len(self._puzzles)

    def daily_puzzle(self, day: Union[date, datetime]) -> Puzzle:
        """Deterministic daily pick: ``catalog[day_of_year % size]`` with progress cleared."""
        template = list(self._puzzles.values())[self.daily_index(day)]
        puzzle = copy.deepcopy(template)
        puzzle.title = DAILY_TITLE
        puzzle.current_moves = 0
        puzzle.is_solved = False
        puzzle.is_daily = True
        puzzle.date = start_of_day(day)
        return puzzle

    def _load_puzzles(self) -> Dict[str, Puzzle]:
        if not self._base_dir.exists():
            raise FileNotFoundError(f"Puzzles directory not found: {self._base_dir}")

        def _sort_key(p: Path) -> tuple[int, str]:
            m = re.match(r"^puzzle(\d+)$", p.stem)
            if m:
                return (int(m.group(1)), p.stem)
            return (10**9, p.stem)

        puzzles: Dict[str, Puzzle] = {}
        for puzzle_path in sorted(self._base_dir.glob("puzzle*.yaml"), key=_sort_key):
            raw = yaml.safe_load(puzzle_path.read_text(encoding="utf-8"))
            puzzles[puzzle_path.stem] = _parse_puzzle(puzzle_path.stem, raw, puzzle_path.name)

        if not puzzles:
            raise ValueError(f"No puzzle files (puzzle*.yaml) found in {self._base_dir}")
        logger.debug("Loaded %d puzzles from %s", len(puzzles), self._base_dir)
        return puzzles


def _parse_puzzle(key: str, raw: object, source: str) -> Puzzle:
    if not raw or not isinstance(raw, dict):
        raise ValueError(f"{source}: expected YAML mapping with 'title' and 'elements'")
    title = raw.get("title")
    if not title or not isinstance(title, str):
        raise ValueError(f"{source}: missing or invalid 'title'")
    try:
        difficulty = Difficulty(raw.get("difficulty"))
    except ValueError:
        raise ValueError(f"{source}: invalid 'difficulty' {raw.get('difficulty')!r}") from None

    raw_elements = raw.get("elements")
    if not isinstance(raw_elements, list) or not raw_elements:
        raise ValueError(f"{source}: 'elements' must be a non-empty list")
    elements = []
    for i, item in enumerate(raw_elements):
        try:
            elements.append(
                PuzzleElement(
                    id=f"{key}-e{i}",
                    position=Position(float(item["x"]), float(item["y"])),
                    type=ElementType(item["type"]),
                    state=ElementState(item.get("state", ElementState.INACTIVE.value)),
                )
            )
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ValueError(f"{source}: bad element #{i}: {e}") from e

    try:
        fish_types = [FishType(f) for f in raw.get("required_fish") or []]
    except ValueError as e:
        raise ValueError(f"{source}: {e}") from e

    hints = [str(h).strip() for h in raw.get("hints") or [] if str(h).strip()]
    return Puzzle(
        id=key,
        number=int(raw.get("number", 0)),
        title=title.strip(),
        description=str(raw.get("description", "")).strip(),
        difficulty=difficulty,
        elements=elements,
        hints=hints,
        required_fish_types=fish_types,
        max_moves=int(raw.get("max_moves", 50)),
        temperature=float(raw.get("temperature", -5.0)),
    )
