"""Locally synthesized leaderboard.

There is no backend: rival scores are random on every ``generate`` call and
are not meant to be reproducible.
"""

from __future__ import annotations

import random
from typing import List, Optional

from frostfin.core.models import LeaderboardEntry, User

RIVAL_NAMES = [
    "ArcticAce", "IcyPhantom", "FrozenKing", "ColdWave", "GlacierPro",
    "FrostMaster", "IceBlade", "PolarStar", "SnowDrift", "ChillSeeker",
]
RIVAL_COUNTRIES = [
    "USA", "Canada", "Norway", "Sweden", "Finland",
    "Iceland", "Russia", "Japan", "UK", "Germany",
]
ALL_COUNTRIES = "All"
PLAYER_COUNTRY = "You"


def _reranked(entries: List[LeaderboardEntry]) -> List[LeaderboardEntry]:
    return [
        LeaderboardEntry(username=e.username, score=e.score, rank=i + 1, country=e.country, id=e.id)
        for i, e in enumerate(entries)
    ]


class Leaderboard:
    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()
        self._entries: List[LeaderboardEntry] = []
        self._player_name: Optional[str] = None

    @property
    def entries(self) -> List[LeaderboardEntry]:
        return list(self._entries)

    def generate(self, user: User) -> List[LeaderboardEntry]:
        entries = [
            LeaderboardEntry(
                username=name,
                score=10000 - i * 500 + self._rng.randrange(400),
                rank=i + 1,
                country=country,
            )
            for i, (name, country) in enumerate(zip(RIVAL_NAMES, RIVAL_COUNTRIES))
        ]
        self._player_name = user.username
        if user.total_score > 0:
            entries.append(
                LeaderboardEntry(
                    username=user.username,
                    score=user.total_score,
                    rank=len(entries) + 1,
                    country=PLAYER_COUNTRY,
                )
            )
            entries.sort(key=lambda e: e.score, reverse=True)
            entries = _reranked(entries)
        self._entries = entries
        return self.entries

    def filter_by_country(self, country: str) -> List[LeaderboardEntry]:
        """Entries from ``country``, ranked within the filtered list."""
        if country == ALL_COUNTRIES:
            return self.entries
        return _reranked([e for e in self._entries if e.country == country])

    def countries(self) -> List[str]:
        return sorted({e.country for e in self._entries} | {ALL_COUNTRIES})

    def user_rank(self) -> int:
        """The player's rank, or 0 when they are not on the board."""
        for entry in self._entries:
            if entry.username == self._player_name and entry.country == PLAYER_COUNTRY:
                return entry.rank
        return 0
