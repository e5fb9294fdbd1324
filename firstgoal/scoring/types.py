"""Value types shared by the validator, the scorer and the standings aggregator."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, FrozenSet, Hashable, Iterable, Mapping, Optional, Tuple

POINTS_CAP = 8


class PlayType(str, Enum):
    EVEN_STRENGTH = "es"
    POWER_PLAY = "pp"
    PENALTY_KILL = "pk"

    @classmethod
    def coerce(cls, value) -> Optional["PlayType"]:
        """Return the matching member, or None for anything outside the enum."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


class RewardCategory(str, Enum):
    SHUTOUT = "shutout"
    DARKHORSE = "darkhorse"
    REGULAR = "regular"
    PLAY_TYPE = "playType"
    BONUS_SCORER = "bonusScorer"
    BONUS_PLAY_TYPE = "bonusPlayType"


@dataclass(frozen=True)
class PickEntry:
    regular_scorer: Optional[str]
    darkhorse_scorer: Optional[str] = None
    is_shutout_call: bool = False
    play_type: object = PlayType.EVEN_STRENGTH
    darkhorse_play_type: object = PlayType.EVEN_STRENGTH


@dataclass(frozen=True)
class GameResult:
    is_shutout: bool = False
    first_scorer: Optional[str] = None
    first_play_type: object = None
    second_scorer: Optional[str] = None
    second_play_type: object = None


@dataclass(frozen=True)
class EventWindow:
    deadline: datetime
    ineligible_darkhorses: FrozenSet[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class ScoreBreakdown:
    """Reward categories that fired for one pick, in the order they fired."""

    awards: Tuple[Tuple[RewardCategory, int], ...] = ()

    @property
    def raw_total(self) -> int:
        return sum(points for _, points in self.awards)

    @property
    def total(self) -> int:
        return min(self.raw_total, POINTS_CAP)

    def has(self, category: RewardCategory) -> bool:
        return any(awarded is category for awarded, _ in self.awards)

    def points(self, category: RewardCategory) -> int:
        for awarded, points in self.awards:
            if awarded is category:
                return points
        return 0

    def to_dict(self) -> Dict[str, int]:
        return {category.value: points for category, points in self.awards}

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, int]]) -> "ScoreBreakdown":
        if not data:
            return cls()
        awards = []
        for key, points in data.items():
            try:
                category = RewardCategory(key)
            except ValueError:
                raise ValueError(f"Unknown reward category: {key!r}") from None
            awards.append((category, int(points)))
        return cls(tuple(awards))

    @classmethod
    def of(cls, pairs: Iterable[Tuple[RewardCategory, int]]) -> "ScoreBreakdown":
        return cls(tuple(pairs))


@dataclass(frozen=True)
class ScoredPick:
    member_id: Hashable
    season_id: Hashable = None
    breakdown: Optional[ScoreBreakdown] = None


@dataclass(frozen=True)
class StandingsRow:
    rank: int
    member_id: Hashable
    total_points: int
    shutouts_correct: int
    darkhorse_correct: int
    games_participated: int

    def to_dict(self) -> Dict[str, object]:
        return {
            "rank": self.rank,
            "member_id": self.member_id,
            "total_points": self.total_points,
            "shutouts_correct": self.shutouts_correct,
            "darkhorse_correct": self.darkhorse_correct,
            "games_participated": self.games_participated,
        }
