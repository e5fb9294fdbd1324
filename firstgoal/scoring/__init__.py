"""
Pick scoring and standings engine

Pure functions over immutable snapshots; nothing in this package touches
Flask, the database or the network.
"""

from .exceptions import InvalidResult, ScoringError, ValidationRejected
from .scorer import check_result, play_type_bonus, score
from .standings import Standings, compute_standings
from .types import (
    POINTS_CAP,
    EventWindow,
    GameResult,
    PickEntry,
    PlayType,
    RewardCategory,
    ScoreBreakdown,
    ScoredPick,
    StandingsRow,
)
from .validator import ensure_valid, validate

__all__ = [
    "POINTS_CAP",
    "EventWindow",
    "GameResult",
    "InvalidResult",
    "PickEntry",
    "PlayType",
    "RewardCategory",
    "ScoreBreakdown",
    "ScoredPick",
    "ScoringError",
    "Standings",
    "StandingsRow",
    "ValidationRejected",
    "check_result",
    "compute_standings",
    "ensure_valid",
    "play_type_bonus",
    "score",
    "validate",
]
