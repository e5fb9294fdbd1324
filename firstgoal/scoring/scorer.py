"""
Scoring Engine for First Goal of the Game

Turns a (pick, result) pair into a ScoreBreakdown. For season totals and
rankings, see firstgoal.scoring.standings.
"""

import logging
from typing import List, Optional, Tuple

from .exceptions import InvalidResult
from .types import GameResult, PickEntry, PlayType, RewardCategory, ScoreBreakdown

logger = logging.getLogger(__name__)

SHUTOUT_POINTS = 5
DARKHORSE_POINTS = 3
REGULAR_POINTS = 1
BONUS_SCORER_POINTS = 1
PENALTY_KILL_BONUS = 3
PLAY_TYPE_BONUS = 1


def play_type_bonus(play_type: PlayType) -> int:
    """Bonus for calling the play type of a goal; penalty-kill goals pay more"""
    if play_type is PlayType.PENALTY_KILL:
        return PENALTY_KILL_BONUS
    return PLAY_TYPE_BONUS


def _result_play_type(result: GameResult, name: str) -> Optional[PlayType]:
    value = getattr(result, name)
    if value is None:
        return None
    play_type = PlayType.coerce(value)
    if play_type is None:
        raise InvalidResult(f"Result has an invalid {name}: {value!r}")
    return play_type


def check_result(result: GameResult) -> Tuple[PlayType, Optional[PlayType]]:
    """
    Raise InvalidResult unless a non-shutout result can be scored.

    Returns the first and second goal play types.
    """
    if not result.first_scorer:
        raise InvalidResult("Result is not a shutout but has no first scorer")
    first_play_type = _result_play_type(result, "first_play_type")
    if first_play_type is None:
        raise InvalidResult("Result is not a shutout but has no first play type")
    return first_play_type, _result_play_type(result, "second_play_type")


def score(pick: PickEntry, result: GameResult) -> ScoreBreakdown:
    """
    Score a single pick against a game result.

    A shutout result only rewards shutout calls. Otherwise a darkhorse hit on
    the first goal takes precedence over a regular hit, and only a darkhorse
    hit lets the regular pick collect a bonus from the second goal.

    Raises:
        InvalidResult: the result is not a shutout and lacks first-goal data,
            or carries a play type outside the enum.
    """
    if result.is_shutout:
        if pick.is_shutout_call:
            return ScoreBreakdown.of([(RewardCategory.SHUTOUT, SHUTOUT_POINTS)])
        return ScoreBreakdown()

    first_play_type, second_play_type = check_result(result)

    darkhorse_hit = bool(pick.darkhorse_scorer) and (
        pick.darkhorse_scorer == result.first_scorer
    )
    regular_hit = not darkhorse_hit and pick.regular_scorer == result.first_scorer

    awards: List[Tuple[RewardCategory, int]] = []

    if darkhorse_hit:
        awards.append((RewardCategory.DARKHORSE, DARKHORSE_POINTS))
        if PlayType.coerce(pick.darkhorse_play_type) is first_play_type:
            awards.append((RewardCategory.PLAY_TYPE, play_type_bonus(first_play_type)))

        # The regular pick can still earn from the second goal
        if result.second_scorer and pick.regular_scorer == result.second_scorer:
            awards.append((RewardCategory.BONUS_SCORER, BONUS_SCORER_POINTS))
            if (
                second_play_type is not None
                and PlayType.coerce(pick.play_type) is second_play_type
            ):
                awards.append(
                    (RewardCategory.BONUS_PLAY_TYPE, play_type_bonus(second_play_type))
                )

    elif regular_hit:
        awards.append((RewardCategory.REGULAR, REGULAR_POINTS))
        if PlayType.coerce(pick.play_type) is first_play_type:
            awards.append((RewardCategory.PLAY_TYPE, play_type_bonus(first_play_type)))

    breakdown = ScoreBreakdown.of(awards)
    logger.debug(
        f"Scored pick regular={pick.regular_scorer} darkhorse={pick.darkhorse_scorer}: "
        f"{breakdown.to_dict()} total={breakdown.total}"
    )
    return breakdown
