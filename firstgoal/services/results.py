"""
Result entry and event scoring

Scoring a game recomputes every pick of that game from scratch and
overwrites the stored points, so running it again after a correction is
safe. Runs for the same game must not overlap; the game row is locked for
the duration of a run on databases that support SELECT ... FOR UPDATE.
Picks can only be scored once the game's pick deadline has passed.
"""

from collections import namedtuple

from firstgoal import db
from firstgoal.models import AdminAction, Game, Result
from firstgoal.scoring import InvalidResult, check_result, score
from firstgoal.utils.cache_utils import invalidate_standings
from firstgoal.utils.logging_config import ContextualLogger, get_logger
from firstgoal.utils.timezone_utils import get_utc_time

logger = get_logger(__name__)

ScoringRun = namedtuple("ScoringRun", ["game_id", "scored_count", "points_awarded"])


class PicksStillOpen(Exception):
    """The game's pick window has not closed yet"""


def ensure_picks_closed(game, now=None):
    now = now or get_utc_time()
    if now < game.deadline_utc():
        raise PicksStillOpen(f"Picks for game {game.id} are still open")


def enter_result(game, game_result, authorizer, score_now=False, now=None):
    """
    Record or correct the result of a game.

    A correction to a game that was already scored re-scores it immediately;
    otherwise picks are scored when score_now is set or score_game() runs.
    Scoring immediately is refused while picks are still open; nothing is
    written in that case.

    Returns:
        (result, scoring_run or None)
    """
    authorizer.require_admin(game.league_id)
    if not game_result.is_shutout:
        check_result(game_result)
    if score_now:
        ensure_picks_closed(game, now)

    result = game.result
    corrected = result is not None
    if result is None:
        result = Result()
        game.result = result

    result.update_from(game_result, entered_by=authorizer.caller_id)
    db.session.flush()
    AdminAction.log_result_entry(authorizer.caller_id, game, result, corrected=corrected)
    db.session.commit()

    logger.info(
        f"{'Corrected' if corrected else 'Entered'} result for game {game.id} "
        f"by {authorizer.caller_id}"
    )

    if score_now or (corrected and game.status == "completed"):
        return result, score_game(game, authorizer, now=now)
    return result, None


def score_game(game, authorizer, now=None):
    """
    Score every pick of a game against its result.

    Raises:
        AuthorizationDenied: caller is not an admin of the game's league
        PicksStillOpen: the pick deadline has not passed
        InvalidResult: the game has no result, or the result cannot be scored;
            nothing is written in that case
    """
    authorizer.require_admin(game.league_id)
    ensure_picks_closed(game, now)
    log = ContextualLogger(__name__, {"game_id": game.id, "by": authorizer.caller_id})

    try:
        locked_game = (
            Game.query.filter_by(id=game.id).with_for_update().one()
        )
        result = locked_game.result
        if result is None:
            raise InvalidResult(f"No result found for game {game.id}")

        snapshot = result.to_game_result()
        picks = locked_game.picks.all()

        # Score everything before touching any row so a bad result writes nothing
        breakdowns = [(pick, score(pick.to_entry(), snapshot)) for pick in picks]

        points_awarded = 0
        for pick, breakdown in breakdowns:
            pick.apply_score(breakdown)
            points_awarded += breakdown.total

        locked_game.mark_completed()
        AdminAction.log_scoring_run(
            authorizer.caller_id, locked_game, len(breakdowns), points_awarded
        )
        db.session.commit()
    except InvalidResult as e:
        db.session.rollback()
        log.error(f"Scoring aborted: {e}")
        raise

    invalidate_standings(locked_game.season_id)
    log.info(f"Scored {len(breakdowns)} picks, {points_awarded} points awarded")
    return ScoringRun(locked_game.id, len(breakdowns), points_awarded)


def rescore_season(season, authorizer):
    """
    Re-score every completed game of a season that has a result.

    Each game is scored in its own transaction. If one game fails, the games
    before it stay re-scored and the error propagates.
    """
    authorizer.require_admin(season.league_id)
    runs = []
    games = (
        season.games.filter(Game.status == "completed")
        .order_by(Game.puck_drop)
        .all()
    )
    for game in games:
        if game.result is None:
            logger.warning(f"Skipping game {game.id}: completed without a result")
            continue
        runs.append(score_game(game, authorizer))
    return runs
