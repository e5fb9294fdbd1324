"""Pick submission: membership gate, validation, one pick per member and game."""

import logging

from firstgoal import db
from firstgoal.models import Pick
from firstgoal.scoring import ValidationRejected, ensure_valid
from firstgoal.utils.cache_utils import invalidate_standings
from firstgoal.utils.timezone_utils import get_utc_time

logger = logging.getLogger(__name__)


def submit_pick(game, entry, authorizer, now=None):
    """
    Create or update the caller's pick for a game.

    Returns:
        (pick, created)

    Raises:
        AuthorizationDenied: caller is not a member of the game's league
        ValidationRejected: the pick window is closed or the pick is malformed
    """
    authorizer.require_member(game.league_id)
    if game.status != "upcoming":
        raise ValidationRejected("Picks are closed for this game")
    ensure_valid(entry, game.event_window(), now or get_utc_time())

    pick = Pick.get_for_member(authorizer.caller_id, game.id)
    created = pick is None
    if created:
        pick = Pick(
            member_id=authorizer.caller_id,
            game_id=game.id,
            league_id=game.league_id,
            season_id=game.season_id,
        )
        db.session.add(pick)

    pick.update_from(entry)
    # Editing before the deadline invalidates any earlier score
    pick.clear_score()
    db.session.commit()
    invalidate_standings(game.season_id)

    logger.info(
        f"{'Created' if created else 'Updated'} pick for member {pick.member_id} "
        f"in game {game.id}"
    )
    return pick, created
