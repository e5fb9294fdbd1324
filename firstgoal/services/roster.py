"""Roster and darkhorse-ineligibility management for a league."""

import logging

from firstgoal import db
from firstgoal.models import AdminAction, IneligiblePlayer, LeaguePlayer

logger = logging.getLogger(__name__)


def _clean_names(names):
    seen = []
    for name in names:
        name = (name or "").strip()
        if name and name not in seen:
            seen.append(name)
    return seen


def set_league_players(league, names, authorizer):
    """Replace the whole roster of a league in one transaction"""
    authorizer.require_admin(league.id)
    names = _clean_names(names)

    LeaguePlayer.query.filter_by(league_id=league.id).delete()
    for name in names:
        db.session.add(LeaguePlayer(league_id=league.id, player_name=name))

    AdminAction.log_action(
        admin_member_id=authorizer.caller_id,
        league_id=league.id,
        action_type="set_roster",
        description=f"Set roster of {len(names)} players",
        action_metadata={"players": names},
    )
    db.session.commit()
    logger.info(f"Roster for league {league.id} set to {len(names)} players")
    return names


def add_ineligible_player(league, player_name, authorizer, note=None):
    """Mark a player as not pickable as a darkhorse; re-adding updates the note"""
    authorizer.require_admin(league.id)
    player_name = player_name.strip()

    entry = IneligiblePlayer.query.filter_by(
        league_id=league.id, player_name=player_name
    ).first()
    if entry is None:
        entry = IneligiblePlayer(
            league_id=league.id, player_name=player_name, added_by=authorizer.caller_id
        )
        db.session.add(entry)
    entry.note = note

    AdminAction.log_action(
        admin_member_id=authorizer.caller_id,
        league_id=league.id,
        action_type="add_ineligible",
        description=f"Marked {player_name} ineligible as darkhorse",
        action_metadata={"player_name": player_name, "note": note},
    )
    db.session.commit()
    return entry


def remove_ineligible_player(league, player_name, authorizer):
    """Returns False when the player was not on the list"""
    authorizer.require_admin(league.id)

    entry = IneligiblePlayer.query.filter_by(
        league_id=league.id, player_name=player_name
    ).first()
    if entry is None:
        return False

    db.session.delete(entry)
    AdminAction.log_action(
        admin_member_id=authorizer.caller_id,
        league_id=league.id,
        action_type="remove_ineligible",
        description=f"Restored {player_name} as darkhorse-eligible",
        action_metadata={"player_name": player_name},
    )
    db.session.commit()
    return True


def is_eligible_as_darkhorse(league_id, player_name):
    return (
        IneligiblePlayer.query.filter_by(
            league_id=league_id, player_name=player_name
        ).first()
        is None
    )
