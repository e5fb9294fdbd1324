"""Season standings as served to the API and the CLI."""

from firstgoal import db
from firstgoal.models import LeagueMember, Pick, Season
from firstgoal.scoring import compute_standings
from firstgoal.utils.cache_utils import cached_standings


def load_scored_picks(season_id):
    """Snapshot of every pick in a season, scored or not"""
    return [pick.to_scored_pick() for pick in Pick.query.filter_by(season_id=season_id)]


@cached_standings
def get_season_standings(season_id):
    """
    Ranked standings for a season as a list of dicts.

    Members who are no longer in the league keep their row, labelled by
    member id.
    """
    season = db.session.get(Season, season_id)
    if season is None:
        return []

    names = {
        member.member_id: member.display_name
        for member in LeagueMember.query.filter_by(league_id=season.league_id)
    }

    rows = []
    for row in compute_standings(load_scored_picks(season_id), season_id):
        data = row.to_dict()
        data["display_name"] = names.get(row.member_id, row.member_id)
        rows.append(data)
    return rows
