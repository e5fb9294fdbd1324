from .authorization import AuthorizationDenied, LeagueAuthorizer
from .picks import submit_pick
from .results import PicksStillOpen, ScoringRun, enter_result, rescore_season, score_game
from .roster import (
    add_ineligible_player,
    is_eligible_as_darkhorse,
    remove_ineligible_player,
    set_league_players,
)
from .standings import get_season_standings, load_scored_picks

__all__ = [
    "AuthorizationDenied",
    "LeagueAuthorizer",
    "PicksStillOpen",
    "ScoringRun",
    "add_ineligible_player",
    "enter_result",
    "get_season_standings",
    "is_eligible_as_darkhorse",
    "load_scored_picks",
    "remove_ineligible_player",
    "rescore_season",
    "score_game",
    "set_league_players",
    "submit_pick",
]
