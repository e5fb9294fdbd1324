from firstgoal import db  # noqa: F401 - imported for model imports

from .admin_action import AdminAction
from .game import Game
from .ineligible_player import IneligiblePlayer
from .league import League
from .league_member import LeagueMember
from .league_player import LeaguePlayer
from .pick import Pick
from .result import Result
from .season import Season

__all__ = [
    "League",
    "LeagueMember",
    "LeaguePlayer",
    "IneligiblePlayer",
    "Season",
    "Game",
    "Pick",
    "Result",
    "AdminAction",
]
