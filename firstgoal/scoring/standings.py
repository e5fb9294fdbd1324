"""Season standings built from scored picks."""

from __future__ import annotations

from typing import Dict, Hashable, Iterable, Iterator, List, Optional

from .types import RewardCategory, ScoredPick, StandingsRow


class _Tally:
    __slots__ = ("total_points", "shutouts_correct", "darkhorse_correct", "games_participated")

    def __init__(self):
        self.total_points = 0
        self.shutouts_correct = 0
        self.darkhorse_correct = 0
        self.games_participated = 0

    def add(self, pick: ScoredPick) -> None:
        self.games_participated += 1
        breakdown = pick.breakdown
        if breakdown is None:
            return
        self.total_points += breakdown.total
        if breakdown.has(RewardCategory.SHUTOUT):
            self.shutouts_correct += 1
        if breakdown.has(RewardCategory.DARKHORSE):
            self.darkhorse_correct += 1


def _ranking_key(item):
    member_id, tally = item
    return (
        -tally.total_points,
        -tally.shutouts_correct,
        -tally.darkhorse_correct,
        -tally.games_participated,
        str(member_id),
    )


class Standings:
    """
    Ranked standings for one season.

    Iterating recomputes the table from the captured picks, so the sequence
    can be walked any number of times and always yields the same order.
    """

    def __init__(self, picks: Iterable[ScoredPick], season_id: Optional[Hashable] = None):
        self._picks = tuple(picks)
        self.season_id = season_id

    def _tally(self) -> Dict[Hashable, _Tally]:
        tallies: Dict[Hashable, _Tally] = {}
        for pick in self._picks:
            if self.season_id is not None and pick.season_id != self.season_id:
                continue
            tallies.setdefault(pick.member_id, _Tally()).add(pick)
        return tallies

    def __iter__(self) -> Iterator[StandingsRow]:
        ordered = sorted(self._tally().items(), key=_ranking_key)
        for position, (member_id, tally) in enumerate(ordered, start=1):
            yield StandingsRow(
                rank=position,
                member_id=member_id,
                total_points=tally.total_points,
                shutouts_correct=tally.shutouts_correct,
                darkhorse_correct=tally.darkhorse_correct,
                games_participated=tally.games_participated,
            )

    def rows(self) -> List[StandingsRow]:
        return list(self)


def compute_standings(
    picks: Iterable[ScoredPick], season_id: Optional[Hashable] = None
) -> Standings:
    """Rank members by total points, then shutouts, darkhorse hits and games played"""
    return Standings(picks, season_id)
