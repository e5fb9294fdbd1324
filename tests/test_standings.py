"""Tests for the standings aggregator"""

from firstgoal.scoring import RewardCategory, ScoreBreakdown, ScoredPick, compute_standings

SHUTOUT = ScoreBreakdown.of([(RewardCategory.SHUTOUT, 5)])
DARKHORSE = ScoreBreakdown.of([(RewardCategory.DARKHORSE, 3), (RewardCategory.PLAY_TYPE, 1)])
REGULAR = ScoreBreakdown.of([(RewardCategory.REGULAR, 1)])
CAPPED = ScoreBreakdown.of(
    [
        (RewardCategory.DARKHORSE, 3),
        (RewardCategory.PLAY_TYPE, 3),
        (RewardCategory.BONUS_SCORER, 1),
        (RewardCategory.BONUS_PLAY_TYPE, 3),
    ]
)
MISS = ScoreBreakdown()


def picks_for(member_id, *breakdowns, season_id=1):
    return [ScoredPick(member_id, season_id, breakdown) for breakdown in breakdowns]


def test_totals_and_counters():
    picks = picks_for("amy", SHUTOUT, DARKHORSE, CAPPED, MISS, None)
    (row,) = compute_standings(picks)

    assert row.member_id == "amy"
    assert row.total_points == 5 + 4 + 8
    assert row.shutouts_correct == 1
    assert row.darkhorse_correct == 2
    assert row.games_participated == 5
    assert row.rank == 1


def test_shutouts_break_points_tie():
    # 10 / 10 / 8 with the leaders split 2 shutouts to 1
    picks = (
        picks_for("second", SHUTOUT, DARKHORSE, REGULAR)
        + picks_for("first", SHUTOUT, SHUTOUT)
        + picks_for("third", CAPPED)
    )
    rows = compute_standings(picks).rows()

    assert [row.member_id for row in rows] == ["first", "second", "third"]
    assert [row.total_points for row in rows] == [10, 10, 8]
    assert [row.rank for row in rows] == [1, 2, 3]


def test_darkhorse_then_games_break_remaining_ties():
    picks = (
        picks_for("fewer_games", DARKHORSE)
        + picks_for("no_darkhorse", REGULAR, REGULAR, REGULAR, REGULAR)
        + picks_for("more_games", DARKHORSE, MISS)
    )
    rows = compute_standings(picks).rows()

    assert [row.member_id for row in rows] == ["more_games", "fewer_games", "no_darkhorse"]


def test_full_tie_resolved_by_member_id_not_input_order():
    picks = picks_for("zed", REGULAR) + picks_for("abe", REGULAR) + picks_for("max", REGULAR)
    rows = compute_standings(picks).rows()
    reversed_rows = compute_standings(list(reversed(picks))).rows()

    assert [row.member_id for row in rows] == ["abe", "max", "zed"]
    assert rows == reversed_rows


def test_unscored_picks_count_only_as_participation():
    rows = compute_standings(picks_for("amy", None, None)).rows()

    assert rows[0].total_points == 0
    assert rows[0].games_participated == 2


def test_season_scope_filters_other_seasons():
    picks = picks_for("amy", SHUTOUT, season_id=1) + picks_for("bo", CAPPED, season_id=2)
    rows = compute_standings(picks, season_id=1).rows()

    assert [row.member_id for row in rows] == ["amy"]


def test_standings_can_be_iterated_repeatedly():
    standings = compute_standings(iter(picks_for("amy", SHUTOUT) + picks_for("bo", REGULAR)))

    first_pass = list(standings)
    second_pass = list(standings)

    assert first_pass == second_pass
    assert len(first_pass) == 2


def test_empty_input():
    assert compute_standings([]).rows() == []
