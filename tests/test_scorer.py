"""Tests for the pick scorer"""

import pytest

from firstgoal.scoring import (
    GameResult,
    InvalidResult,
    PickEntry,
    PlayType,
    RewardCategory,
    ScoreBreakdown,
    score,
)

ES = PlayType.EVEN_STRENGTH
PP = PlayType.POWER_PLAY
PK = PlayType.PENALTY_KILL


def goals(first, first_type, second=None, second_type=None):
    return GameResult(
        is_shutout=False,
        first_scorer=first,
        first_play_type=first_type,
        second_scorer=second,
        second_play_type=second_type,
    )


SHUTOUT = GameResult(is_shutout=True)


def test_shutout_called_and_shutout_result():
    pick = PickEntry(regular_scorer="Beniers", is_shutout_call=True)
    breakdown = score(pick, SHUTOUT)

    assert breakdown.to_dict() == {"shutout": 5}
    assert breakdown.total == 5


def test_shutout_call_ignores_scorer_fields():
    pick = PickEntry(
        regular_scorer="Beniers",
        darkhorse_scorer="Wright",
        is_shutout_call=True,
        play_type=PK,
    )
    assert score(pick, SHUTOUT).to_dict() == {"shutout": 5}


def test_shutout_result_without_call_scores_nothing():
    pick = PickEntry(regular_scorer="Beniers")
    breakdown = score(pick, SHUTOUT)

    assert breakdown.to_dict() == {}
    assert breakdown.total == 0


def test_shutout_called_but_goals_scored():
    pick = PickEntry(regular_scorer="Beniers", is_shutout_call=True)
    breakdown = score(pick, goals("Eberle", ES))

    assert breakdown.to_dict() == {}
    assert breakdown.total == 0


def test_shutout_result_ignores_garbage_scorer_fields():
    result = GameResult(is_shutout=True, first_play_type="xx")
    pick = PickEntry(regular_scorer="Beniers", is_shutout_call=True)
    assert score(pick, result).total == 5


def test_darkhorse_hit_with_matching_play_type():
    pick = PickEntry(
        regular_scorer="Beniers", darkhorse_scorer="Wright", darkhorse_play_type=PP
    )
    breakdown = score(pick, goals("Wright", PP))

    assert breakdown.to_dict() == {"darkhorse": 3, "playType": 1}
    assert breakdown.total == 4


def test_darkhorse_play_type_mismatch_forfeits_bonus():
    # The regular pick's play type is not consulted for the first goal
    pick = PickEntry(
        regular_scorer="Beniers",
        darkhorse_scorer="Wright",
        play_type=PP,
        darkhorse_play_type=ES,
    )
    assert score(pick, goals("Wright", PP)).to_dict() == {"darkhorse": 3}


def test_full_darkhorse_stack_is_capped():
    pick = PickEntry(
        regular_scorer="Beniers",
        darkhorse_scorer="Wright",
        play_type=PK,
        darkhorse_play_type=PK,
    )
    breakdown = score(pick, goals("Wright", PK, "Beniers", PK))

    assert breakdown.to_dict() == {
        "darkhorse": 3,
        "playType": 3,
        "bonusScorer": 1,
        "bonusPlayType": 3,
    }
    assert breakdown.raw_total == 10
    assert breakdown.total == 8


def test_bonus_scorer_without_matching_play_type():
    pick = PickEntry(
        regular_scorer="Beniers",
        darkhorse_scorer="Wright",
        play_type=ES,
        darkhorse_play_type=ES,
    )
    breakdown = score(pick, goals("Wright", ES, "Beniers", PP))

    assert breakdown.to_dict() == {"darkhorse": 3, "playType": 1, "bonusScorer": 1}
    assert breakdown.total == 5


def test_bonus_play_type_needs_second_play_type():
    pick = PickEntry(regular_scorer="Beniers", darkhorse_scorer="Wright")
    breakdown = score(pick, goals("Wright", ES, "Beniers", None))

    assert not breakdown.has(RewardCategory.BONUS_PLAY_TYPE)
    assert breakdown.has(RewardCategory.BONUS_SCORER)


def test_regular_hit_with_play_type_mismatch():
    pick = PickEntry(regular_scorer="Beniers", play_type=PP)
    breakdown = score(pick, goals("Beniers", ES))

    assert breakdown.to_dict() == {"regular": 1}
    assert breakdown.total == 1


def test_regular_hit_on_penalty_kill():
    pick = PickEntry(regular_scorer="Beniers", play_type=PK)
    assert score(pick, goals("Beniers", PK)).to_dict() == {"regular": 1, "playType": 3}


def test_second_goal_bonus_not_reachable_from_regular_hit():
    pick = PickEntry(regular_scorer="Beniers", darkhorse_scorer="Wright")
    breakdown = score(pick, goals("Beniers", ES, "Wright", ES))

    assert breakdown.to_dict() == {"regular": 1, "playType": 1}


def test_no_match_scores_zero_regardless_of_second_scorer():
    pick = PickEntry(regular_scorer="Beniers", darkhorse_scorer="Wright")
    breakdown = score(pick, goals("Eberle", ES, "Beniers", ES))

    assert breakdown.to_dict() == {}
    assert breakdown.total == 0


def test_darkhorse_takes_precedence_over_regular():
    # Corrupt pick with both fields equal must not double-credit the first goal
    pick = PickEntry(regular_scorer="Wright", darkhorse_scorer="Wright")
    breakdown = score(pick, goals("Wright", ES))

    assert breakdown.has(RewardCategory.DARKHORSE)
    assert not breakdown.has(RewardCategory.REGULAR)


def test_plain_string_play_types_are_accepted():
    pick = PickEntry(regular_scorer="Beniers", play_type="pp")
    assert score(pick, goals("Beniers", "pp")).to_dict() == {"regular": 1, "playType": 1}


def test_scoring_is_repeatable():
    pick = PickEntry(
        regular_scorer="Beniers", darkhorse_scorer="Wright", darkhorse_play_type=PK
    )
    result = goals("Wright", PK, "Beniers", ES)
    assert score(pick, result) == score(pick, result)


@pytest.mark.parametrize(
    "result",
    [
        GameResult(is_shutout=False, first_scorer=None, first_play_type=ES),
        GameResult(is_shutout=False, first_scorer="Wright", first_play_type=None),
        GameResult(is_shutout=False, first_scorer="Wright", first_play_type="xx"),
        GameResult(
            is_shutout=False,
            first_scorer="Wright",
            first_play_type=ES,
            second_scorer="Beniers",
            second_play_type="bogus",
        ),
    ],
)
def test_malformed_result_raises(result):
    with pytest.raises(InvalidResult):
        score(PickEntry(regular_scorer="Beniers"), result)


def test_total_never_exceeds_cap():
    names = ["Beniers", "Wright", "Eberle"]
    play_types = list(PlayType)
    for first in names:
        for second in names + [None]:
            for first_type in play_types:
                for second_type in play_types:
                    result = goals(first, first_type, second, second_type)
                    for pt in play_types:
                        pick = PickEntry(
                            regular_scorer="Beniers",
                            darkhorse_scorer="Wright",
                            play_type=pt,
                            darkhorse_play_type=pt,
                        )
                        assert 0 <= score(pick, result).total <= 8


def test_breakdown_round_trips_through_stored_form():
    stored = {"darkhorse": 3, "playType": 3}
    breakdown = ScoreBreakdown.from_dict(stored)

    assert breakdown.points(RewardCategory.DARKHORSE) == 3
    assert breakdown.points(RewardCategory.REGULAR) == 0
    assert breakdown.to_dict() == stored


def test_breakdown_rejects_unknown_category():
    with pytest.raises(ValueError):
        ScoreBreakdown.from_dict({"hatTrick": 10})
