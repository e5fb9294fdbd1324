"""Tests for pick validation"""

from datetime import datetime, timedelta, timezone

import pytest

from firstgoal.scoring import EventWindow, PickEntry, ValidationRejected, ensure_valid, validate

DEADLINE = datetime(2025, 10, 11, 2, 0, tzinfo=timezone.utc)
BEFORE = DEADLINE - timedelta(minutes=5)
EVENT = EventWindow(deadline=DEADLINE, ineligible_darkhorses=frozenset({"McCann"}))


def test_valid_pick():
    pick = PickEntry(regular_scorer="Beniers", darkhorse_scorer="Wright")
    assert validate(pick, EVENT, BEFORE) == (True, "Valid pick")


def test_rejects_at_deadline():
    pick = PickEntry(regular_scorer="Beniers")
    is_valid, reason = validate(pick, EVENT, DEADLINE)

    assert not is_valid
    assert reason == "Picks are closed for this game"


def test_rejects_after_deadline():
    pick = PickEntry(regular_scorer="Beniers")
    assert validate(pick, EVENT, DEADLINE + timedelta(seconds=1))[0] is False


def test_naive_now_is_treated_as_utc():
    pick = PickEntry(regular_scorer="Beniers")
    naive_after = DEADLINE.replace(tzinfo=None) + timedelta(minutes=1)
    assert validate(pick, EVENT, naive_after)[0] is False


def test_rejects_darkhorse_equal_to_regular():
    pick = PickEntry(regular_scorer="Beniers", darkhorse_scorer="Beniers")
    assert validate(pick, EVENT, BEFORE) == (
        False,
        "Darkhorse must differ from regular pick",
    )


def test_rejects_ineligible_darkhorse():
    pick = PickEntry(regular_scorer="Beniers", darkhorse_scorer="McCann")
    is_valid, reason = validate(pick, EVENT, BEFORE)

    assert not is_valid
    assert "McCann" in reason


def test_ineligible_player_may_still_be_regular_pick():
    pick = PickEntry(regular_scorer="McCann")
    assert validate(pick, EVENT, BEFORE)[0] is True


def test_rejects_missing_regular():
    pick = PickEntry(regular_scorer=None, is_shutout_call=True)
    assert validate(pick, EVENT, BEFORE) == (False, "A regular pick is required")


@pytest.mark.parametrize("field", ["play_type", "darkhorse_play_type"])
def test_rejects_play_type_outside_enum(field):
    pick = PickEntry(regular_scorer="Beniers", **{field: "sh"})
    is_valid, reason = validate(pick, EVENT, BEFORE)

    assert not is_valid
    assert reason == "Invalid play type: sh"


def test_ensure_valid_raises_with_reason():
    pick = PickEntry(regular_scorer="Beniers", darkhorse_scorer="Beniers")
    with pytest.raises(ValidationRejected) as excinfo:
        ensure_valid(pick, EVENT, BEFORE)
    assert excinfo.value.reason == "Darkhorse must differ from regular pick"


def test_ensure_valid_passes_silently():
    ensure_valid(PickEntry(regular_scorer="Beniers"), EVENT, BEFORE)
