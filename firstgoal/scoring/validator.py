"""
Pick validation

Structural checks applied to a pick before it is accepted or edited.
Membership and authorization are checked by the caller, not here.
"""

from datetime import datetime, timezone
from typing import Tuple

from .exceptions import ValidationRejected
from .types import EventWindow, PickEntry, PlayType


def _as_utc(dt: datetime) -> datetime:
    # Naive datetimes are stored in UTC
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def validate(pick: PickEntry, event: EventWindow, now: datetime) -> Tuple[bool, str]:
    """
    Validate a pick against the event it is submitted for.

    Returns:
        (True, "Valid pick") or (False, reason), where reason is safe to show
        to the submitting member verbatim.
    """
    if _as_utc(now) >= _as_utc(event.deadline):
        return False, "Picks are closed for this game"

    if not pick.regular_scorer:
        return False, "A regular pick is required"

    if pick.darkhorse_scorer:
        if pick.darkhorse_scorer == pick.regular_scorer:
            return False, "Darkhorse must differ from regular pick"
        if pick.darkhorse_scorer in event.ineligible_darkhorses:
            return False, f"{pick.darkhorse_scorer} is not eligible as a darkhorse"

    for value in (pick.play_type, pick.darkhorse_play_type):
        if PlayType.coerce(value) is None:
            return False, f"Invalid play type: {value}"

    return True, "Valid pick"


def ensure_valid(pick: PickEntry, event: EventWindow, now: datetime) -> None:
    """Like validate(), but raises ValidationRejected instead of returning False"""
    is_valid, reason = validate(pick, event, now)
    if not is_valid:
        raise ValidationRejected(reason)
