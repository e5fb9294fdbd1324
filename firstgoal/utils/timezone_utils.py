"""
Timezone utility functions for the First Goal application
"""

from datetime import datetime, timezone

import pytz
from flask import current_app


def get_app_timezone():
    """Get the application's configured timezone"""
    try:
        timezone_name = current_app.config.get("TIMEZONE", "UTC")
        return pytz.timezone(timezone_name)
    except pytz.UnknownTimeZoneError:
        # Fallback to UTC if timezone is invalid
        return pytz.UTC


def get_utc_time():
    """Get current time in UTC"""
    return datetime.now(timezone.utc)


def ensure_utc(dt):
    """Attach UTC to naive datetimes read back from the database"""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def convert_to_app_timezone(dt):
    """Convert a datetime to the application's timezone"""
    if dt is None:
        return None
    return ensure_utc(dt).astimezone(get_app_timezone())


def convert_to_utc(dt):
    """Convert a datetime to UTC; naive values are taken as application time"""
    if dt is None:
        return None

    if dt.tzinfo is None:
        app_tz = get_app_timezone()
        dt = app_tz.localize(dt)

    return dt.astimezone(timezone.utc)


def format_deadline(dt, format_str=None):
    """Format a pick deadline in the application's timezone"""
    if dt is None:
        return "TBD"

    format_str = format_str or current_app.config.get(
        "DEADLINE_FORMAT", "%a %m/%d at %I:%M %p"
    )
    return convert_to_app_timezone(dt).strftime(format_str)
