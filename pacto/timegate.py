"""
Local-time helpers for the review window and the daily redemption cap.

Everything is evaluated in a fixed UTC-3 zone (no DST), against an instant
passed in by the caller. Naive datetimes are read as UTC.
"""

from datetime import date, datetime, timedelta, timezone


LOCAL_TZ = timezone(timedelta(hours=-3))

REVIEW_WINDOW_HOURS = (10, 16, 22)
REVIEW_WINDOW_MINUTES = 30


def to_local(instant: datetime) -> datetime:
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(LOCAL_TZ)


def local_date(instant: datetime) -> date:
    return to_local(instant).date()


def is_review_window(instant: datetime) -> bool:
    """True during 10:00-10:30, 16:00-16:30 and 22:00-22:30 local time."""
    local = to_local(instant)
    return local.hour in REVIEW_WINDOW_HOURS and local.minute < REVIEW_WINDOW_MINUTES


def is_same_local_day(timestamp: datetime, now: datetime) -> bool:
    # Both sides are converted to local time; a bare UTC date prefix would
    # misplace records made between 21:00 and midnight local.
    return local_date(timestamp) == local_date(now)
