"""Time helpers for due-date and event-time comparisons.

Entity timestamps may arrive naive (stored as local wall time without an
offset). Naive values are read as local time, so they share a frame with
the aware UTC search clock. Calendar-day filters compare local days.
"""

from datetime import UTC, date, datetime


def utc_now() -> datetime:
    """Current time as an aware UTC datetime (default search clock)."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Return dt as an aware UTC datetime.

    Naive values are interpreted as local wall time, aware values are
    converted, None passes through.
    """
    if dt is None:
        return None
    return dt.astimezone(UTC)


def to_local(dt: datetime | None) -> datetime | None:
    """Return dt as an aware datetime in the local timezone (naive = local)."""
    if dt is None:
        return None
    return dt.astimezone()


def local_date(dt: datetime | None) -> date | None:
    """Local calendar day of dt, or None."""
    value = to_local(dt)
    return value.date() if value is not None else None
