"""UTC time helpers. Invoice dates and session timestamps are always UTC."""

from datetime import date, datetime, timezone


def now_utc() -> datetime:
    """Timezone-aware current time in UTC."""
    return datetime.now(timezone.utc)


def today_utc() -> date:
    """
    Current calendar date in UTC.

    New invoices are stamped with this; isoformat() gives YYYY-MM-DD.
    """
    return now_utc().date()


def to_utc(dt: datetime) -> datetime:
    """Normalize an aware datetime to UTC. Naive datetimes raise ValueError."""
    if dt.tzinfo is None:
        raise ValueError("Naive datetime has no timezone; cannot normalize to UTC")
    return dt.astimezone(timezone.utc)


def parse_iso(iso_string: str) -> datetime:
    """
    Parse an ISO 8601 timestamp as stored in session records.

    The string must carry an offset ('Z' or '+00:00'); the result is UTC.
    """
    dt = datetime.fromisoformat(iso_string)
    if dt.tzinfo is None:
        raise ValueError(f"Timestamp {iso_string!r} has no timezone offset")
    return to_utc(dt)
