"""Clock helpers. Every timestamp in the identity package is UTC-aware."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


def ensure_tz_aware(dt: datetime) -> datetime:
    """Attach UTC to values read back without tzinfo (SQLite drops it)."""
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)
