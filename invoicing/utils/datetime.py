# invoicing/utils/datetime.py
from __future__ import annotations

from datetime import UTC, datetime


def utcnow() -> datetime:
    return datetime.now(UTC)


def as_utc(dt: datetime | None) -> datetime | None:
    """Normalise to an aware UTC datetime; naive values are taken as UTC."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        # Some drivers (SQLite) hand back naive values for UTC columns
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def to_iso(dt: datetime | None) -> str | None:
    dt = as_utc(dt)
    if dt is None:
        return None
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")
