from __future__ import annotations

from datetime import UTC, datetime, timedelta

EPOCH = datetime.fromtimestamp(0, tz=UTC)


def to_unix_timestamp_safe(value: str | datetime | float | None) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return int(value)
    if isinstance(value, datetime):
        return int(value.timestamp())
    if isinstance(value, str):
        try:
            if value.endswith("Z"):
                value = value.replace("Z", "+00:00")
            dt = datetime.fromisoformat(value)
            return int(dt.timestamp())
        except ValueError:
            return None
    return None


def to_datetime_aware_safe(value: str | datetime | float | None) -> datetime | None:
    ts = to_unix_timestamp_safe(value)
    if ts is None:
        return None
    return datetime.fromtimestamp(ts, tz=UTC)


def utc_from_unix(value: str | datetime | float | None, *, default: datetime = EPOCH) -> datetime:
    """Like ``to_datetime_aware_safe`` but never ``None``; unknown times become ``default``."""
    dt = to_datetime_aware_safe(value)
    return default if dt is None else dt


def ensure_aware(value: datetime) -> datetime:
    """Naive datetimes are read as UTC."""
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


def days_ago(days: int, *, now: datetime | None = None) -> datetime:
    reference = ensure_aware(now) if now is not None else datetime.now(UTC)
    return reference - timedelta(days=days)
