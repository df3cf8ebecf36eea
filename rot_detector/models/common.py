from datetime import UTC, datetime


def _utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(UTC)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Treat naive timestamps as UTC so they can be compared with _utc_now()."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)
