from datetime import UTC, datetime


def utcnow() -> datetime:
    """Current UTC time as a naive datetime (DateTime columns store naive UTC)."""
    return datetime.now(UTC).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)
