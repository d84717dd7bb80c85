from datetime import datetime, timezone


def to_utc_iso(value: datetime) -> str:
    """Naive datetimes are taken to already be in UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def normalize_iso_timestamp(value: str) -> str:
    """
    Rewrites an ISO-8601 timestamp in UTC so stored timestamps sort correctly as strings.

    :raises ValueError: If `value` is not an ISO-8601 timestamp.
    """
    try:
        parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid ISO-8601 timestamp: {value!r}") from None
    return to_utc_iso(parsed)
