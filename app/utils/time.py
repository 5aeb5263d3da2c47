from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def utc_now_naive() -> datetime:
    """Return the current UTC time without tzinfo, as stored in DATETIME columns."""
    return utc_now().replace(tzinfo=None)
