from datetime import datetime, timezone


def utc_now() -> datetime:
    """Naive UTC timestamp, the convention used by every DateTime column."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
