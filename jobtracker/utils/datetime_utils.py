from datetime import datetime, timezone


def utc_now() -> datetime:
    """Get current timezone-aware datetime in UTC"""
    return datetime.now(timezone.utc)


def to_utc(dt: datetime) -> datetime:
    """Convert an aware datetime to UTC or localize a naive one (Mongo returns naive UTC)"""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
