from datetime import datetime, timedelta, timezone
from typing import Optional

STALE_THRESHOLD = timedelta(hours=24)


def utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


def is_stale(last_synced_at: Optional[datetime], now: Optional[datetime] = None) -> bool:
    """ Prices are stale when never synced or synced more than 24h ago. """
    if last_synced_at is None:
        return True
    if last_synced_at.tzinfo is None:
        last_synced_at = last_synced_at.replace(tzinfo=timezone.utc)
    now = now or utcnow()
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now - last_synced_at > STALE_THRESHOLD
