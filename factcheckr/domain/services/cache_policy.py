"""Freshness rule for cached verdicts, analyses and digests."""

from datetime import datetime, timedelta, timezone
from typing import Optional


def is_fresh(created_at: datetime, ttl_seconds: Optional[float], now: Optional[datetime] = None) -> bool:
    """Whether a stored record may still be served.

    A ``ttl_seconds`` of None means records never expire. Naive timestamps
    are taken to be UTC.
    """
    if ttl_seconds is None:
        return True
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    return now - created_at <= timedelta(seconds=ttl_seconds)
