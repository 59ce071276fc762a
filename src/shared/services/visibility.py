"""
Visibility Evaluator

One rule decides whether a profile or share link is reachable through its
public token:

    visible  ⇔  is_active AND (expires_at IS NULL OR expires_at > now)

`now` is read once when a request starts and passed down, so a single
request never straddles the expiry boundary.
"""

from datetime import datetime, timezone
from typing import Optional, Protocol


class Shareable(Protocol):
    is_active: bool
    expires_at: Optional[datetime]


def request_now() -> datetime:
    """The single timestamp a request evaluates visibility against."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes (SQLite returns these) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def is_expired(expires_at: Optional[datetime], now: datetime) -> bool:
    return expires_at is not None and as_utc(expires_at) <= as_utc(now)


def is_publicly_visible(entity: Shareable, now: datetime) -> bool:
    """
    Check whether an entity may be served on the public path.

    Args:
        entity: Profile or ShareLink
        now: Request timestamp from request_now()

    Returns:
        True when active and not yet expired
    """
    return bool(entity.is_active) and not is_expired(entity.expires_at, now)
