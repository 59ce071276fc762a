from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from src.shared.services.visibility import as_utc, is_expired, is_publicly_visible


@dataclass
class Entity:
    is_active: bool = True
    expires_at: Optional[datetime] = None


NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


def test_active_without_expiry_is_visible():
    assert is_publicly_visible(Entity(), NOW)


def test_inactive_is_hidden():
    assert not is_publicly_visible(Entity(is_active=False), NOW)


def test_future_expiry_is_visible():
    assert is_publicly_visible(Entity(expires_at=NOW + timedelta(seconds=1)), NOW)


def test_expiry_boundary_is_hidden():
    assert not is_publicly_visible(Entity(expires_at=NOW), NOW)
    assert not is_publicly_visible(Entity(expires_at=NOW - timedelta(seconds=1)), NOW)


def test_inactive_and_future_expiry_is_hidden():
    assert not is_publicly_visible(Entity(is_active=False, expires_at=NOW + timedelta(days=1)), NOW)


def test_naive_datetimes_are_treated_as_utc():
    naive = datetime(2025, 3, 1, 11, 0)
    assert as_utc(naive).tzinfo is timezone.utc
    assert is_expired(naive, NOW)
