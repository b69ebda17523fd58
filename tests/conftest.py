"""Shared test fixtures and configuration.

Sets up fake environment variables so pilot.config doesn't sys.exit(),
and provides common fixtures like a session store and mocked ports.
"""

import os

# Patch env vars BEFORE any pilot imports
os.environ.setdefault("SUPABASE_URL", "https://fake-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "fake-anon-key-for-tests")
os.environ.setdefault("ADMIN_EMAILS", "admin@pilot.com,seu@email.com")
os.environ.setdefault("TIMEZONE", "Europe/Lisbon")

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture
def store():
    """Return an empty SessionStore."""
    from pilot.data.store import SessionStore
    return SessionStore()


@pytest.fixture
def make_event():
    """Factory for valid CalendarEvents with sensible defaults."""
    from pilot.data.models import CalendarEvent, EventCategory

    def _make(id="1", date="2024-01-15", start_time="09:00", end_time="10:00", **kwargs):
        kwargs.setdefault("title", f"Event {id}")
        kwargs.setdefault("category", EventCategory.WORK)
        return CalendarEvent(id=id, date=date, start_time=start_time, end_time=end_time, **kwargs)

    return _make


@pytest.fixture
def fixed_today():
    """A today() provider pinned to 2024-01-15."""
    return lambda: date(2024, 1, 15)


@pytest.fixture
def directory():
    d = MagicMock()
    d.list_users = AsyncMock(return_value=[])
    d.set_suspended = AsyncMock(return_value=None)
    d.delete_user = AsyncMock(return_value=None)
    return d


@pytest.fixture
def notifier():
    n = MagicMock()
    n.broadcast = AsyncMock(return_value=None)
    return n


@pytest.fixture
def stats_port():
    from pilot.data.models import UserStats
    s = MagicMock()
    s.fetch_stats = AsyncMock(return_value=UserStats(total_users=10, active_users_24h=3))
    return s
