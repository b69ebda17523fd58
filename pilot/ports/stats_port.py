"""Stats port — usage statistics for the admin dashboard."""

from __future__ import annotations

from typing import Protocol

from pilot.data.models import UserStats


class StatsError(Exception):
    """Raised when statistics cannot be computed."""


class StatsPort(Protocol):
    async def fetch_stats(self) -> UserStats: ...
