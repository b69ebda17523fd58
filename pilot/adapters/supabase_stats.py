"""Supabase stats adapter — implements StatsPort with PostgREST count queries.

Each figure is an exact row count (`Prefer: count=exact`) read from the
Content-Range header, so no rows are transferred beyond the first.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

import httpx

from pilot.adapters.supabase_rest import SupabaseRest, parse_content_range_total
from pilot.data.models import UserStats
from pilot.ports.stats_port import StatsError

logger = logging.getLogger(__name__)


class SupabaseStatsAdapter:
    """Supabase implementation of StatsPort."""

    def __init__(self, rest: SupabaseRest) -> None:
        self._rest = rest

    async def _count(self, table: str, filters: dict[str, str] | None = None) -> int:
        params = {"select": "id", "limit": "1"}
        params.update(filters or {})
        resp = await self._rest.request(
            "GET", f"/rest/v1/{table}", params=params, prefer="count=exact",
        )
        return parse_content_range_total(resp.headers.get("content-range"))

    async def fetch_stats(self, now: datetime | None = None) -> UserStats:
        now = now or datetime.now(timezone.utc)

        def since(days: int) -> str:
            return f"gte.{(now - timedelta(days=days)).isoformat()}"

        try:
            total = await self._count("users")
            active_24h = await self._count("users", {"last_sign_in": since(1)})
            active_7d = await self._count("users", {"last_sign_in": since(7)})
            active_30d = await self._count("users", {"last_sign_in": since(30)})
            events_30d = await self._count("events", {"created_at": since(30)})
            ai_interactions = await self._count("ai_interactions")
        except (httpx.HTTPError, ValueError) as exc:
            raise StatsError(f"Failed to compute stats: {exc}") from exc

        logger.info("Stats fetched: %d users, %d active in 24h", total, active_24h)
        return UserStats(
            total_users=total,
            active_users_24h=active_24h,
            active_users_7d=active_7d,
            active_users_30d=active_30d,
            daily_active_users=active_24h,
            monthly_active_users=active_30d,
            events_created_30d=events_30d,
            ai_interactions=ai_interactions,
        )
