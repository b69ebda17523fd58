"""Supabase notification adapter — implements NotificationPort.

Writes a global record to the `notifications` table; delivery to devices
is outside this application.
"""

from __future__ import annotations

import httpx

from pilot.adapters.supabase_rest import SupabaseRest
from pilot.ports.notification_port import NotificationError


class SupabaseNotifier:
    """Supabase implementation of NotificationPort."""

    def __init__(self, rest: SupabaseRest) -> None:
        self._rest = rest

    async def broadcast(self, title: str, message: str, created_at: str) -> None:
        try:
            await self._rest.request(
                "POST",
                "/rest/v1/notifications",
                json={
                    "title": title,
                    "message": message,
                    "created_at": created_at,
                    "is_global": True,
                },
                prefer="return=minimal",
            )
        except httpx.HTTPError as exc:
            raise NotificationError(f"Failed to insert notification: {exc}") from exc
