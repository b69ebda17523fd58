"""Supabase user directory adapter — implements UserDirectoryPort.

Reads and mutates the `users` table through PostgREST.
"""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from pilot.adapters.supabase_rest import SupabaseRest
from pilot.data.models import DirectoryUser
from pilot.ports.user_directory_port import DirectoryError

logger = logging.getLogger(__name__)

_TABLE = "/rest/v1/users"


class SupabaseDirectoryAdapter:
    """Supabase implementation of UserDirectoryPort."""

    def __init__(self, rest: SupabaseRest) -> None:
        self._rest = rest

    async def list_users(self, limit: int) -> list[DirectoryUser]:
        """Newest users first, at most `limit` rows."""
        try:
            resp = await self._rest.request(
                "GET",
                _TABLE,
                params={"select": "*", "order": "created_at.desc", "limit": str(limit)},
            )
            rows = resp.json() or []
            if not isinstance(rows, list):
                raise DirectoryError(f"Expected a list of users, got {type(rows).__name__}")
            return [DirectoryUser.model_validate(row) for row in rows]
        except httpx.HTTPError as exc:
            raise DirectoryError(f"Failed to list users: {exc}") from exc
        except ValidationError as exc:
            raise DirectoryError(f"Malformed user row: {exc}") from exc
        except ValueError as exc:
            raise DirectoryError(f"Users response is not JSON: {exc}") from exc

    async def set_suspended(self, user_id: str, suspended: bool) -> None:
        try:
            await self._rest.request(
                "PATCH",
                _TABLE,
                params={"id": f"eq.{user_id}"},
                json={"is_suspended": suspended},
            )
        except httpx.HTTPError as exc:
            raise DirectoryError(f"Failed to update user {user_id}: {exc}") from exc

    async def delete_user(self, user_id: str) -> None:
        try:
            await self._rest.request("DELETE", _TABLE, params={"id": f"eq.{user_id}"})
        except httpx.HTTPError as exc:
            raise DirectoryError(f"Failed to delete user {user_id}: {exc}") from exc
