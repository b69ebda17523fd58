"""User directory port — abstract interface for the backend `users` table.

Core modules depend on this protocol, never on a specific backend.
"""

from __future__ import annotations

from typing import Protocol

from pilot.data.models import DirectoryUser


class DirectoryError(Exception):
    """Raised when any user directory operation fails."""


class UserDirectoryPort(Protocol):
    """Abstract user directory used by the admin dashboard."""

    async def list_users(self, limit: int) -> list[DirectoryUser]: ...

    async def set_suspended(self, user_id: str, suspended: bool) -> None: ...

    async def delete_user(self, user_id: str) -> None: ...
