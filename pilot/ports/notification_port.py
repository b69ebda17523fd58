"""Notification port — abstract interface for broadcasting messages to users.

Only the write is modelled; delivery is the backend's concern.
"""

from __future__ import annotations

from typing import Protocol


class NotificationError(Exception):
    """Raised when a notification cannot be recorded."""


class NotificationPort(Protocol):
    """Abstract notification interface used by core modules."""

    async def broadcast(self, title: str, message: str, created_at: str) -> None: ...
