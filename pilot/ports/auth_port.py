"""Auth port — abstract interface for the hosted authentication service.

Core modules depend on this protocol, never on a specific provider.
"""

from __future__ import annotations

from typing import Protocol

from pilot.data.models import Session


class AuthError(Exception):
    """Raised when the authentication service cannot be reached or rejects a call."""


class AuthPort(Protocol):
    """Abstract authentication interface used by core modules."""

    async def get_session(self) -> Session | None: ...

    async def sign_out(self) -> None: ...
