"""Supabase auth adapter — implements AuthPort over the GoTrue REST API."""

from __future__ import annotations

import logging

import httpx

from pilot.adapters.supabase_rest import SupabaseRest
from pilot.data.models import Session
from pilot.ports.auth_port import AuthError

logger = logging.getLogger(__name__)

_REJECTED = (401, 403)


class SupabaseAuthAdapter:
    """Supabase implementation of AuthPort for one access token."""

    def __init__(self, rest: SupabaseRest) -> None:
        self._rest = rest

    async def get_session(self) -> Session | None:
        """Return the session for the current token, None if absent or expired."""
        token = self._rest.access_token
        if not token:
            return None
        try:
            resp = await self._rest.request("GET", "/auth/v1/user")
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code in _REJECTED:
                logger.info("Access token rejected (%d)", exc.response.status_code)
                return None
            raise AuthError(f"Auth service error: {exc}") from exc
        except httpx.HTTPError as exc:
            raise AuthError(f"Auth service unreachable: {exc}") from exc

        try:
            user = resp.json()
        except ValueError as exc:
            raise AuthError(f"Auth service returned a non-JSON body: {exc}") from exc
        if not isinstance(user, dict):
            raise AuthError(f"Unexpected user payload: {type(user).__name__}")
        return Session(
            email=user.get("email") or "",
            access_token=token,
            user_id=user.get("id") or "",
        )

    async def sign_out(self) -> None:
        if not self._rest.access_token:
            return
        try:
            await self._rest.request("POST", "/auth/v1/logout")
        except httpx.HTTPError as exc:
            raise AuthError(f"Sign-out failed: {exc}") from exc
        logger.info("Signed out")
