"""Thin async client for the Supabase REST surfaces (PostgREST + GoTrue).

Each call opens a short-lived httpx.AsyncClient with the configured timeout.
Transport errors and non-2xx responses are returned to the caller as
httpx exceptions; adapters wrap them into their port's error type.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class SupabaseRest:
    """Base URL, API key and optional user JWT for one session."""

    def __init__(
        self,
        url: str,
        anon_key: str,
        access_token: str | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._url = url.rstrip("/")
        self._anon_key = anon_key
        self._access_token = access_token
        self._timeout = timeout

    @classmethod
    def from_settings(cls, access_token: str | None = None) -> SupabaseRest:
        from pilot.config import settings

        return cls(
            url=settings.SUPABASE_URL,
            anon_key=settings.SUPABASE_ANON_KEY,
            access_token=access_token,
            timeout=settings.HTTP_TIMEOUT_SECONDS,
        )

    @property
    def access_token(self) -> str | None:
        return self._access_token

    def headers(self, prefer: str | None = None) -> dict[str, str]:
        bearer = self._access_token or self._anon_key
        headers = {
            "apikey": self._anon_key,
            "Authorization": f"Bearer {bearer}",
            "Content-Type": "application/json",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        prefer: str | None = None,
    ) -> httpx.Response:
        """Send one request; raises httpx.HTTPError on transport or HTTP failure."""
        url = f"{self._url}{path}"
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            resp = await client.request(
                method, url, params=params, json=json, headers=self.headers(prefer),
            )
            resp.raise_for_status()
        logger.debug("%s %s -> %d", method, path, resp.status_code)
        return resp


def parse_content_range_total(header: str | None) -> int:
    """Total row count from a PostgREST Content-Range header ("0-24/3573")."""
    if not header or "/" not in header:
        raise ValueError(f"Missing row count in Content-Range: {header!r}")
    total = header.rsplit("/", 1)[1]
    if total == "*":
        raise ValueError("Row count was not requested (Prefer: count=exact)")
    return int(total)
