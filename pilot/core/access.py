"""
PILOT — Access Gate.

Decides where a visitor goes: to the login entry point when there is no
session, back to the main area when a non-admin opens the admin dashboard.

The admin allow-list is a presentation gate only. It must never stand in
for server-side authorization: the backend enforces its own policies.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

from pilot.ports.auth_port import AuthError

if TYPE_CHECKING:
    from pilot.ports.auth_port import AuthPort

logger = logging.getLogger(__name__)

LOGIN_ROUTE = "/login"
HOME_ROUTE = "/"
ADMIN_ROUTE = "/admin"


class AdminPolicy:
    """Membership test against a configured set of admin emails."""

    def __init__(self, emails: Iterable[str]) -> None:
        self._emails = frozenset(e.strip().lower() for e in emails if e.strip())

    @classmethod
    def from_settings(cls) -> AdminPolicy:
        from pilot.config import settings

        return cls(settings.ADMIN_EMAILS)

    def is_admin(self, email: str | None) -> bool:
        if not email:
            return False
        return email.strip().lower() in self._emails


@dataclass
class AccessDecision:
    """Outcome of an access check. `redirect` is None when access is granted."""

    authenticated: bool
    email: str = ""
    is_admin: bool = False
    redirect: str | None = None


async def check_main_access(auth: AuthPort, policy: AdminPolicy | None = None) -> AccessDecision:
    """Gate for the main area: any authenticated user.

    Re-derived on every load; nothing is cached locally.
    """
    try:
        session = await auth.get_session()
    except AuthError as exc:
        logger.error("Error checking auth: %s", exc)
        return AccessDecision(authenticated=False, redirect=LOGIN_ROUTE)

    if session is None:
        return AccessDecision(authenticated=False, redirect=LOGIN_ROUTE)

    email = session.email or ""
    is_admin = policy.is_admin(email) if policy is not None else False
    return AccessDecision(authenticated=True, email=email, is_admin=is_admin)


async def check_admin_access(auth: AuthPort, policy: AdminPolicy) -> AccessDecision:
    """Gate for the admin dashboard: authenticated and on the allow-list."""
    decision = await check_main_access(auth, policy)
    if not decision.authenticated:
        return decision
    if not decision.is_admin:
        logger.warning("Non-admin %s tried to open the admin dashboard", decision.email)
        decision.redirect = HOME_ROUTE
    return decision


async def handle_auth_callback(auth: AuthPort) -> str:
    """Route after the provider's login callback."""
    try:
        session = await auth.get_session()
    except AuthError as exc:
        logger.error("Auth callback failed: %s", exc)
        return LOGIN_ROUTE
    return HOME_ROUTE if session is not None else LOGIN_ROUTE


async def sign_out(auth: AuthPort) -> str:
    """End the session and return the login route.

    A failing sign-out is logged; the user is sent to login either way.
    """
    try:
        await auth.sign_out()
    except AuthError as exc:
        logger.error("Sign-out failed: %s", exc)
    return LOGIN_ROUTE
