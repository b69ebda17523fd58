"""
PILOT — Admin Dashboard Service.

UI-agnostic service behind the admin dashboard: user list, suspension,
deletion, global notifications and usage statistics.

Every backend failure is caught here, logged, and turned into an
ErrorResponse carrying a user-facing message; the previously displayed
state stays as it was. Successful mutations are followed by a full reload
of the user list rather than a local patch, so the list is always the
snapshot of the last successful fetch. Nothing is retried.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import TYPE_CHECKING

from pilot.data.models import DirectoryUser, UserStats
from pilot.ports.notification_port import NotificationError
from pilot.ports.stats_port import StatsError
from pilot.ports.user_directory_port import DirectoryError

if TYPE_CHECKING:
    from pilot.ports.notification_port import NotificationPort
    from pilot.ports.stats_port import StatsPort
    from pilot.ports.user_directory_port import UserDirectoryPort

logger = logging.getLogger(__name__)

DEFAULT_USER_LIMIT = 50

MSG_SUSPEND_OK = "Usuário suspenso com sucesso!"
MSG_SUSPEND_FAIL = "Erro ao suspender usuário"
MSG_DELETE_CONFIRM = "Tem certeza que deseja apagar este usuário? Esta ação não pode ser desfeita."
MSG_DELETE_OK = "Usuário apagado com sucesso!"
MSG_DELETE_FAIL = "Erro ao apagar usuário"
MSG_DELETE_CANCELLED = "Operação cancelada"
MSG_NOTIFY_MISSING = "Preencha todos os campos"
MSG_NOTIFY_OK = "Notificação enviada com sucesso!"
MSG_NOTIFY_FAIL = "Erro ao enviar notificação"
MSG_LOAD_USERS_FAIL = "Erro ao carregar usuários"
MSG_LOAD_STATS_FAIL = "Erro ao carregar estatísticas"


# ---------------------------------------------------------------------------
# Response types
# ---------------------------------------------------------------------------


class ResponseKind(Enum):
    SUCCESS = "success"
    ERROR = "error"
    CONFIRM_PROMPT = "confirm_prompt"
    NO_ACTION = "no_action"


@dataclass
class PendingDelete:
    user_id: str
    email: str = ""


@dataclass
class ServiceResponse:
    kind: ResponseKind
    message: str


@dataclass
class SuccessResponse(ServiceResponse):
    pass


@dataclass
class ErrorResponse(ServiceResponse):
    pass


@dataclass
class NoActionResponse(ServiceResponse):
    pass


@dataclass
class ConfirmPromptResponse(ServiceResponse):
    pending: PendingDelete | None = None


@dataclass
class UsersResponse(ServiceResponse):
    users: list[DirectoryUser] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Sample data
# ---------------------------------------------------------------------------


def sample_users(now: datetime | None = None) -> list[DirectoryUser]:
    """The two placeholder users shown by early builds of the dashboard."""
    now = now or datetime.now(timezone.utc)
    return [
        DirectoryUser(
            id="1",
            email="user1@example.com",
            full_name="João Silva",
            created_at=now.isoformat(),
            last_sign_in=now.isoformat(),
        ),
        DirectoryUser(
            id="2",
            email="user2@example.com",
            full_name="Maria Santos",
            created_at=(now - timedelta(days=1)).isoformat(),
            last_sign_in=now.isoformat(),
        ),
    ]


def filter_users(users: list[DirectoryUser], term: str) -> list[DirectoryUser]:
    """Case-insensitive substring match on email or full name."""
    needle = term.strip().lower()
    if not needle:
        return list(users)
    return [
        u for u in users
        if needle in u.email.lower() or (u.full_name and needle in u.full_name.lower())
    ]


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class AdminService:
    """Orchestrates admin dashboard operations over injected ports."""

    def __init__(
        self,
        directory: UserDirectoryPort,
        notifier: NotificationPort,
        stats: StatsPort,
        user_limit: int = DEFAULT_USER_LIMIT,
    ) -> None:
        self._directory = directory
        self._notifier = notifier
        self._stats = stats
        self._user_limit = user_limit
        self.users: list[DirectoryUser] = []
        self.stats = UserStats()

    # --- users ---

    async def load_users(self) -> ServiceResponse:
        """Replace the user snapshot with a fresh fetch.

        An empty result is shown as empty; sample data only comes from
        seed_sample_users().
        """
        try:
            users = await self._directory.list_users(self._user_limit)
        except DirectoryError as exc:
            logger.error("Error loading users: %s", exc)
            return ErrorResponse(kind=ResponseKind.ERROR, message=MSG_LOAD_USERS_FAIL)

        self.users = list(users)
        logger.info("Loaded %d users", len(self.users))
        return UsersResponse(
            kind=ResponseKind.SUCCESS,
            message=f"{len(self.users)} usuários",
            users=self.users,
        )

    def seed_sample_users(self) -> list[DirectoryUser]:
        """Fill the snapshot with placeholder users, for demos only."""
        self.users = sample_users()
        logger.info("Seeded %d sample users", len(self.users))
        return self.users

    def filtered_users(self, term: str) -> list[DirectoryUser]:
        return filter_users(self.users, term)

    async def suspend_user(self, user_id: str) -> ServiceResponse:
        try:
            await self._directory.set_suspended(user_id, True)
        except DirectoryError as exc:
            logger.error("Error suspending user %s: %s", user_id, exc)
            return ErrorResponse(kind=ResponseKind.ERROR, message=MSG_SUSPEND_FAIL)

        logger.info("User %s suspended", user_id)
        await self.load_users()
        return SuccessResponse(kind=ResponseKind.SUCCESS, message=MSG_SUSPEND_OK)

    def request_delete_user(self, user_id: str) -> ConfirmPromptResponse:
        """First step of a deletion: ask for confirmation, issue nothing."""
        email = next((u.email for u in self.users if u.id == user_id), "")
        return ConfirmPromptResponse(
            kind=ResponseKind.CONFIRM_PROMPT,
            message=MSG_DELETE_CONFIRM,
            pending=PendingDelete(user_id=user_id, email=email),
        )

    async def confirm_delete_user(self, pending: PendingDelete, confirmed: bool) -> ServiceResponse:
        """Second step: delete only when the user confirmed."""
        if not confirmed:
            return NoActionResponse(kind=ResponseKind.NO_ACTION, message=MSG_DELETE_CANCELLED)

        try:
            await self._directory.delete_user(pending.user_id)
        except DirectoryError as exc:
            logger.error("Error deleting user %s: %s", pending.user_id, exc)
            return ErrorResponse(kind=ResponseKind.ERROR, message=MSG_DELETE_FAIL)

        logger.info("User %s deleted", pending.user_id)
        await self.load_users()
        return SuccessResponse(kind=ResponseKind.SUCCESS, message=MSG_DELETE_OK)

    # --- notifications ---

    async def send_notification(
        self, title: str, message: str, now: datetime | None = None,
    ) -> ServiceResponse:
        if not title.strip() or not message.strip():
            return ErrorResponse(kind=ResponseKind.ERROR, message=MSG_NOTIFY_MISSING)

        created_at = (now or datetime.now(timezone.utc)).isoformat()
        try:
            await self._notifier.broadcast(title.strip(), message.strip(), created_at)
        except NotificationError as exc:
            logger.error("Error sending notification: %s", exc)
            return ErrorResponse(kind=ResponseKind.ERROR, message=MSG_NOTIFY_FAIL)

        logger.info("Global notification sent: %s", title.strip())
        return SuccessResponse(kind=ResponseKind.SUCCESS, message=MSG_NOTIFY_OK)

    # --- stats ---

    async def load_stats(self) -> ServiceResponse:
        try:
            stats = await self._stats.fetch_stats()
        except StatsError as exc:
            logger.error("Error loading stats: %s", exc)
            return ErrorResponse(kind=ResponseKind.ERROR, message=MSG_LOAD_STATS_FAIL)

        self.stats = stats
        return SuccessResponse(kind=ResponseKind.SUCCESS, message="OK")

    async def load_dashboard(self) -> list[ServiceResponse]:
        """Initial load: stats then users, each failing independently."""
        return [await self.load_stats(), await self.load_users()]
