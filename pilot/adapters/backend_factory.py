"""Backend adapter factory — builds every port implementation for a session."""

from __future__ import annotations

from dataclasses import dataclass

from pilot.adapters.supabase_auth import SupabaseAuthAdapter
from pilot.adapters.supabase_directory import SupabaseDirectoryAdapter
from pilot.adapters.supabase_notifier import SupabaseNotifier
from pilot.adapters.supabase_rest import SupabaseRest
from pilot.adapters.supabase_stats import SupabaseStatsAdapter
from pilot.ports.auth_port import AuthPort
from pilot.ports.notification_port import NotificationPort
from pilot.ports.stats_port import StatsPort
from pilot.ports.user_directory_port import UserDirectoryPort


@dataclass
class Backend:
    auth: AuthPort
    directory: UserDirectoryPort
    notifier: NotificationPort
    stats: StatsPort


def create_backend(access_token: str | None = None) -> Backend:
    """Return Supabase adapters sharing one REST client.

    Args:
        access_token: The signed-in user's JWT; None means anonymous.
    """
    rest = SupabaseRest.from_settings(access_token=access_token)
    return Backend(
        auth=SupabaseAuthAdapter(rest),
        directory=SupabaseDirectoryAdapter(rest),
        notifier=SupabaseNotifier(rest),
        stats=SupabaseStatsAdapter(rest),
    )
