"""
PILOT — Entry Point.

`python main.py` prints the current month and today's agenda.
`python main.py --admin --token <JWT>` prints the admin dashboard.
"""

import argparse
import asyncio
import logging
from datetime import date

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

from pilot.adapters.backend_factory import create_backend
from pilot.config import settings
from pilot.core.access import AdminPolicy, check_admin_access
from pilot.core.admin_service import AdminService, ResponseKind
from pilot.core.calendar_state import CalendarState
from pilot.data.models import CalendarEvent, EventCategory
from pilot.data.store import SessionStore
from pilot.ui.text_view import render_agenda, render_month, render_stats, render_users


def _demo_store() -> SessionStore:
    store = SessionStore()
    for ev in (
        CalendarEvent(id="1", title="Trabalho", start_time="09:00", end_time="17:00",
                      category=EventCategory.WORK, description="Reuniões e projetos",
                      date="2024-01-15"),
        CalendarEvent(id="2", title="Almoço", start_time="12:00", end_time="13:00",
                      category=EventCategory.MEALS, date="2024-01-15"),
        CalendarEvent(id="3", title="Gaming", start_time="19:00", end_time="21:00",
                      category=EventCategory.GAMING, description="Sessão de jogos",
                      date="2024-01-15", progress=75),
    ):
        store.events.add(ev)
    return store


def show_calendar(args: argparse.Namespace) -> None:
    store = _demo_store() if args.demo else SessionStore()
    state = CalendarState(store=store)
    if args.select:
        selected = date.fromisoformat(args.select)
        state.select_date(selected)
        state.year, state.month = selected.year, selected.month
    if args.month:
        year, month = (int(part) for part in args.month.split("-"))
        state.year, state.month = year, month
    print(render_month(state))
    print()
    print(render_agenda(state, with_occurrences=True))


async def show_admin(args: argparse.Namespace) -> int:
    backend = create_backend(access_token=args.token)
    decision = await check_admin_access(backend.auth, AdminPolicy.from_settings())
    if decision.redirect:
        print(f"Acesso negado, redirecionar para {decision.redirect}")
        return 1

    service = AdminService(
        backend.directory, backend.notifier, backend.stats,
        user_limit=settings.USER_LIST_LIMIT,
    )
    for response in await service.load_dashboard():
        if response.kind is ResponseKind.ERROR:
            print(response.message)
    print(render_stats(service.stats))
    print()
    print(render_users(service.filtered_users(args.search or "")))
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="PILOT calendar and admin views")
    parser.add_argument("--month", help="Reference month, YYYY-MM")
    parser.add_argument("--select", help="Selected date, YYYY-MM-DD")
    parser.add_argument("--demo", action="store_true", help="Load sample events")
    parser.add_argument("--admin", action="store_true", help="Show the admin dashboard")
    parser.add_argument("--token", help="Supabase access token (admin mode)")
    parser.add_argument("--search", help="Filter users by email or name (admin mode)")
    args = parser.parse_args()

    if args.admin:
        return asyncio.run(show_admin(args))
    show_calendar(args)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
