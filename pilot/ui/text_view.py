"""Plain-text rendering of the calendar and admin views.

Used by the terminal entry point; every function returns a string and
prints nothing.
"""

from __future__ import annotations

from pilot.core.calendar_grid import DAY_NAMES, grid_weeks
from pilot.core.calendar_state import CalendarState
from pilot.data.models import CalendarEvent, DirectoryUser, EventCategory, UserStats

CATEGORY_ICONS = {
    EventCategory.WORK: "💼",
    EventCategory.LEISURE: "🎯",
    EventCategory.SLEEP: "😴",
    EventCategory.MEALS: "🍽️",
    EventCategory.GAMING: "🎮",
    EventCategory.SOCIAL: "🎉",
    EventCategory.RECURRING: "🔄",
    EventCategory.GOAL: "🎯",
    EventCategory.AI_GOAL: "🤖",
}

_CELL_WIDTH = 5


def render_month(state: CalendarState, with_occurrences: bool = False) -> str:
    """Month title, weekday header and six rows of day numbers.

    Markers: `[d]` today, `<d>` selected, `*` has events, `.` other month.
    """
    lines = [state.title(), "".join(name.center(_CELL_WIDTH) for name in DAY_NAMES)]
    for week in grid_weeks(state.month_grid(with_occurrences=with_occurrences)):
        row = []
        for cell in week:
            label = str(cell.date.day)
            if state.is_today(cell.date):
                label = f"[{label}]"
            elif state.is_selected(cell.date):
                label = f"<{label}>"
            if not cell.is_current_month:
                label = "." + label
            if cell.has_events:
                label += "*"
            row.append(label.center(_CELL_WIDTH))
        lines.append("".join(row))
    return "\n".join(lines)


def format_event(event: CalendarEvent) -> str:
    icon = CATEGORY_ICONS.get(event.category, "")
    line = f"{event.start_time} - {event.end_time}  {icon} {event.title}"
    if event.description:
        line += f": {event.description}"
    if event.progress is not None:
        line += f" (Progresso {event.progress}%)"
    return line


def render_agenda(state: CalendarState, with_occurrences: bool = False) -> str:
    events = state.agenda(with_occurrences=with_occurrences)
    lines = [state.agenda_title()]
    if not events:
        lines.append("Nenhum evento neste dia")
    else:
        lines.extend(format_event(ev) for ev in events)
    return "\n".join(lines)


def render_users(users: list[DirectoryUser]) -> str:
    if not users:
        return "Nenhum usuário"
    lines = []
    for u in users:
        name = u.full_name or "-"
        flag = " [suspenso]" if u.is_suspended else ""
        lines.append(f"{u.email:<32} {name:<24} Criado: {u.created_at[:10]}{flag}")
    return "\n".join(lines)


def render_stats(stats: UserStats) -> str:
    return "\n".join([
        f"Utilizadores Totais: {stats.total_users}",
        f"Ativos 24h: {stats.active_users_24h} (7d: {stats.active_users_7d}, 30d: {stats.active_users_30d})",
        f"DAU / MAU: {stats.daily_active_users} / {stats.monthly_active_users}",
        f"Eventos Criados (30d): {stats.events_created_30d}",
        f"Interações AI: {stats.ai_interactions}",
    ])
