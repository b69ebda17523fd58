"""
PILOT — Calendar View State.

Tracks the reference month shown by the grid, the selected day (distinct
from today), the active tab and the theme, and derives the month grid and
the selected day's agenda from the session's events.

State transitions here never touch the event collection.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from enum import Enum
from typing import Callable
from zoneinfo import ZoneInfo

from pilot.config import settings
from pilot.core.calendar_grid import (
    DayCell,
    build_month_grid,
    check_grid_month,
    month_title,
    shift_month,
)
from pilot.core.occurrences import collect_occurrences, month_bounds
from pilot.data.models import CalendarEvent, time_str_to_minutes
from pilot.data.store import SessionStore

logger = logging.getLogger(__name__)


class Tab(Enum):
    CALENDAR = "calendar"
    PARTIES = "parties"
    FRIENDS = "friends"
    PROFILE = "profile"


class MonthDirection(Enum):
    PREV = "prev"
    NEXT = "next"


def local_today(tz_name: str | None = None) -> date:
    """Today's date in the configured timezone, evaluated at call time."""
    return datetime.now(ZoneInfo(tz_name or settings.TIMEZONE)).date()


def same_day(a: date, b: date) -> bool:
    """Compare calendar dates only (datetimes are reduced to their date)."""
    if isinstance(a, datetime):
        a = a.date()
    if isinstance(b, datetime):
        b = b.date()
    return (a.year, a.month, a.day) == (b.year, b.month, b.day)


def sort_by_start_time(events: list[CalendarEvent]) -> list[CalendarEvent]:
    """Stable sort on start time; ties keep insertion order."""
    return sorted(events, key=lambda ev: time_str_to_minutes(ev.start_time) or 0)


class CalendarState:
    """The calendar tab's state machine-free view model."""

    def __init__(
        self,
        store: SessionStore | None = None,
        today: Callable[[], date] = local_today,
        initial: date | None = None,
        sort_agenda: bool | None = None,
    ) -> None:
        self.store = store if store is not None else SessionStore()
        self._today = today
        start = initial or today()
        self.year = start.year
        self.month = start.month
        self.selected_date = start
        self.active_tab = Tab.CALENDAR
        self.dark_mode = False
        self._sort_agenda = settings.SORT_AGENDA_BY_TIME if sort_agenda is None else sort_agenda

    # --- month navigation ---

    @property
    def current_month(self) -> tuple[int, int]:
        return self.year, self.month

    def navigate_month(self, direction: MonthDirection | str) -> tuple[int, int]:
        """Move the reference month by one; the selected date is untouched."""
        direction = MonthDirection(direction)
        delta = -1 if direction is MonthDirection.PREV else 1
        year, month = shift_month(self.year, self.month, delta)
        check_grid_month(year, month)
        self.year, self.month = year, month
        logger.debug("Navigated %s to %d-%02d", direction.value, self.year, self.month)
        return self.current_month

    def go_to_today(self) -> None:
        today = self._today()
        self.year, self.month = today.year, today.month
        self.selected_date = today

    # --- selection ---

    def select_date(self, d: date) -> date:
        if isinstance(d, datetime):
            d = d.date()
        self.selected_date = d
        return d

    def is_today(self, d: date) -> bool:
        return same_day(d, self._today())

    def is_selected(self, d: date) -> bool:
        return same_day(d, self.selected_date)

    # --- derived views ---

    def _events_between(self, start: date, end: date, with_occurrences: bool) -> list[CalendarEvent]:
        events = self.store.events.list_all()
        if with_occurrences:
            events += collect_occurrences(
                self.store.recurring_tasks.list_all(),
                self.store.goals.list_all(),
                self.store.ai_goals.list_all(),
                start,
                end,
            )
        return events

    def month_grid(self, with_occurrences: bool = False) -> list[DayCell]:
        """The 42-cell grid for the reference month.

        With occurrences, recurring tasks, goals and AI-goal sessions are
        projected onto the visible dates after the stored events.
        """
        start, end = month_bounds(self.year, self.month)
        events = self._events_between(start, end, with_occurrences)
        return build_month_grid(self.year, self.month, events)

    def title(self) -> str:
        return month_title(self.year, self.month)

    def agenda(
        self,
        d: date | None = None,
        sort_by_time: bool | None = None,
        with_occurrences: bool = False,
    ) -> list[CalendarEvent]:
        """Events on d (default: the selected date).

        Insertion order unless sorting by start time is requested here or
        enabled in settings.
        """
        target = d or self.selected_date
        if isinstance(target, datetime):
            target = target.date()
        iso = target.isoformat()
        events = [
            ev for ev in self._events_between(target, target, with_occurrences)
            if ev.date == iso
        ]
        sort = self._sort_agenda if sort_by_time is None else sort_by_time
        return sort_by_start_time(events) if sort else events

    def agenda_title(self) -> str:
        """Return 'Hoje' for today, otherwise the pt-PT short date."""
        if self.is_today(self.selected_date):
            return "Hoje"
        return self.selected_date.strftime("%d/%m/%Y")

    # --- tabs / theme ---

    def switch_tab(self, tab: Tab | str) -> Tab:
        self.active_tab = Tab(tab)
        return self.active_tab

    def toggle_dark_mode(self) -> bool:
        self.dark_mode = not self.dark_mode
        return self.dark_mode
