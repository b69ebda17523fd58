"""
PILOT — Occurrence Expansion.

Recurring tasks, goals and AI-goal schedules are not calendar events
themselves; this module projects them onto concrete dates so they show up
in the month grid and the agenda alongside regular events.

No I/O: this module only transforms data.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Iterator

from pilot.core.ai_goals import end_date, week_for_date
from pilot.core.calendar_grid import GRID_CELLS, check_grid_month, leading_days
from pilot.data.models import (
    AIGoal,
    CalendarEvent,
    EventCategory,
    Goal,
    RecurringTask,
    minutes_to_time_str,
    time_str_to_minutes,
    weekday_of,
)

logger = logging.getLogger(__name__)

_LAST_MINUTE = 23 * 60 + 59
_GOAL_SLOT_MINUTES = 30


def _daterange(start: date, end: date) -> Iterator[date]:
    d = start
    while d <= end:
        yield d
        d += timedelta(days=1)


def _end_after(start_time: str, minutes: int) -> str:
    """start_time + minutes, clipped to 23:59 so the event stays same-day."""
    start = time_str_to_minutes(start_time)
    return minutes_to_time_str(min(start + minutes, _LAST_MINUTE))


def expand_recurring_task(task: RecurringTask, start: date, end: date) -> list[CalendarEvent]:
    """One `recurring` event per date in [start, end] falling on task.days."""
    if not task.is_active or end < start:
        return []
    days = set(task.days)
    events = [
        CalendarEvent(
            id=f"{task.id}:{d.isoformat()}",
            title=task.title,
            start_time=task.start_time,
            end_time=task.end_time,
            category=EventCategory.RECURRING,
            description=task.description or None,
            date=d.isoformat(),
            is_recurring=True,
        )
        for d in _daterange(start, end)
        if weekday_of(d) in days
    ]
    logger.debug("Recurring task %s: %d occurrences", task.id, len(events))
    return events


def goal_to_event(goal: Goal) -> CalendarEvent | None:
    """A `goal` event on the target date; None for goals set at 23:59."""
    if time_str_to_minutes(goal.target_time) >= _LAST_MINUTE:
        return None
    return CalendarEvent(
        id=f"goal:{goal.id}",
        title=goal.title,
        start_time=goal.target_time,
        end_time=_end_after(goal.target_time, _GOAL_SLOT_MINUTES),
        category=EventCategory.GOAL,
        description=goal.description or None,
        date=goal.target_date,
        is_goal=True,
        progress=100 if goal.is_completed else 0,
    )


def expand_ai_goal_schedule(goal: AIGoal, start: date, end: date) -> list[CalendarEvent]:
    """`ai-goal` sessions on the scheduled weekdays within the goal's weeks."""
    if not goal.is_active or time_str_to_minutes(goal.schedule.time) >= _LAST_MINUTE:
        return []
    first = max(start, date.fromisoformat(goal.start_date))
    last = min(end, end_date(goal))
    days = set(goal.schedule.days)
    finish = _end_after(goal.schedule.time, goal.daily_time_minutes)
    return [
        CalendarEvent(
            id=f"{goal.id}:{d.isoformat()}",
            title=goal.title,
            start_time=goal.schedule.time,
            end_time=finish,
            category=EventCategory.AI_GOAL,
            description=f"Semana {week_for_date(goal, d)} de {goal.duration}",
            date=d.isoformat(),
            is_ai_goal=True,
            progress=goal.progress,
        )
        for d in _daterange(first, last)
        if weekday_of(d) in days
    ]


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last visible dates of the 42-cell grid for (year, month)."""
    check_grid_month(year, month)
    first = date(year, month, 1) - timedelta(days=leading_days(year, month))
    return first, first + timedelta(days=GRID_CELLS - 1)


def collect_occurrences(
    tasks: list[RecurringTask],
    goals: list[Goal],
    ai_goals: list[AIGoal],
    start: date,
    end: date,
) -> list[CalendarEvent]:
    """All projected events in [start, end]: recurring, then goals, then AI goals."""
    events: list[CalendarEvent] = []
    for task in tasks:
        events.extend(expand_recurring_task(task, start, end))
    for goal in goals:
        ev = goal_to_event(goal)
        if ev is not None and start.isoformat() <= ev.date <= end.isoformat():
            events.append(ev)
    for ai_goal in ai_goals:
        events.extend(expand_ai_goal_schedule(ai_goal, start, end))
    return events
