"""
PILOT — Month Grid Generator.

Builds the fixed 6x7 grid shown by the calendar tab: leading days of the
previous month, every day of the requested month, then days of the next
month until 42 cells. The constant height keeps the grid from reflowing
between months.

No I/O: this module only transforms data.
"""

from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterable

from pilot.data.models import CalendarEvent

logger = logging.getLogger(__name__)

GRID_CELLS = 42
WEEK_LENGTH = 7

MONTH_NAMES = [
    "Janeiro", "Fevereiro", "Março", "Abril", "Maio", "Junho",
    "Julho", "Agosto", "Setembro", "Outubro", "Novembro", "Dezembro",
]

DAY_NAMES = ["Dom", "Seg", "Ter", "Qua", "Qui", "Sex", "Sáb"]


@dataclass
class DayCell:
    """One cell of the month grid."""

    date: date
    is_current_month: bool
    events: list[CalendarEvent] = field(default_factory=list)

    @property
    def has_events(self) -> bool:
        return bool(self.events)


def _check_month(month: int) -> None:
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be 1..12, got {month}")


# The grid pads into the neighbouring months, so the first and last months
# that date can represent are out of range.
FIRST_GRID_MONTH = (date.min.year, 2)
LAST_GRID_MONTH = (date.max.year, 11)


def check_grid_month(year: int, month: int) -> None:
    """Raise ValueError when (year, month) cannot be laid out as a full grid."""
    _check_month(month)
    if not FIRST_GRID_MONTH <= (year, month) <= LAST_GRID_MONTH:
        raise ValueError(
            f"{year}-{month:02d} is outside the supported range "
            f"{FIRST_GRID_MONTH[0]}-{FIRST_GRID_MONTH[1]:02d}..{LAST_GRID_MONTH[0]}-{LAST_GRID_MONTH[1]:02d}"
        )


def days_in_month(year: int, month: int) -> int:
    _check_month(month)
    return calendar.monthrange(year, month)[1]


def leading_days(year: int, month: int) -> int:
    """Number of previous-month cells before the 1st (Sunday-first columns)."""
    _check_month(month)
    return (date(year, month, 1).weekday() + 1) % 7


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move a (year, month) pair by delta months, rolling over years."""
    _check_month(month)
    index = year * 12 + (month - 1) + delta
    new_year, new_month = index // 12, index % 12 + 1
    if not date.min.year <= new_year <= date.max.year:
        raise ValueError(f"Shifting {year}-{month:02d} by {delta} leaves the supported years")
    return new_year, new_month


def group_by_date(events: Iterable[CalendarEvent]) -> dict[str, list[CalendarEvent]]:
    """Bucket events by their ISO date string, keeping insertion order."""
    buckets: dict[str, list[CalendarEvent]] = {}
    for ev in events:
        buckets.setdefault(ev.date, []).append(ev)
    return buckets


def build_month_grid(
    year: int, month: int, events: Iterable[CalendarEvent] = (),
) -> list[DayCell]:
    """Return the 42 cells for (year, month).

    Every cell carries the events whose `date` equals the cell's ISO date,
    including the adjacent-month cells.
    """
    check_grid_month(year, month)
    lead = leading_days(year, month)
    total = days_in_month(year, month)
    trailing = GRID_CELLS - (lead + total)
    if trailing < 0:
        raise ValueError(f"Month {year}-{month:02d} does not fit a {GRID_CELLS}-cell grid")

    by_date = group_by_date(events)
    first = date(year, month, 1)
    start = first - timedelta(days=lead)

    cells: list[DayCell] = []
    for offset in range(GRID_CELLS):
        d = start + timedelta(days=offset)
        cells.append(DayCell(
            date=d,
            is_current_month=(d.year == year and d.month == month),
            events=list(by_date.get(d.isoformat(), [])),
        ))

    logger.debug(
        "Grid %d-%02d: %d leading, %d days, %d trailing",
        year, month, lead, total, trailing,
    )
    return cells


def grid_weeks(cells: list[DayCell]) -> list[list[DayCell]]:
    """Split a flat grid into rows of seven."""
    return [cells[i:i + WEEK_LENGTH] for i in range(0, len(cells), WEEK_LENGTH)]


def month_title(year: int, month: int) -> str:
    """Header label, e.g. "Fevereiro 2024"."""
    _check_month(month)
    return f"{MONTH_NAMES[month - 1]} {year}"
