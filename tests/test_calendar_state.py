"""Tests for pilot.core.calendar_state — selection, agenda and navigation."""

from datetime import date, datetime
from unittest.mock import patch

import pytest

from pilot.core.calendar_state import (
    CalendarState,
    MonthDirection,
    Tab,
    local_today,
    same_day,
    sort_by_start_time,
)
from pilot.data.models import RecurringTask


@pytest.fixture
def state(store, fixed_today):
    return CalendarState(store=store, today=fixed_today, sort_agenda=False)


@pytest.fixture
def seeded_state(state, make_event):
    state.store.events.add(make_event(id="1", date="2024-01-15", start_time="19:00", end_time="21:00"))
    state.store.events.add(make_event(id="2", date="2024-01-15", start_time="09:00", end_time="17:00"))
    state.store.events.add(make_event(id="3", date="2024-01-16", start_time="10:00", end_time="11:00"))
    return state


class TestInitialState:
    def test_starts_on_today(self, state):
        assert state.current_month == (2024, 1)
        assert state.selected_date == date(2024, 1, 15)
        assert state.active_tab is Tab.CALENDAR
        assert state.dark_mode is False

    def test_initial_date_overrides_today(self, store, fixed_today):
        s = CalendarState(store=store, today=fixed_today, initial=date(2023, 7, 4))
        assert s.current_month == (2023, 7)
        assert s.selected_date == date(2023, 7, 4)


class TestSelection:
    def test_select_replaces_selected_date(self, state):
        state.select_date(date(2024, 1, 20))
        assert state.selected_date == date(2024, 1, 20)

    def test_select_is_idempotent(self, state):
        state.select_date(date(2024, 1, 20))
        state.select_date(date(2024, 1, 20))
        assert state.selected_date == date(2024, 1, 20)

    def test_select_does_not_mutate_events(self, seeded_state):
        before = [e.model_dump() for e in seeded_state.store.events]
        seeded_state.select_date(date(2024, 1, 16))
        after = [e.model_dump() for e in seeded_state.store.events]
        assert before == after

    def test_select_datetime_keeps_only_date(self, state):
        state.select_date(datetime(2024, 1, 20, 23, 59))
        assert state.selected_date == date(2024, 1, 20)
        assert type(state.selected_date) is date

    def test_is_selected_compares_calendar_date(self, state):
        state.select_date(date(2024, 1, 20))
        assert state.is_selected(datetime(2024, 1, 20, 8, 30)) is True
        assert state.is_selected(date(2024, 1, 21)) is False


class TestIsToday:
    def test_today_true(self, state):
        assert state.is_today(date(2024, 1, 15)) is True

    def test_time_of_day_ignored(self, state):
        assert state.is_today(datetime(2024, 1, 15, 23, 59)) is True

    def test_other_day_false(self, state):
        assert state.is_today(date(2024, 1, 14)) is False
        assert state.is_today(date(2023, 1, 15)) is False

    def test_today_is_evaluated_at_call_time(self, store):
        days = iter([date(2024, 1, 15), date(2024, 1, 15), date(2024, 1, 16)])
        s = CalendarState(store=store, today=lambda: next(days))
        assert s.is_today(date(2024, 1, 15)) is True
        assert s.is_today(date(2024, 1, 15)) is False

    def test_independent_of_selection(self, state):
        state.select_date(date(2024, 1, 20))
        assert state.is_today(date(2024, 1, 15)) is True
        assert state.is_selected(date(2024, 1, 15)) is False


class TestAgenda:
    def test_selected_date_events_in_insertion_order(self, seeded_state):
        agenda = seeded_state.agenda()
        assert [e.id for e in agenda] == ["1", "2"]

    def test_agenda_for_explicit_date(self, seeded_state):
        assert [e.id for e in seeded_state.agenda(date(2024, 1, 16))] == ["3"]

    def test_empty_day(self, seeded_state):
        assert seeded_state.agenda(date(2024, 2, 1)) == []

    def test_sorted_by_start_time_on_request(self, seeded_state):
        agenda = seeded_state.agenda(sort_by_time=True)
        assert [e.id for e in agenda] == ["2", "1"]

    def test_sorting_enabled_by_constructor(self, store, fixed_today, make_event):
        s = CalendarState(store=store, today=fixed_today, sort_agenda=True)
        store.events.add(make_event(id="late", start_time="20:00", end_time="21:00"))
        store.events.add(make_event(id="early", start_time="08:00", end_time="09:00"))
        assert [e.id for e in s.agenda()] == ["early", "late"]

    def test_scenario_from_three_events(self, store, fixed_today, make_event):
        store.events.add(make_event(id="a", date="2024-01-15", start_time="09:00", end_time="10:00"))
        store.events.add(make_event(id="b", date="2024-01-15", start_time="19:00", end_time="20:00"))
        store.events.add(make_event(id="c", date="2024-01-16", start_time="10:00", end_time="11:00"))
        s = CalendarState(store=store, today=fixed_today, sort_agenda=False)
        s.select_date(date(2024, 1, 15))
        assert [e.id for e in s.agenda()] == ["a", "b"]

    def test_agenda_with_occurrences(self, state):
        state.store.recurring_tasks.add(RecurringTask(
            id="gym", title="Ginásio", start_time="18:00", end_time="19:00", days=["monday"],
        ))
        assert state.agenda() == []
        agenda = state.agenda(with_occurrences=True)
        assert [e.title for e in agenda] == ["Ginásio"]
        assert agenda[0].is_recurring is True

    def test_agenda_title_today(self, state):
        assert state.agenda_title() == "Hoje"

    def test_agenda_title_other_day(self, state):
        state.select_date(date(2024, 2, 3))
        assert state.agenda_title() == "03/02/2024"


class TestMonthNavigation:
    def test_next(self, state):
        assert state.navigate_month("next") == (2024, 2)

    def test_prev_rolls_back_year(self, state):
        assert state.navigate_month(MonthDirection.PREV) == (2023, 12)

    def test_december_next_then_prev(self, store, fixed_today):
        s = CalendarState(store=store, today=fixed_today, initial=date(2024, 12, 1))
        assert s.navigate_month("next") == (2025, 1)
        assert s.navigate_month("prev") == (2024, 12)

    @pytest.mark.parametrize("month", range(1, 13))
    def test_reversible_for_every_month(self, store, fixed_today, month):
        s = CalendarState(store=store, today=fixed_today, initial=date(2024, month, 1))
        s.navigate_month("next")
        s.navigate_month("prev")
        assert s.current_month == (2024, month)

    def test_navigation_keeps_selection_and_events(self, seeded_state):
        seeded_state.select_date(date(2024, 1, 20))
        count = len(seeded_state.store.events)
        seeded_state.navigate_month("next")
        assert seeded_state.selected_date == date(2024, 1, 20)
        assert len(seeded_state.store.events) == count

    def test_invalid_direction_raises(self, state):
        with pytest.raises(ValueError):
            state.navigate_month("sideways")

    def test_navigation_stops_at_first_supported_month(self, store, fixed_today):
        s = CalendarState(store=store, today=fixed_today, initial=date(1, 2, 10))
        with pytest.raises(ValueError):
            s.navigate_month("prev")
        assert s.current_month == (1, 2)

    def test_go_to_today(self, state):
        state.navigate_month("next")
        state.select_date(date(2024, 2, 10))
        state.go_to_today()
        assert state.current_month == (2024, 1)
        assert state.selected_date == date(2024, 1, 15)


class TestMonthGrid:
    def test_grid_follows_reference_month(self, seeded_state):
        seeded_state.navigate_month("next")
        cells = seeded_state.month_grid()
        assert len(cells) == 42
        assert seeded_state.title() == "Fevereiro 2024"
        assert any(c.date == date(2024, 2, 29) and c.is_current_month for c in cells)

    def test_grid_includes_stored_events(self, seeded_state):
        cells = seeded_state.month_grid()
        cell = next(c for c in cells if c.date == date(2024, 1, 15))
        assert [e.id for e in cell.events] == ["1", "2"]


class TestTabsAndTheme:
    def test_switch_tab(self, state):
        assert state.switch_tab("parties") is Tab.PARTIES
        assert state.switch_tab(Tab.PROFILE) is Tab.PROFILE

    def test_switch_tab_has_no_side_effects(self, seeded_state):
        seeded_state.switch_tab("friends")
        assert seeded_state.current_month == (2024, 1)
        assert seeded_state.selected_date == date(2024, 1, 15)

    def test_unknown_tab_raises(self, state):
        with pytest.raises(ValueError):
            state.switch_tab("settings")

    def test_toggle_dark_mode(self, state):
        assert state.toggle_dark_mode() is True
        assert state.toggle_dark_mode() is False


class TestHelpers:
    def test_same_day(self):
        assert same_day(date(2024, 1, 1), datetime(2024, 1, 1, 12)) is True
        assert same_day(date(2024, 1, 1), date(2024, 1, 2)) is False

    def test_sort_by_start_time_is_stable(self, make_event):
        a = make_event(id="a", start_time="09:00", end_time="10:00")
        b = make_event(id="b", start_time="08:00", end_time="09:00")
        c = make_event(id="c", start_time="09:00", end_time="11:00")
        assert [e.id for e in sort_by_start_time([a, b, c])] == ["b", "a", "c"]

    def test_local_today_uses_timezone(self):
        fake_now = datetime(2024, 3, 10, 12, 0)
        with patch("pilot.core.calendar_state.datetime") as mock_dt:
            mock_dt.now.return_value = fake_now
            assert local_today("Europe/Lisbon") == date(2024, 3, 10)
            mock_dt.now.assert_called_once()
