"""Tests for pilot.ui.text_view — terminal rendering."""

from datetime import date

import pytest

from pilot.core.calendar_state import CalendarState
from pilot.data.models import DirectoryUser, EventCategory, UserStats
from pilot.ui.text_view import (
    format_event,
    render_agenda,
    render_month,
    render_stats,
    render_users,
)


@pytest.fixture
def state(store, fixed_today, make_event):
    store.events.add(make_event(id="1", date="2024-01-15", title="Trabalho"))
    store.events.add(make_event(id="2", date="2024-01-20", start_time="20:00", end_time="23:00",
                                title="Jantar", category=EventCategory.SOCIAL))
    return CalendarState(store=store, today=fixed_today, sort_agenda=False)


class TestRenderMonth:
    def test_title_header_and_six_weeks(self, state):
        lines = render_month(state).splitlines()
        assert lines[0] == "Janeiro 2024"
        assert len(lines) == 8

    def test_markers(self, state):
        state.select_date(date(2024, 1, 20))
        text = render_month(state)
        assert "[15]*" in text
        assert "<20>*" in text
        assert ".31" in text


class TestRenderAgenda:
    def test_today_agenda(self, state):
        lines = render_agenda(state).splitlines()
        assert lines[0] == "Hoje"
        assert lines[1].startswith("09:00 - 10:00")
        assert "Trabalho" in lines[1]

    def test_empty_day(self, state):
        state.select_date(date(2024, 1, 3))
        assert render_agenda(state).splitlines() == ["03/01/2024", "Nenhum evento neste dia"]


class TestFormatEvent:
    def test_description_and_progress(self, make_event):
        ev = make_event(title="Corrida", description="Semana 1 de 4",
                        category=EventCategory.AI_GOAL, progress=25)
        assert format_event(ev) == "09:00 - 10:00  🤖 Corrida: Semana 1 de 4 (Progresso 25%)"


class TestAdminRendering:
    def test_users(self):
        users = [
            DirectoryUser(id="1", email="ana@example.com", full_name="Ana",
                          created_at="2024-01-10T12:00:00+00:00", is_suspended=True),
        ]
        text = render_users(users)
        assert "ana@example.com" in text
        assert "Criado: 2024-01-10" in text
        assert text.endswith("[suspenso]")

    def test_no_users(self):
        assert render_users([]) == "Nenhum usuário"

    def test_stats(self):
        text = render_stats(UserStats(total_users=7, ai_interactions=2))
        assert "Utilizadores Totais: 7" in text
        assert "Interações AI: 2" in text
