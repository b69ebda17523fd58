"""Tests for pilot.core.ai_goals — AI goal creation and progression."""

from datetime import date

import pytest

from pilot.core.ai_goals import (
    SUGGESTIONS,
    add_coach_message,
    advance_week,
    complete_milestone,
    create_ai_goal,
    derive_progress,
    end_date,
    get_suggestion,
    mark_message_read,
    unlocked_milestones,
    unread_messages,
    week_for_date,
)
from pilot.data.models import (
    AIGoal,
    AIGoalCategory,
    AIGoalMilestone,
    CoachMessageType,
    Weekday,
)


def _goal(duration=3, milestones=None, **kwargs):
    if milestones is None:
        milestones = [
            AIGoalMilestone(id=f"m{w}", title=f"Semana {w}", week=w)
            for w in range(1, duration + 1)
        ]
    return AIGoal(
        id="g1",
        title="Leitura",
        category=AIGoalCategory.LEARNING,
        duration=duration,
        start_date="2024-01-01",
        milestones=milestones,
        **kwargs,
    )


class TestSuggestions:
    def test_catalog_has_eight_entries(self):
        assert len(SUGGESTIONS) == 8
        assert len({s.id for s in SUGGESTIONS}) == 8

    def test_get_suggestion(self):
        s = get_suggestion("5")
        assert s.title == "Treino de Força"
        assert s.estimated_weeks == 16

    def test_unknown_suggestion_raises(self):
        with pytest.raises(KeyError):
            get_suggestion("99")


class TestCreateAIGoal:
    def test_builds_weekly_milestones(self):
        goal = create_ai_goal(
            get_suggestion("1"),
            start_date=date(2024, 1, 1),
            days=[Weekday.MONDAY, Weekday.THURSDAY],
            time="07:00",
            daily_time_minutes=20,
            goal_id="run",
        )
        assert goal.id == "run"
        assert goal.duration == 4
        assert [m.week for m in goal.milestones] == [1, 2, 3, 4]
        assert goal.schedule.days == [Weekday.MONDAY, Weekday.THURSDAY]
        assert goal.daily_time_minutes == 20
        assert goal.current_week == 1
        assert goal.progress == 0
        assert goal.is_active is True
        assert goal.start_date == "2024-01-01"

    def test_starts_with_welcome_message(self):
        goal = create_ai_goal(get_suggestion("2"), date(2024, 1, 1), [Weekday.SUNDAY], "21:00")
        assert len(goal.ai_coach_messages) == 1
        assert goal.ai_coach_messages[0].type is CoachMessageType.MOTIVATION
        assert goal.ai_coach_messages[0].is_read is False


class TestDeriveProgress:
    def test_no_milestones_is_zero(self):
        assert derive_progress(_goal(milestones=[])) == 0

    def test_floor_rounding(self):
        goal = _goal(duration=3)
        goal.milestones[0].is_completed = True
        # 100 / 3 = 33.33 → 33
        assert derive_progress(goal) == 33
        goal.milestones[1].is_completed = True
        # 200 / 3 = 66.67 → 66
        assert derive_progress(goal) == 66

    def test_all_complete_is_100(self):
        goal = _goal(duration=3)
        for m in goal.milestones:
            m.is_completed = True
        assert derive_progress(goal) == 100


class TestCompleteMilestone:
    def test_sets_completion_and_date(self):
        goal = _goal()
        m = complete_milestone(goal, "m1", on=date(2024, 1, 5))
        assert m.is_completed is True
        assert m.completed_date == "2024-01-05"
        assert goal.progress == 33

    def test_progress_is_monotonic(self):
        goal = _goal(duration=4, current_week=4)
        seen = [goal.progress]
        for mid in ["m3", "m1", "m4", "m2"]:
            complete_milestone(goal, mid, on=date(2024, 1, 10))
            seen.append(goal.progress)
        assert seen == sorted(seen)
        assert seen[-1] == 100

    def test_progress_equals_derived_rule(self):
        goal = _goal(duration=4)
        complete_milestone(goal, "m1")
        assert goal.progress == 100 * 1 // 4

    def test_progress_never_decreases_below_stored_value(self):
        goal = _goal(duration=4, progress=80)
        complete_milestone(goal, "m1")
        assert goal.progress == 80

    def test_completing_twice_is_noop(self):
        goal = _goal()
        complete_milestone(goal, "m1", on=date(2024, 1, 5))
        complete_milestone(goal, "m1", on=date(2024, 1, 9))
        assert goal.milestones[0].completed_date == "2024-01-05"
        assert goal.progress == 33

    def test_unknown_milestone_raises(self):
        with pytest.raises(KeyError):
            complete_milestone(_goal(), "nope")

    def test_future_week_is_locked(self):
        goal = _goal(duration=3)
        with pytest.raises(ValueError):
            complete_milestone(goal, "m2")
        assert goal.milestones[1].is_completed is False
        assert goal.progress == 0

    def test_week_opens_after_advance(self):
        goal = _goal(duration=3)
        advance_week(goal)
        complete_milestone(goal, "m2")
        assert goal.milestones[1].is_completed is True

    def test_past_week_completable_after_goal_ends(self):
        goal = _goal(duration=2, current_week=2, is_active=False)
        complete_milestone(goal, "m1")
        assert goal.progress == 50

    def test_celebration_on_reaching_100(self):
        goal = _goal(duration=2, current_week=2)
        complete_milestone(goal, "m1")
        assert goal.ai_coach_messages == []
        complete_milestone(goal, "m2")
        assert goal.progress == 100
        assert [m.type for m in goal.ai_coach_messages] == [CoachMessageType.CELEBRATION]


class TestWeeks:
    def test_unlocked_milestones_match_current_week(self):
        goal = _goal(duration=3, current_week=2)
        assert [m.id for m in unlocked_milestones(goal)] == ["m2"]

    def test_advance_week(self):
        goal = _goal(duration=3)
        complete_milestone(goal, "m1")
        assert advance_week(goal) is True
        assert goal.current_week == 2
        assert goal.is_active is True

    def test_advancing_past_duration_deactivates(self):
        goal = _goal(duration=2, current_week=2)
        for m in goal.milestones:
            m.is_completed = True
        assert advance_week(goal) is False
        assert goal.is_active is False
        assert goal.current_week == 2

    def test_inactive_goal_does_not_move(self):
        goal = _goal(duration=3, is_active=False)
        assert advance_week(goal) is False
        assert goal.current_week == 1

    def test_current_week_stays_in_range(self):
        goal = _goal(duration=3)
        for _ in range(10):
            advance_week(goal)
            assert 1 <= goal.current_week <= goal.duration
        assert goal.is_active is False

    def test_pending_milestones_trigger_adjustment_message(self):
        goal = _goal(duration=3)
        advance_week(goal)
        assert [m.type for m in goal.ai_coach_messages] == [CoachMessageType.ADJUSTMENT]

    def test_week_for_date(self):
        goal = _goal(duration=3)
        assert week_for_date(goal, date(2024, 1, 1)) == 1
        assert week_for_date(goal, date(2024, 1, 8)) == 2
        assert week_for_date(goal, date(2023, 12, 1)) == 1
        assert week_for_date(goal, date(2024, 6, 1)) == 3

    def test_end_date(self):
        assert end_date(_goal(duration=2)) == date(2024, 1, 14)


class TestCoachMessages:
    def test_messages_are_appended(self):
        goal = _goal()
        first = add_coach_message(goal, "Bom trabalho", CoachMessageType.MOTIVATION, "2024-01-01T08:00:00")
        second = add_coach_message(goal, "Dica", CoachMessageType.TIP)
        assert goal.ai_coach_messages == [first, second]
        assert first.timestamp == "2024-01-01T08:00:00"

    def test_mark_read_independent_of_progress(self):
        goal = _goal()
        msg = add_coach_message(goal, "Dica", CoachMessageType.TIP)
        mark_message_read(goal, msg.id)
        assert msg.is_read is True
        assert goal.progress == 0
        assert goal.current_week == 1
        assert unread_messages(goal) == []

    def test_unread_messages(self):
        goal = _goal()
        a = add_coach_message(goal, "A", CoachMessageType.TIP)
        b = add_coach_message(goal, "B", CoachMessageType.TIP)
        mark_message_read(goal, a.id)
        assert unread_messages(goal) == [b]

    def test_mark_unknown_raises(self):
        with pytest.raises(KeyError):
            mark_message_read(_goal(), "nope")
