"""
PILOT — Data Models.

Session-scoped entities: events, recurring tasks, goals, AI goals, parties
and friends live in memory for the authenticated session. Directory users
and stats come from the hosted backend.

Dates are ISO strings (YYYY-MM-DD) and times are 24h "HH:MM" strings, so
that agenda filtering is a plain string comparison.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator


class EventCategory(str, Enum):
    WORK = "work"
    LEISURE = "leisure"
    SLEEP = "sleep"
    MEALS = "meals"
    GAMING = "gaming"
    SOCIAL = "social"
    RECURRING = "recurring"
    GOAL = "goal"
    AI_GOAL = "ai-goal"


class Weekday(str, Enum):
    """Weekday names, in calendar column order (weeks start on Sunday)."""

    SUNDAY = "sunday"
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"


class TaskCategory(str, Enum):
    WORK = "work"
    SPORT = "sport"
    STUDY = "study"
    HEALTH = "health"
    OTHER = "other"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class GoalCategory(str, Enum):
    PERSONAL = "personal"
    PROFESSIONAL = "professional"
    HEALTH = "health"
    LEARNING = "learning"
    OTHER = "other"


class AIGoalCategory(str, Enum):
    FITNESS = "fitness"
    LEARNING = "learning"
    PRODUCTIVITY = "productivity"
    WELLNESS = "wellness"
    CREATIVITY = "creativity"
    SOCIAL = "social"


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class CoachMessageType(str, Enum):
    MOTIVATION = "motivation"
    TIP = "tip"
    ADJUSTMENT = "adjustment"
    CELEBRATION = "celebration"


class InviteStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"


class PresenceStatus(str, Enum):
    ONLINE = "online"
    OFFLINE = "offline"


# ---------------------------------------------------------------------------
# Time / date helpers
# ---------------------------------------------------------------------------


def time_str_to_minutes(time_str: str) -> int | None:
    """Convert an HH:MM string to minutes from midnight, None if malformed."""
    if not time_str:
        return None
    try:
        t = datetime.strptime(time_str, "%H:%M").time()
    except (ValueError, TypeError):
        return None
    return t.hour * 60 + t.minute


def minutes_to_time_str(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def weekday_of(d: date) -> Weekday:
    """Weekday name of a date (Python's Monday=0 shifted to Sunday-first)."""
    return list(Weekday)[(d.weekday() + 1) % 7]


def _check_iso_date(value: str) -> str:
    try:
        parsed = date.fromisoformat(value)
    except (ValueError, TypeError):
        raise ValueError(f"Invalid calendar date: {value!r}") from None
    if parsed.isoformat() != value:
        raise ValueError(f"Date must be YYYY-MM-DD: {value!r}")
    return value


def _check_time(value: str) -> str:
    if time_str_to_minutes(value) is None or len(value) != 5:
        raise ValueError(f"Time must be HH:MM: {value!r}")
    return value


# ---------------------------------------------------------------------------
# Calendar
# ---------------------------------------------------------------------------


class CalendarEvent(BaseModel):
    """A same-day calendar event.

    JSON example:
    {
        "id": "1",
        "title": "Trabalho",
        "start_time": "09:00",
        "end_time": "17:00",
        "category": "work",
        "description": "Reuniões e projetos",
        "date": "2024-01-15"
    }
    """

    id: str
    title: str
    start_time: str
    end_time: str
    category: EventCategory
    description: str | None = None
    date: str
    is_recurring: bool = False
    is_goal: bool = False
    is_ai_goal: bool = False
    progress: int | None = None

    @field_validator("date")
    @classmethod
    def valid_date(cls, v: str) -> str:
        return _check_iso_date(v)

    @field_validator("start_time", "end_time")
    @classmethod
    def valid_time(cls, v: str) -> str:
        return _check_time(v)

    @field_validator("progress")
    @classmethod
    def clamp_progress(cls, v: int | None) -> int | None:
        if v is None:
            return None
        return max(0, min(100, v))

    @model_validator(mode="after")
    def start_before_end(self) -> CalendarEvent:
        if time_str_to_minutes(self.start_time) >= time_str_to_minutes(self.end_time):
            raise ValueError(
                f"start_time {self.start_time} must be before end_time {self.end_time}"
            )
        return self


class RecurringTask(BaseModel):
    """A task repeated every week on a fixed set of weekdays."""

    id: str
    title: str
    description: str = ""
    start_time: str
    end_time: str
    days: list[Weekday]
    category: TaskCategory = TaskCategory.OTHER
    is_active: bool = True

    @field_validator("start_time", "end_time")
    @classmethod
    def valid_time(cls, v: str) -> str:
        return _check_time(v)

    @field_validator("days")
    @classmethod
    def unique_days(cls, v: list[Weekday]) -> list[Weekday]:
        if not v:
            raise ValueError("days must contain at least one weekday")
        if len(set(v)) != len(v):
            raise ValueError("days must not contain duplicates")
        return v

    @model_validator(mode="after")
    def start_before_end(self) -> RecurringTask:
        if time_str_to_minutes(self.start_time) >= time_str_to_minutes(self.end_time):
            raise ValueError("start_time must be before end_time")
        return self


class Goal(BaseModel):
    """A one-off personal goal with a target date and time."""

    id: str
    title: str
    description: str = ""
    target_date: str
    target_time: str
    priority: Priority = Priority.MEDIUM
    is_completed: bool = False
    category: GoalCategory = GoalCategory.PERSONAL

    @field_validator("target_date")
    @classmethod
    def valid_date(cls, v: str) -> str:
        return _check_iso_date(v)

    @field_validator("target_time")
    @classmethod
    def valid_time(cls, v: str) -> str:
        return _check_time(v)


# ---------------------------------------------------------------------------
# AI goals
# ---------------------------------------------------------------------------


class AIGoalMilestone(BaseModel):
    id: str
    title: str
    description: str = ""
    week: int
    is_completed: bool = False
    completed_date: str | None = None

    @model_validator(mode="after")
    def completed_date_implies_completed(self) -> AIGoalMilestone:
        if self.completed_date is not None and not self.is_completed:
            raise ValueError("completed_date set on a milestone that is not completed")
        return self


class AICoachMessage(BaseModel):
    id: str
    message: str
    type: CoachMessageType
    timestamp: str
    is_read: bool = False


class AIGoalSchedule(BaseModel):
    days: list[Weekday] = Field(default_factory=list)
    time: str = "07:00"

    @field_validator("time")
    @classmethod
    def valid_time(cls, v: str) -> str:
        return _check_time(v)

    @field_validator("days")
    @classmethod
    def unique_days(cls, v: list[Weekday]) -> list[Weekday]:
        if len(set(v)) != len(v):
            raise ValueError("schedule days must not contain duplicates")
        return v


class AIGoal(BaseModel):
    """A multi-week structured goal with milestones and coach messages.

    `duration` is in weeks; `current_week` is 1-based.
    """

    id: str
    title: str
    description: str = ""
    category: AIGoalCategory
    difficulty: Difficulty = Difficulty.BEGINNER
    duration: int = Field(ge=1)
    daily_time_minutes: int = Field(default=30, ge=1)
    schedule: AIGoalSchedule = Field(default_factory=AIGoalSchedule)
    milestones: list[AIGoalMilestone] = Field(default_factory=list)
    progress: int = 0
    is_active: bool = True
    start_date: str
    ai_coach_messages: list[AICoachMessage] = Field(default_factory=list)
    current_week: int = 1

    @field_validator("start_date")
    @classmethod
    def valid_date(cls, v: str) -> str:
        return _check_iso_date(v)

    @field_validator("progress")
    @classmethod
    def clamp_progress(cls, v: int) -> int:
        return max(0, min(100, v))

    @model_validator(mode="after")
    def weeks_in_range(self) -> AIGoal:
        if not 1 <= self.current_week <= self.duration:
            raise ValueError(
                f"current_week {self.current_week} outside [1, {self.duration}]"
            )
        for m in self.milestones:
            if not 1 <= m.week <= self.duration:
                raise ValueError(
                    f"Milestone {m.id!r} week {m.week} outside [1, {self.duration}]"
                )
        return self


class AIGoalSuggestion(BaseModel):
    """A catalog entry the user can turn into an AIGoal."""

    id: str
    title: str
    description: str
    category: AIGoalCategory
    difficulty: Difficulty
    estimated_weeks: int = Field(ge=1)
    benefits: list[str] = Field(default_factory=list)
    icon: str = ""


# ---------------------------------------------------------------------------
# Social
# ---------------------------------------------------------------------------


class PartyInvite(BaseModel):
    friend_id: str
    status: InviteStatus = InviteStatus.PENDING
    responded_at: str | None = None


class Party(BaseModel):
    id: str
    title: str
    date: str
    time: str
    description: str = ""
    creator: str
    creator_id: str
    invites: list[PartyInvite] = Field(default_factory=list)
    status: InviteStatus = InviteStatus.PENDING
    cost: str | None = None
    chat_id: str | None = None

    @field_validator("date")
    @classmethod
    def valid_date(cls, v: str) -> str:
        return _check_iso_date(v)

    @field_validator("time")
    @classmethod
    def valid_time(cls, v: str) -> str:
        return _check_time(v)


class Friend(BaseModel):
    id: str
    name: str
    avatar: str = ""
    status: PresenceStatus = PresenceStatus.OFFLINE
    last_activity: str = ""


# ---------------------------------------------------------------------------
# Backend records
# ---------------------------------------------------------------------------


class DirectoryUser(BaseModel):
    """A row of the backend `users` table, as shown on the admin dashboard."""

    id: str
    email: str
    full_name: str | None = None
    created_at: str
    last_sign_in: str | None = None
    is_suspended: bool = False


class UserStats(BaseModel):
    total_users: int = 0
    active_users_24h: int = 0
    active_users_7d: int = 0
    active_users_30d: int = 0
    daily_active_users: int = 0
    monthly_active_users: int = 0
    events_created_30d: int = 0
    ai_interactions: int = 0


@dataclass
class Session:
    """An authenticated backend session."""

    email: str
    access_token: str = ""
    user_id: str = ""
