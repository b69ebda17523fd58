"""
PILOT — AI Goal Progression.

An AI goal runs for `duration` weeks. Each week unlocks the milestones
scheduled for it; progress is derived from completed milestones and never
goes down; coach messages are append-only and read independently of
progression. Advancing past the last week deactivates the goal.

Progress rounding: floor(100 * completed / total), so a goal shows 100 only
once every milestone is complete. A goal without milestones derives 0.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta

from pilot.data.models import (
    AICoachMessage,
    AIGoal,
    AIGoalCategory,
    AIGoalMilestone,
    AIGoalSchedule,
    AIGoalSuggestion,
    CoachMessageType,
    Difficulty,
    Weekday,
)
from pilot.data.store import new_id

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Suggestion catalog
# ---------------------------------------------------------------------------

SUGGESTIONS: list[AIGoalSuggestion] = [
    AIGoalSuggestion(
        id="1",
        title="Corrida Matinal",
        description="Desenvolva o hábito de correr todas as manhãs para melhorar sua saúde cardiovascular",
        category=AIGoalCategory.FITNESS,
        difficulty=Difficulty.BEGINNER,
        estimated_weeks=4,
        benefits=["Melhora cardiovascular", "Mais energia", "Disciplina matinal"],
        icon="🏃",
    ),
    AIGoalSuggestion(
        id="2",
        title="Leitura Diária",
        description="Leia 30 minutos por dia para expandir conhecimento e melhorar foco",
        category=AIGoalCategory.LEARNING,
        difficulty=Difficulty.BEGINNER,
        estimated_weeks=6,
        benefits=["Conhecimento expandido", "Melhor foco", "Vocabulário rico"],
        icon="📚",
    ),
    AIGoalSuggestion(
        id="3",
        title="Meditação Mindfulness",
        description="Pratique meditação diária para reduzir stress e aumentar bem-estar",
        category=AIGoalCategory.WELLNESS,
        difficulty=Difficulty.BEGINNER,
        estimated_weeks=8,
        benefits=["Menos stress", "Melhor sono", "Clareza mental"],
        icon="🧘",
    ),
    AIGoalSuggestion(
        id="4",
        title="Aprender Programação",
        description="Dedique 1 hora diária para aprender uma nova linguagem de programação",
        category=AIGoalCategory.LEARNING,
        difficulty=Difficulty.INTERMEDIATE,
        estimated_weeks=12,
        benefits=["Nova habilidade", "Oportunidades profissionais", "Lógica aprimorada"],
        icon="💻",
    ),
    AIGoalSuggestion(
        id="5",
        title="Treino de Força",
        description="Programa de musculação 3x por semana para ganhar força e massa muscular",
        category=AIGoalCategory.FITNESS,
        difficulty=Difficulty.INTERMEDIATE,
        estimated_weeks=16,
        benefits=["Força aumentada", "Massa muscular", "Metabolismo acelerado"],
        icon="💪",
    ),
    AIGoalSuggestion(
        id="6",
        title="Desenho Artístico",
        description="Desenvolva habilidades de desenho com prática diária de 45 minutos",
        category=AIGoalCategory.CREATIVITY,
        difficulty=Difficulty.BEGINNER,
        estimated_weeks=10,
        benefits=["Criatividade", "Coordenação motora", "Expressão artística"],
        icon="🎨",
    ),
    AIGoalSuggestion(
        id="7",
        title="Networking Profissional",
        description="Conecte-se com 2 novos profissionais por semana para expandir rede",
        category=AIGoalCategory.SOCIAL,
        difficulty=Difficulty.INTERMEDIATE,
        estimated_weeks=8,
        benefits=["Rede expandida", "Oportunidades", "Habilidades sociais"],
        icon="🤝",
    ),
    AIGoalSuggestion(
        id="8",
        title="Organização Digital",
        description="Organize emails, arquivos e tarefas para aumentar produtividade",
        category=AIGoalCategory.PRODUCTIVITY,
        difficulty=Difficulty.BEGINNER,
        estimated_weeks=4,
        benefits=["Mais produtividade", "Menos stress", "Tempo otimizado"],
        icon="📋",
    ),
]


def get_suggestion(suggestion_id: str) -> AIGoalSuggestion:
    """Look up a catalog entry. Raises KeyError if unknown."""
    for s in SUGGESTIONS:
        if s.id == suggestion_id:
            return s
    raise KeyError(f"Unknown AI goal suggestion: {suggestion_id!r}")


def _now() -> str:
    return datetime.now().isoformat(timespec="seconds")


# ---------------------------------------------------------------------------
# Creation
# ---------------------------------------------------------------------------


def create_ai_goal(
    suggestion: AIGoalSuggestion,
    start_date: date,
    days: list[Weekday],
    time: str,
    daily_time_minutes: int = 30,
    goal_id: str | None = None,
) -> AIGoal:
    """Turn a catalog suggestion into an active AIGoal.

    One milestone per week ("Semana N") and a welcome motivation message.
    """
    weeks = suggestion.estimated_weeks
    milestones = [
        AIGoalMilestone(
            id=f"w{week}",
            title=f"Semana {week}",
            description=f"{suggestion.title}: concluir as sessões da semana {week}",
            week=week,
        )
        for week in range(1, weeks + 1)
    ]
    goal = AIGoal(
        id=goal_id or new_id(),
        title=suggestion.title,
        description=suggestion.description,
        category=suggestion.category,
        difficulty=suggestion.difficulty,
        duration=weeks,
        daily_time_minutes=daily_time_minutes,
        schedule=AIGoalSchedule(days=days, time=time),
        milestones=milestones,
        start_date=start_date.isoformat(),
    )
    add_coach_message(
        goal,
        f"Bem-vindo ao plano '{suggestion.title}'! {weeks} semanas, "
        f"{daily_time_minutes} minutos por dia. Vamos começar.",
        CoachMessageType.MOTIVATION,
    )
    logger.info("AI goal created from suggestion %s: %s (%d weeks)", suggestion.id, goal.id, weeks)
    return goal


# ---------------------------------------------------------------------------
# Progress
# ---------------------------------------------------------------------------


def derive_progress(goal: AIGoal) -> int:
    """floor(100 * completed / total); 0 when there are no milestones."""
    total = len(goal.milestones)
    if total == 0:
        return 0
    completed = sum(1 for m in goal.milestones if m.is_completed)
    return (100 * completed) // total


def _find_milestone(goal: AIGoal, milestone_id: str) -> AIGoalMilestone:
    for m in goal.milestones:
        if m.id == milestone_id:
            return m
    raise KeyError(f"Milestone {milestone_id!r} not found in goal {goal.id!r}")


def complete_milestone(
    goal: AIGoal, milestone_id: str, on: date | None = None,
) -> AIGoalMilestone:
    """Mark a milestone complete and raise the goal's progress.

    Only weeks up to `current_week` are open; a later week raises
    ValueError. Earlier weeks stay completable after the goal has ended.
    Completing an already completed milestone changes nothing.
    """
    milestone = _find_milestone(goal, milestone_id)
    if milestone.is_completed:
        return milestone
    if milestone.week > goal.current_week:
        raise ValueError(
            f"Milestone {milestone_id!r} is locked until week {milestone.week} "
            f"(goal {goal.id!r} is in week {goal.current_week})"
        )

    milestone.is_completed = True
    milestone.completed_date = (on or date.today()).isoformat()

    previous = goal.progress
    goal.progress = max(goal.progress, derive_progress(goal))
    logger.info(
        "AI goal %s: milestone %s completed, progress %d -> %d",
        goal.id, milestone_id, previous, goal.progress,
    )

    if goal.progress == 100 and previous < 100:
        add_coach_message(
            goal,
            f"Parabéns! Concluíste todos os marcos de '{goal.title}'.",
            CoachMessageType.CELEBRATION,
        )
    return milestone


def unlocked_milestones(goal: AIGoal) -> list[AIGoalMilestone]:
    """Milestones scheduled for the current week."""
    return [m for m in goal.milestones if m.week == goal.current_week]


def advance_week(goal: AIGoal) -> bool:
    """Move to the next week.

    Returns True if the goal moved on; advancing past the last week
    deactivates the goal instead, and inactive goals don't move.
    """
    if not goal.is_active:
        return False

    leaving = goal.current_week
    pending = [m for m in unlocked_milestones(goal) if not m.is_completed]
    if pending:
        add_coach_message(
            goal,
            f"A semana {leaving} terminou com {len(pending)} marco(s) por concluir. "
            "Ajusta o horário para recuperar.",
            CoachMessageType.ADJUSTMENT,
        )

    if goal.current_week >= goal.duration:
        goal.is_active = False
        logger.info("AI goal %s finished after %d weeks", goal.id, goal.duration)
        return False

    goal.current_week += 1
    logger.info("AI goal %s advanced to week %d/%d", goal.id, goal.current_week, goal.duration)
    return True


def week_for_date(goal: AIGoal, d: date) -> int:
    """1-based week of d relative to the goal's start, clamped to [1, duration]."""
    start = date.fromisoformat(goal.start_date)
    week = (d - start).days // 7 + 1
    return max(1, min(goal.duration, week))


def end_date(goal: AIGoal) -> date:
    """Last calendar day covered by the goal."""
    return date.fromisoformat(goal.start_date) + timedelta(weeks=goal.duration, days=-1)


# ---------------------------------------------------------------------------
# Coach messages
# ---------------------------------------------------------------------------


def add_coach_message(
    goal: AIGoal,
    message: str,
    message_type: CoachMessageType,
    timestamp: str | None = None,
) -> AICoachMessage:
    """Append a coach message. Messages are never removed."""
    msg = AICoachMessage(
        id=new_id(),
        message=message,
        type=message_type,
        timestamp=timestamp or _now(),
    )
    goal.ai_coach_messages.append(msg)
    return msg


def mark_message_read(goal: AIGoal, message_id: str) -> AICoachMessage:
    """Mark one coach message read. Raises KeyError if unknown."""
    for msg in goal.ai_coach_messages:
        if msg.id == message_id:
            msg.is_read = True
            return msg
    raise KeyError(f"Coach message {message_id!r} not found in goal {goal.id!r}")


def unread_messages(goal: AIGoal) -> list[AICoachMessage]:
    return [m for m in goal.ai_coach_messages if not m.is_read]
