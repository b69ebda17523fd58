"""
PILOT — Session Store.

Events, goals, parties and friends are owned by the authenticated session
and held in process memory only. Nothing here is persisted; a new session
starts empty (or with whatever the caller seeds).
"""

from __future__ import annotations

import logging
import uuid
from typing import Generic, Iterator, TypeVar

from pydantic import BaseModel

from pilot.data.models import (
    AIGoal,
    CalendarEvent,
    Friend,
    Goal,
    Party,
    RecurringTask,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


def new_id() -> str:
    """Return a fresh opaque identifier for a session entity."""
    return uuid.uuid4().hex


class Collection(Generic[T]):
    """Insertion-ordered in-memory collection keyed by entity id."""

    def __init__(self, label: str) -> None:
        self._label = label
        self._items: dict[str, T] = {}

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items.values()))

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def add(self, item: T) -> T:
        """Insert an entity. Raises ValueError if the id is already taken."""
        item_id = item.id  # type: ignore[attr-defined]
        if item_id in self._items:
            raise ValueError(f"{self._label} {item_id!r} already exists")
        self._items[item_id] = item
        logger.info("%s added: %s", self._label, item_id)
        return item

    def get(self, item_id: str) -> T | None:
        return self._items.get(item_id)

    def update(self, item_id: str, **changes: object) -> T:
        """Replace fields of an entity, re-running model validation.

        The stored entity keeps its position in insertion order.
        Raises KeyError if the id is unknown.
        """
        current = self._items.get(item_id)
        if current is None:
            raise KeyError(f"{self._label} {item_id!r} not found")
        if "id" in changes and changes["id"] != item_id:
            raise ValueError("id cannot be changed")
        data = current.model_dump()
        data.update(changes)
        updated = type(current).model_validate(data)
        self._items[item_id] = updated
        logger.info("%s updated: %s (%s)", self._label, item_id, ", ".join(changes))
        return updated

    def delete(self, item_id: str) -> bool:
        """Remove an entity; returns False if it did not exist."""
        removed = self._items.pop(item_id, None) is not None
        if removed:
            logger.info("%s deleted: %s", self._label, item_id)
        return removed

    def list_all(self) -> list[T]:
        return list(self._items.values())

    def clear(self) -> None:
        self._items.clear()


class SessionStore:
    """All user-owned collections of one session."""

    def __init__(self) -> None:
        self.events: Collection[CalendarEvent] = Collection("Event")
        self.recurring_tasks: Collection[RecurringTask] = Collection("Recurring task")
        self.goals: Collection[Goal] = Collection("Goal")
        self.ai_goals: Collection[AIGoal] = Collection("AI goal")
        self.parties: Collection[Party] = Collection("Party")
        self.friends: Collection[Friend] = Collection("Friend")

    def end_session(self) -> None:
        """Discard everything held for the session."""
        for collection in (
            self.events, self.recurring_tasks, self.goals,
            self.ai_goals, self.parties, self.friends,
        ):
            collection.clear()
        logger.info("Session store cleared")
