"""Habitica task types used by the client."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class TaskPriority(float, Enum):
    """Task difficulty, as the numeric multiplier Habitica's API expects."""
    TRIVIAL = 0.1
    EASY = 1
    MEDIUM = 1.5
    HARD = 2


class TaskType(str, Enum):
    TODO = "todo"
    DAILY = "daily"
    HABIT = "habit"
    REWARD = "reward"


class ScoreDirection(str, Enum):
    UP = "up"
    DOWN = "down"


@dataclass
class Task:
    alias: str
    text: str
    type: TaskType = TaskType.TODO
    notes: str | None = None
    priority: TaskPriority = TaskPriority.EASY

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "alias": self.alias,
            "type": self.type.value,
            "text": self.text,
            "priority": self.priority.value,
        }
        if self.notes is not None:
            payload["notes"] = self.notes
        return payload
