"""Habitica API client."""

from habisync.habitica.client import HabiticaClient
from habisync.habitica.models import ScoreDirection, Task, TaskPriority, TaskType

__all__ = [
    "HabiticaClient",
    "ScoreDirection",
    "Task",
    "TaskPriority",
    "TaskType",
]
