# src/task_tracker/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from ..errors import ValidationError


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    Any status may move to any other (including itself); there are no
    automatic transitions.
    """

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"

    @classmethod
    def parse(cls, raw: TaskStatus | str) -> TaskStatus:
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise ValidationError(f"Invalid status '{raw}' (expected one of: {allowed})") from None


@dataclass(slots=True)
class Task:
    id: int
    description: str
    status: TaskStatus
    created_at: float
    updated_at: float


@dataclass(slots=True)
class TaskCollection:
    """
    Ordered tasks (insertion order) plus the id allocator.

    next_id is the id the next add will receive. It only grows, so ids of
    deleted tasks are never handed out again.
    """

    tasks: list[Task] = field(default_factory=list)
    next_id: int = 1

    def find(self, task_id: int) -> Task | None:
        for t in self.tasks:
            if t.id == task_id:
                return t
        return None

    def max_id(self) -> int:
        return max((t.id for t in self.tasks), default=0)

    def allocate_id(self) -> int:
        task_id = max(self.next_id, self.max_id() + 1)
        self.next_id = task_id + 1
        return task_id
