# src/task_tracker/tasks/task_store.py

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import replace

from ..core.ports import StorageBackend
from ..errors import NotFoundError, ValidationError
from .task_models import Task, TaskCollection, TaskStatus

logger = logging.getLogger(__name__)


class TaskStore:
    """
    Task operations over a StorageBackend.

    Every call loads the current collection from the backend. Mutating calls
    rewrite the whole collection afterwards; read-only calls never save.
    Backend errors (CorruptStoreError / StorageWriteError) propagate unchanged.

    Returned Task objects are copies; mutating them does not affect the store.
    """

    def __init__(self, backend: StorageBackend, *, clock: Callable[[], float] = time.time) -> None:
        self._backend = backend
        self._clock = clock

    @property
    def backend(self) -> StorageBackend:
        return self._backend

    # ---- helpers ----

    @staticmethod
    def _clean_description(description: str) -> str:
        if not isinstance(description, str) or not description.strip():
            raise ValidationError("Task description must not be empty")
        return description.strip()

    @staticmethod
    def _require(collection: TaskCollection, task_id: int) -> Task:
        task = collection.find(task_id)
        if task is None:
            raise NotFoundError(task_id)
        return task

    def _touch(self, task: Task) -> None:
        # Wall clock may step backwards; keep updated_at >= created_at.
        task.updated_at = max(self._clock(), task.created_at)

    # ---- mutations ----

    def add(self, description: str) -> int:
        text = self._clean_description(description)

        collection = self._backend.load()
        now = self._clock()
        task = Task(
            id=collection.allocate_id(),
            description=text,
            status=TaskStatus.TODO,
            created_at=now,
            updated_at=now,
        )
        collection.tasks.append(task)
        self._backend.save(collection)

        logger.debug("Task added id=%s next_id=%s", task.id, collection.next_id)
        return task.id

    def update(self, task_id: int, description: str) -> Task:
        collection = self._backend.load()
        task = self._require(collection, task_id)
        task.description = self._clean_description(description)
        self._touch(task)
        self._backend.save(collection)

        logger.debug("Task updated id=%s", task_id)
        return replace(task)

    def delete(self, task_id: int) -> Task:
        collection = self._backend.load()
        task = self._require(collection, task_id)
        collection.tasks.remove(task)
        self._backend.save(collection)

        logger.debug("Task deleted id=%s next_id=%s", task_id, collection.next_id)
        return replace(task)

    def mark(self, task_id: int, status: TaskStatus | str) -> Task:
        collection = self._backend.load()
        task = self._require(collection, task_id)
        new_status = TaskStatus.parse(status)

        old_status = task.status
        task.status = new_status
        self._touch(task)
        self._backend.save(collection)

        logger.debug("Task status id=%s %s -> %s", task_id, old_status.value, new_status.value)
        return replace(task)

    # ---- queries ----

    def get(self, task_id: int) -> Task:
        collection = self._backend.load()
        return replace(self._require(collection, task_id))

    def list(self, status: TaskStatus | str | None = None) -> list[Task]:
        """
        Tasks in insertion order, optionally only those with the given status.

        An unrecognized status raises ValidationError rather than matching nothing.
        """
        # CLI callers pass a parsed TaskStatus already; parse() returns it as-is.
        wanted = TaskStatus.parse(status) if status is not None else None
        collection = self._backend.load()
        return [replace(t) for t in collection.tasks if wanted is None or t.status == wanted]
