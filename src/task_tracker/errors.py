# src/task_tracker/errors.py

from __future__ import annotations

from pathlib import Path


class TaskTrackerError(RuntimeError):
    """Base class for every error the CLI reports with a non-zero exit code."""


class ValidationError(TaskTrackerError):
    pass


class NotFoundError(TaskTrackerError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task not found (ID: {task_id})")
        self.task_id = task_id


class StorageError(TaskTrackerError):
    """Persistence failure; not recoverable within the invocation."""

    def __init__(self, message: str, *, path: str | Path | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class CorruptStoreError(StorageError):
    pass


class StorageWriteError(StorageError):
    pass
