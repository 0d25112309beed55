# src/task_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

TaskStore depends on this Protocol instead of a concrete backend, so the
JSON file can be swapped for an in-memory backend in tests.
"""

from typing import Protocol

from ..tasks.task_models import TaskCollection


class StorageBackend(Protocol):
    """Durable load/save of the whole task collection."""

    def load(self) -> TaskCollection: ...

    def save(self, collection: TaskCollection) -> None: ...
