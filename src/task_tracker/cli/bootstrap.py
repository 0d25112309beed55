# src/task_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root": it turns settings into a TaskStore
wired to the JSON document the invocation should operate on.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..config import get_settings
from ..tasks.json_backend import JsonFileBackend
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def resolve_tasks_path(settings, override: str | Path | None = None) -> Path:
    if override is not None and str(override).strip():
        return Path(override).expanduser()
    return Path(settings.tasks_path)


def create_task_store(*, settings=None, tasks_path: str | Path | None = None) -> TaskStore:
    """
    Build a TaskStore over the configured document.

    Keeping settings injectable makes the CLI easy to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings(). The document itself is not created here;
    the backend creates it on the first write.
    """
    if settings is None:
        settings = get_settings()

    path = resolve_tasks_path(settings, tasks_path)
    logger.debug("Using task document %s", path)
    return TaskStore(JsonFileBackend(path))
