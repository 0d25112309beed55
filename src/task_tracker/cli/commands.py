# src/task_tracker/cli/commands.py

from __future__ import annotations

import argparse
import logging
from collections.abc import Iterable

from ..tasks.task_models import Task, TaskStatus
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)

_ROW = "{:<6}{:<30}{:<12}"


def format_task_table(tasks: Iterable[Task]) -> str:
    tasks = list(tasks)
    if not tasks:
        return "No tasks found."
    rows = [_ROW.format("id", "description", "status"), "-" * 48]
    for t in tasks:
        rows.append(_ROW.format(t.id, t.description, t.status.value))
    return "\n".join(rows)


def cmd_add(store: TaskStore, args: argparse.Namespace) -> int:
    task_id = store.add(args.description)
    print(f"Task added successfully (ID: {task_id})")
    return 0


def cmd_update(store: TaskStore, args: argparse.Namespace) -> int:
    t = store.update(args.task_id, args.description)
    print(f"Task updated successfully (ID: {t.id})")
    return 0


def cmd_delete(store: TaskStore, args: argparse.Namespace) -> int:
    t = store.delete(args.task_id)
    print(f"Task deleted successfully (ID: {t.id})")
    return 0


def cmd_mark(store: TaskStore, args: argparse.Namespace) -> int:
    t = store.mark(args.task_id, args.status)
    print(f"Task marked {t.status.value} (ID: {t.id})")
    return 0


def cmd_list(store: TaskStore, args: argparse.Namespace) -> int:
    status = TaskStatus.parse(args.status) if args.status is not None else None
    tasks = store.list(status)
    logger.debug("Listing %d tasks (filter=%s)", len(tasks), status)
    print(format_task_table(tasks))
    return 0
