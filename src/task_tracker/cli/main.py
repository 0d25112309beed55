# src/task_tracker/cli/main.py

"""
CLI entrypoint.

Parses one command, configures logging, builds the TaskStore and runs the
command. Tracker errors become `error: ...` on stderr and exit code 1;
argparse usage errors keep argparse's exit code 2.
"""

from __future__ import annotations

import argparse
import logging
import sys

from .. import __version__
from ..config import get_settings
from ..errors import TaskTrackerError
from ..logging_setup import setup_logging
from ..tasks.task_models import TaskStatus
from .bootstrap import create_task_store
from .commands import cmd_add, cmd_delete, cmd_list, cmd_mark, cmd_update

logger = logging.getLogger(__name__)


def _task_id(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"task id must be a number, got '{raw}'") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"task id must be positive, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="task-tracker", description="Track short text tasks from the command line.")
    p.add_argument("--file", metavar="PATH", help="task document to use (overrides TRACKER_TASKS_PATH)")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = p.add_subparsers(dest="cmd", required=True)

    add = sub.add_parser("add", help="add a new task")
    add.add_argument("description")
    add.set_defaults(func=cmd_add)

    upd = sub.add_parser("update", help="change a task's description")
    upd.add_argument("task_id", type=_task_id)
    upd.add_argument("description")
    upd.set_defaults(func=cmd_update)

    dele = sub.add_parser("delete", help="delete a task")
    dele.add_argument("task_id", type=_task_id)
    dele.set_defaults(func=cmd_delete)

    for status in (TaskStatus.IN_PROGRESS, TaskStatus.DONE, TaskStatus.TODO):
        mk = sub.add_parser(f"mark-{status.value}", help=f"mark a task as {status.value}")
        mk.add_argument("task_id", type=_task_id)
        mk.set_defaults(func=cmd_mark, status=status)

    ls = sub.add_parser("list", help="list tasks, optionally by status")
    ls.add_argument("status", nargs="?", help="todo | in-progress | done")
    ls.set_defaults(func=cmd_list)

    return p


def main(argv: list[str] | None = None, *, settings=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if settings is None:
        settings = get_settings()

    level_name = str(getattr(settings, "log_level", "ERROR")).upper()
    console_level = getattr(logging, level_name, logging.ERROR)
    log_dir = settings.log_dir if getattr(settings, "log_file_enabled", False) else None
    setup_logging(console_level=console_level, log_dir=log_dir)

    logger.debug("Starting %s command=%s", getattr(settings, "app_name", "task-tracker"), args.cmd)

    try:
        store = create_task_store(settings=settings, tasks_path=args.file)
        return args.func(store, args)
    except TaskTrackerError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
