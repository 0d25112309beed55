# src/task_tracker/tasks/json_backend.py

from __future__ import annotations

import contextlib
import json
import logging
import math
import os
from pathlib import Path
from typing import Any

from ..errors import CorruptStoreError, StorageWriteError, ValidationError
from .task_models import Task, TaskCollection, TaskStatus

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


class JsonFileBackend:
    """
    Single-document JSON storage.

    Document layout (version 1):
        {"version": 1, "next_id": N, "tasks": [{id, description, status, createdAt, updatedAt}, ...]}

    Loading is lenient about additions (unknown keys are ignored) and also accepts
    a bare list of task records (version 0). Anything else is CorruptStoreError.
    Saving always rewrites the whole document via temp file + os.replace.
    """

    def __init__(self, path: str | Path = "tasks.json") -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    # ---- load ----

    def load(self) -> TaskCollection:
        path = self._path
        if not path.exists():
            logger.debug("No task document at %s; starting empty.", path)
            return TaskCollection()

        try:
            raw = path.read_text("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise self._corrupt(f"cannot read file: {e}") from e

        try:
            data = json.loads(raw)
        except ValueError as e:
            raise self._corrupt(f"invalid JSON: {e}") from e

        collection = self._decode(data)
        logger.debug(
            "Loaded %d tasks from %s (next_id=%s)", len(collection.tasks), path, collection.next_id
        )
        return collection

    def _corrupt(self, problem: str) -> CorruptStoreError:
        logger.warning("Task document %s is corrupt: %s", self._path, problem)
        return CorruptStoreError(f"Task file {self._path} is corrupt: {problem}", path=self._path)

    def _decode(self, data: Any) -> TaskCollection:
        stored_next_id: Any = None

        if isinstance(data, list):
            records = data
        elif isinstance(data, dict):
            version = data.get("version", 0)
            if not _is_int(version) or version < 0:
                raise self._corrupt(f"invalid format version {version!r}")
            if version > FORMAT_VERSION:
                raise self._corrupt(
                    f"unsupported format version {version} (this build reads up to {FORMAT_VERSION})"
                )
            records = data.get("tasks", [])
            if not isinstance(records, list):
                raise self._corrupt("'tasks' must be a list")
            stored_next_id = data.get("next_id")
        else:
            raise self._corrupt("top-level value must be an object or a list")

        tasks: list[Task] = []
        seen: set[int] = set()
        for i, rec in enumerate(records):
            task = self._decode_task(rec, i)
            if task.id in seen:
                raise self._corrupt(f"duplicate task id {task.id}")
            seen.add(task.id)
            tasks.append(task)

        derived = max(seen, default=0) + 1
        if stored_next_id is None:
            next_id = derived
        elif _is_int(stored_next_id) and stored_next_id >= 1:
            next_id = max(stored_next_id, derived)
        else:
            raise self._corrupt(f"invalid next_id {stored_next_id!r}")

        return TaskCollection(tasks=tasks, next_id=next_id)

    def _decode_task(self, rec: Any, index: int) -> Task:
        if not isinstance(rec, dict):
            raise self._corrupt(f"task #{index} is not an object")

        task_id = rec.get("id")
        if not _is_int(task_id) or task_id < 1:
            raise self._corrupt(f"task #{index} has invalid id {task_id!r}")

        description = rec.get("description")
        if not isinstance(description, str) or not description.strip():
            raise self._corrupt(f"task {task_id} has an empty or missing description")

        try:
            status = TaskStatus.parse(rec.get("status", ""))
        except ValidationError as e:
            raise self._corrupt(f"task {task_id}: {e}") from e

        created_at = _first_present(rec, "createdAt", "created_at")
        updated_at = _first_present(rec, "updatedAt", "updated_at")
        if not _is_number(created_at) or not _is_number(updated_at):
            raise self._corrupt(f"task {task_id} has invalid timestamps")

        created = float(created_at)
        return Task(
            id=task_id,
            description=description,
            status=status,
            created_at=created,
            updated_at=max(created, float(updated_at)),
        )

    # ---- save ----

    @staticmethod
    def _encode(collection: TaskCollection) -> dict[str, Any]:
        return {
            "version": FORMAT_VERSION,
            "next_id": collection.next_id,
            "tasks": [
                {
                    "id": t.id,
                    "description": t.description,
                    "status": t.status.value,
                    "createdAt": t.created_at,
                    "updatedAt": t.updated_at,
                }
                for t in collection.tasks
            ],
        }

    def save(self, collection: TaskCollection) -> None:
        path = self._path
        tmp = path.with_name(path.name + ".tmp")
        try:
            payload = json.dumps(
                self._encode(collection), ensure_ascii=False, indent=2, allow_nan=False
            ) + "\n"
        except ValueError as e:
            logger.warning("Refusing to write non-finite timestamp to %s: %s", path, e)
            raise StorageWriteError(f"Cannot write task file {path}: {e}", path=path) from e

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            logger.warning("Failed to write task document %s: %s", path, e)
            raise StorageWriteError(f"Cannot write task file {path}: {e}", path=path) from e

        logger.debug("Saved %d tasks to %s", len(collection.tasks), path)


def _is_int(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def _is_number(v: Any) -> bool:
    if not isinstance(v, (int, float)) or isinstance(v, bool):
        return False
    try:
        return math.isfinite(v)
    except OverflowError:
        return False


def _first_present(rec: dict[str, Any], *keys: str) -> Any:
    for k in keys:
        if k in rec:
            return rec[k]
    return None
