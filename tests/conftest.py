# tests/conftest.py

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path
from types import SimpleNamespace

import pytest

from task_tracker.tasks.json_backend import JsonFileBackend
from task_tracker.tasks.task_store import TaskStore

from .fakes import FakeClock, InMemoryBackend


@pytest.fixture(autouse=True)
def _clean_tracker_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in list(os.environ):
        if name.startswith("TRACKER_"):
            monkeypatch.delenv(name)


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Iterator[None]:
    """main() reconfigures the root logger; drop the handlers it installed afterwards."""
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    yield
    for h in list(root.handlers):
        if h not in before and type(h) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
    logging.captureWarnings(False)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the CLI.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep tests isolated from the developer's environment and .env file.
    """
    return SimpleNamespace(
        app_name="task-tracker-test",
        log_level="ERROR",
        log_file_enabled=False,
        log_dir=tmp_path / "logs",
        data_dir=tmp_path,
        tasks_path=tmp_path / "tasks.json",
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def memory_backend() -> InMemoryBackend:
    return InMemoryBackend()


@pytest.fixture()
def store(memory_backend: InMemoryBackend, clock: FakeClock) -> TaskStore:
    """TaskStore over the in-memory backend with a controllable clock."""
    return TaskStore(memory_backend, clock=clock)


@pytest.fixture()
def tasks_file(tmp_path: Path) -> Path:
    return tmp_path / "tasks.json"


@pytest.fixture()
def file_store(tasks_file: Path, clock: FakeClock) -> TaskStore:
    """TaskStore over a real JSON document in tmp_path."""
    return TaskStore(JsonFileBackend(tasks_file), clock=clock)
