# src/task_tracker/__main__.py

from __future__ import annotations

from .cli.main import main

if __name__ == "__main__":
    raise SystemExit(main())
