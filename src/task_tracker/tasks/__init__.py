"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus, TaskCollection)
- json_backend.py: JSON document storage (load/save of the whole collection)
- task_store.py: operations and invariants over the collection
"""
