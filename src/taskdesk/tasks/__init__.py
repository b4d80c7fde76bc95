"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus)
- task_store.py: SQLite-backed storage, scoped by owner username
"""
