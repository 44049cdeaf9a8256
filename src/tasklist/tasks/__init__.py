"""
Task subsystem.

Components:
- task_models.py: data structures (Task) and title validation
- task_store.py: SQLite-backed store (default)
- json_store.py: single-file JSON store
"""
