"""Single-screen to-do list backed by local SQLite or JSON storage."""

__version__ = "0.1.0"
