"""SQLite provider (standard-library sqlite3)."""

from .connection import SqliteCommand, SqliteConnection, SqliteTransaction

__all__ = ["SqliteCommand", "SqliteConnection", "SqliteTransaction"]
