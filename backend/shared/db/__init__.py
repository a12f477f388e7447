"""SQLite database layer: connection management and repository implementations."""

from shared.db.connection import Database
from shared.db.round_repository import SqliteRoundRepository

__all__ = [
    "Database",
    "SqliteRoundRepository",
]
