"""The application database connection."""

from __future__ import annotations

import logging
import os
import sqlite3

from .constants import DATABASE_FILENAME
from .habit_dao import HabitDao

_log = logging.getLogger(__name__)


class DatabaseManager:
    """Owns the SQLite connection and the habit data access object."""

    _instance: DatabaseManager | None = None

    def __init__(self, path: str | os.PathLike[str] = DATABASE_FILENAME) -> None:
        self.path = os.fspath(path)
        self._connection = sqlite3.connect(self.path, isolation_level=None)
        self._closed = False
        self.habit_dao = HabitDao(self._connection)
        try:
            self.habit_dao.init()
        except sqlite3.Error:
            self.close()
            raise

    @classmethod
    def instance(cls) -> DatabaseManager:
        """Return the shared database opened at the default file name."""
        if cls._instance is None or cls._instance.closed:
            cls._instance = cls()
        return cls._instance

    @property
    def connection(self) -> sqlite3.Connection:
        """The underlying SQLite connection."""
        return self._connection

    @property
    def closed(self) -> bool:
        """Whether the connection has been closed."""
        return self._closed

    def close(self) -> None:
        """Close the connection; further calls do nothing."""
        if not self._closed:
            self._connection.close()
            self._closed = True
            _log.debug("database %s closed", self.path)

    def __enter__(self) -> DatabaseManager:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()