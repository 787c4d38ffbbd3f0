from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from typing import Iterator

MEMORY = ":memory:"


class Database:
    """SQLite connection holding the link store and the document cache.

    Reads go through :meth:`fetch_one`/:meth:`fetch_all`; every logical
    write runs inside :meth:`write` so it is committed or rolled back whole.
    """

    def __init__(self, path: str = MEMORY) -> None:
        self._path = path
        self._conn: sqlite3.Connection | None = None

    def connect(self) -> None:
        """Open the connection; file databases use WAL journaling."""
        self._conn = sqlite3.connect(self._path)
        self._conn.row_factory = sqlite3.Row
        if self._path != MEMORY:
            self._conn.execute("PRAGMA journal_mode=WAL")

    def close(self) -> None:
        if self._conn:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> Database:
        if self._conn is None:
            self.connect()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _connection(self) -> sqlite3.Connection:
        assert self._conn is not None, "Database not connected"
        return self._conn

    def execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        return self._connection().execute(sql, params)

    def executescript(self, script: str) -> None:
        """Run a multi-statement script such as the schema."""
        self._connection().executescript(script)

    def fetch_one(self, sql: str, params: tuple = ()) -> sqlite3.Row | None:
        return self.execute(sql, params).fetchone()

    def fetch_all(self, sql: str, params: tuple = ()) -> list[sqlite3.Row]:
        return self.execute(sql, params).fetchall()

    @contextmanager
    def write(self) -> Iterator[None]:
        """Commit the enclosed statements together, or roll them all back on error."""
        conn = self._connection()
        try:
            yield
            conn.commit()
        except Exception:
            conn.rollback()
            raise
