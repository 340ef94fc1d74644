"""
SQLite connection handle for liteorm.

A `ConnectionHandle` owns one SQLite connection for its whole lifetime and the
lock that serializes mutating statements. The connection runs in autocommit
mode, so each statement is its own unit of work. The handle is closed exactly
once: explicitly, or by the atexit hook registered when it was opened.
"""

from __future__ import annotations

import atexit
import logging
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, List, Optional

from liteorm.errors import DatabaseClosedError, LiteOrmError, StatementExecutionFailure
from liteorm.utils.logging import get_logger

log = get_logger(__name__)

MEMORY_PATH = ":memory:"


def open_connection(path: str, check_same_thread: bool = False) -> sqlite3.Connection:
    """
    Open an autocommit SQLite connection with name-addressable rows.

    The parent directory of a file database is created when missing.

    Raises
    ------
    LiteOrmError
        If the database file cannot be opened.
    """
    if path != MEMORY_PATH and not path.startswith("file:"):
        Path(path).expanduser().parent.mkdir(parents=True, exist_ok=True)
    try:
        conn = sqlite3.connect(
            path,
            check_same_thread=check_same_thread,
            isolation_level=None,
            uri=path.startswith("file:"),
        )
    except sqlite3.Error as exc:
        raise LiteOrmError(f"cannot open database {path!r}: {exc}") from exc
    conn.row_factory = sqlite3.Row
    return conn


class ConnectionHandle:
    """
    Shared connection plus the mutation lock.

    Reads go straight to the connection; writers hold `mutation()` so only one
    mutating call is in flight at a time.
    """

    def __init__(self, path: str, check_same_thread: bool = False, echo: bool = False) -> None:
        self.path = path
        self._echo_level = logging.INFO if echo else logging.DEBUG
        self._write_lock = threading.Lock()
        self._state_lock = threading.Lock()
        self._connection: Optional[sqlite3.Connection] = open_connection(path, check_same_thread)
        atexit.register(self.close)
        log.debug("Connection opened", extra={"path": path})

    @property
    def closed(self) -> bool:
        return self._connection is None

    @property
    def connection(self) -> sqlite3.Connection:
        conn = self._connection
        if conn is None:
            raise DatabaseClosedError(f"database {self.path!r} is closed")
        return conn

    @contextmanager
    def mutation(self) -> Generator[ConnectionHandle, None, None]:
        """Hold the exclusive write lock for the duration of the block."""
        with self._write_lock:
            yield self

    def _run(self, statement: str) -> sqlite3.Cursor:
        log.log(self._echo_level, statement, extra={"statement": statement})
        try:
            return self.connection.execute(statement)
        except sqlite3.Error as exc:
            raise StatementExecutionFailure(statement, str(exc)) from exc

    def execute(self, statement: str) -> int:
        """Run a statement and return the number of affected rows."""
        cursor = self._run(statement)
        try:
            return cursor.rowcount
        finally:
            cursor.close()

    def execute_insert(self, statement: str) -> int:
        """Run an insert and return the rowid it assigned."""
        cursor = self._run(statement)
        try:
            return cursor.lastrowid
        finally:
            cursor.close()

    def query(self, statement: str) -> List[sqlite3.Row]:
        """Run a query and return every row."""
        cursor = self._run(statement)
        try:
            return cursor.fetchall()
        except sqlite3.Error as exc:
            raise StatementExecutionFailure(statement, str(exc)) from exc
        finally:
            cursor.close()

    def close(self) -> None:
        """
        Close the connection. Safe to call more than once.

        This is called automatically on exit via atexit hook.
        """
        with self._state_lock:
            conn, self._connection = self._connection, None
        if conn is None:
            return
        atexit.unregister(self.close)
        conn.close()
        log.debug("Connection closed", extra={"path": self.path})


__all__ = ["ConnectionHandle", "open_connection", "MEMORY_PATH"]
