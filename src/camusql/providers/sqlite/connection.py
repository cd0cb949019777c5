"""
SQLite Connection

Implements the connection protocol on top of the standard-library sqlite3
module. The connection runs in autocommit mode; transactions are opened and
closed explicitly with BEGIN/COMMIT/ROLLBACK.
"""

import logging
import sqlite3
from collections.abc import Iterator

from camusql.domain.errors import ConnectionFailureError
from camusql.providers.base.connection import (
    BaseCommand,
    ColumnType,
    ColumnValue,
    ConnectionSettings,
    Row,
)

log = logging.getLogger(__name__)

ID_COLUMNS = {"rowid", "oid", "_rowid_"}


def _to_column(name: str, value: object) -> ColumnValue:
    if name.lower() in ID_COLUMNS and value is not None:
        return ColumnValue(type=ColumnType.ID, value=str(value))
    return ColumnValue.from_python(value)


class SqliteTransaction:
    """Open SQLite transaction; valid until commit or rollback"""

    def __init__(self, connection: "SqliteConnection") -> None:
        self._connection = connection
        self.closed = False

    def commit(self) -> None:
        self._finish("COMMIT")

    def rollback(self) -> None:
        self._finish("ROLLBACK")

    def _finish(self, verb: str) -> None:
        if self.closed:
            raise ConnectionFailureError(message=f"Cannot {verb.lower()}: transaction already closed")
        self._connection.execute_raw(verb)
        self.closed = True


class SqliteCommand(BaseCommand):
    """Command bound to one SQL string on a SqliteConnection"""

    def __init__(self, connection: "SqliteConnection", sql: str) -> None:
        super().__init__(sql)
        self._connection = connection

    def _check_transaction(self) -> None:
        if isinstance(self.transaction, SqliteTransaction) and self.transaction.closed:
            raise ConnectionFailureError(message="Command bound to a closed transaction")

    def execute_non_query(self) -> int:
        self._check_transaction()
        cursor = self._connection.execute_raw(self.sql, timeout=self.timeout)
        return max(cursor.rowcount, 0)

    def execute_reader(self) -> Iterator[Row]:
        self._check_transaction()
        cursor = self._connection.execute_raw(self.sql, timeout=self.timeout)
        columns = [description[0] for description in cursor.description or ()]
        return (
            {name: _to_column(name, value) for name, value in zip(columns, record)}
            for record in cursor
        )

    def execute_ddl(self) -> bool:
        self._connection.execute_raw(self.sql, timeout=self.timeout)
        return True


class SqliteConnection:
    """Single SQLite database session

    Attributes:
        database: Database file path or ":memory:"
    """

    def __init__(self, database: str = ":memory:") -> None:
        self.database = database
        self._conn: sqlite3.Connection | None = None

    @classmethod
    def from_settings(cls, settings: ConnectionSettings) -> "SqliteConnection":
        return cls(database=settings.database or ":memory:")

    def open(self) -> None:
        if self._conn is not None:
            return
        try:
            self._conn = sqlite3.connect(self.database, isolation_level=None)
        except sqlite3.Error as e:
            raise ConnectionFailureError(
                message=f"Could not open SQLite database '{self.database}': {e}"
            ) from e
        log.debug("Opened SQLite database %s", self.database)

    def ping(self) -> None:
        self.execute_raw("SELECT 1")

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def execute_raw(self, sql: str, timeout: int | None = None) -> sqlite3.Cursor:
        """Execute one statement; sqlite3 errors become ConnectionFailureError."""
        if self._conn is None:
            raise ConnectionFailureError(message="Connection is not open")
        if timeout is not None:
            self._conn.execute(f"PRAGMA busy_timeout = {int(timeout) * 1000}")
        try:
            return self._conn.execute(sql)
        except sqlite3.Error as e:
            raise ConnectionFailureError(message=str(e)) from e

    def create_command(self, sql: str) -> SqliteCommand:
        return SqliteCommand(self, sql)

    def create_select_command(self, sql: str) -> SqliteCommand:
        return SqliteCommand(self, sql)

    def create_ddl_command(self, sql: str) -> SqliteCommand:
        return SqliteCommand(self, sql)

    def begin_transaction(self) -> SqliteTransaction:
        self.execute_raw("BEGIN")
        return SqliteTransaction(self)
