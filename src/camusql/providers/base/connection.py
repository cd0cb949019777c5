"""
Base Connection Protocol

Defines the contract the shell consumes from a database client: commands
bound to SQL text, typed result rows and transaction handles. Providers
implement this protocol; the dispatcher never talks to a network itself.
"""

from collections.abc import Iterator
from enum import Enum
from types import TracebackType
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field, field_validator

from camusql.domain.errors import ConnectionStringError


class ColumnType(str, Enum):
    """Type tag of one column value in a result row"""

    ID = "id"
    STRING = "string"
    INTEGER64 = "int64"
    FLOAT64 = "float64"
    BOOL = "bool"
    NULL = "null"


class ColumnValue(BaseModel):
    """One typed column value

    Attributes:
        type: Column type tag
        value: Python value (None for NULL)
    """

    model_config = ConfigDict(frozen=True)

    type: ColumnType = Field(..., description="Column type tag")
    value: Any = Field(None, description="Python value")

    @classmethod
    def from_python(cls, value: Any) -> "ColumnValue":
        """Infer the column type tag from a plain Python value."""
        if value is None:
            return cls(type=ColumnType.NULL)
        if isinstance(value, bool):
            return cls(type=ColumnType.BOOL, value=value)
        if isinstance(value, int):
            return cls(type=ColumnType.INTEGER64, value=value)
        if isinstance(value, float):
            return cls(type=ColumnType.FLOAT64, value=value)
        if isinstance(value, bytes):
            return cls(type=ColumnType.STRING, value=value.hex())
        return cls(type=ColumnType.STRING, value=str(value))


Row = dict[str, ColumnValue]


class TransactionHandle(Protocol):
    """One open transaction; consumed by exactly one commit or rollback"""

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


class Command(Protocol):
    """Executable command bound to one SQL string

    Attributes:
        timeout: Request timeout in seconds, enforced by the provider
        transaction: Transaction the command runs in, if any
    """

    timeout: int
    transaction: TransactionHandle | None

    def execute_non_query(self) -> int:
        """Execute and return the number of affected rows."""
        ...

    def execute_reader(self) -> Iterator[Row]:
        """Execute and return the rows. Returns once the first response arrived."""
        ...

    def execute_ddl(self) -> bool:
        """Execute a schema change and report success."""
        ...

    def close(self) -> None: ...

    def __enter__(self) -> "Command": ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback_obj: TracebackType | None,
    ) -> None: ...


class Connection(Protocol):
    """Database session consumed by the dispatcher"""

    def open(self) -> None: ...

    def ping(self) -> None: ...

    def close(self) -> None: ...

    def create_command(self, sql: str) -> Command: ...

    def create_select_command(self, sql: str) -> Command: ...

    def create_ddl_command(self, sql: str) -> Command: ...

    def begin_transaction(self) -> TransactionHandle: ...


class BaseCommand:
    """Shared command plumbing: timeout/transaction slots and context management"""

    def __init__(self, sql: str, timeout: int = 60) -> None:
        self.sql = sql
        self.timeout = timeout
        self.transaction: TransactionHandle | None = None
        self.closed = False

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> "BaseCommand":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback_obj: TracebackType | None,
    ) -> None:
        del exc_type, exc, traceback_obj
        self.close()


class ConnectionSettings(BaseModel):
    """Connection options parsed from a `Key=Value;Key=Value` connection string

    Attributes:
        provider: Provider id (e.g., "sqlite", "databricks")
        database: Database file (sqlite) or catalog (databricks)
        db_schema: Default schema (databricks)
        endpoint: Workspace/host URL (databricks)
        profile: Authentication profile name (databricks)
        warehouse: SQL warehouse ID (databricks)
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    provider: str = Field(default="sqlite", description="Provider id")
    database: str | None = Field(None, description="Database or catalog name")
    db_schema: str | None = Field(None, alias="schema", description="Default schema")
    endpoint: str | None = Field(None, description="Server endpoint URL")
    profile: str | None = Field(None, description="Authentication profile name")
    warehouse: str | None = Field(None, description="SQL warehouse ID")

    @field_validator("provider")
    @classmethod
    def _normalize_provider(cls, value: str) -> str:
        return value.strip().lower()


_CONNECTION_KEYS = {"provider", "database", "schema", "endpoint", "profile", "warehouse"}


def parse_connection_string(connection_string: str) -> ConnectionSettings:
    """Parse a connection string such as `Provider=sqlite;Database=app.db`.

    Keys are case-insensitive; values keep their case. Empty segments are
    ignored so a trailing `;` is accepted.

    Raises:
        ConnectionStringError: On a segment without `=` or an unknown key
    """
    values: dict[str, str] = {}
    for segment in connection_string.split(";"):
        segment = segment.strip()
        if not segment:
            continue
        key, sep, value = segment.partition("=")
        key = key.strip().lower()
        if not sep or not key:
            raise ConnectionStringError(
                message=f"Malformed connection string segment: '{segment}'"
            )
        if key not in _CONNECTION_KEYS:
            known = ", ".join(sorted(_CONNECTION_KEYS))
            raise ConnectionStringError(
                message=f"Unknown connection string key '{key}'. Known keys: {known}"
            )
        values[key] = value.strip()
    return ConnectionSettings.model_validate(values)
