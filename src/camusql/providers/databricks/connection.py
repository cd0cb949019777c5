"""
Databricks SQL Connection

Executes statements against a Databricks SQL warehouse using the Databricks
SQL Statement Execution API. Statements are submitted asynchronously and
polled until they reach a terminal state or the command timeout elapses.
"""

import logging
import time
from collections.abc import Iterator
from typing import Any

from databricks.sdk import WorkspaceClient
from databricks.sdk.service.sql import StatementState

from camusql.domain.errors import ConnectionFailureError, ProviderCapabilityError
from camusql.providers.base.connection import (
    BaseCommand,
    ColumnType,
    ColumnValue,
    ConnectionSettings,
    Row,
)
from camusql.providers.databricks.auth import create_databricks_client

log = logging.getLogger(__name__)

_INTEGER_TYPES = {"BYTE", "SHORT", "INT", "LONG"}
_FLOAT_TYPES = {"FLOAT", "DOUBLE", "DECIMAL"}
_TERMINAL_STATES = (StatementState.SUCCEEDED, StatementState.FAILED, StatementState.CANCELED)


def _type_name(column: Any) -> str:
    type_name = getattr(column, "type_name", None)
    if type_name is None:
        return "STRING"
    return str(getattr(type_name, "value", type_name)).upper()


def _to_column(type_name: str, raw: Any) -> ColumnValue:
    """Convert one JSON_ARRAY cell (always a string or None) to a typed value."""
    if raw is None:
        return ColumnValue(type=ColumnType.NULL)
    if type_name in _INTEGER_TYPES:
        return ColumnValue(type=ColumnType.INTEGER64, value=int(raw))
    if type_name in _FLOAT_TYPES:
        return ColumnValue(type=ColumnType.FLOAT64, value=float(raw))
    if type_name == "BOOLEAN":
        return ColumnValue(type=ColumnType.BOOL, value=str(raw).lower() == "true")
    return ColumnValue(type=ColumnType.STRING, value=str(raw))


class DatabricksCommand(BaseCommand):
    """Command bound to one SQL string on a DatabricksConnection"""

    def __init__(self, connection: "DatabricksConnection", sql: str) -> None:
        super().__init__(sql)
        self._connection = connection

    def _run(self) -> Any:
        if self.transaction is not None:
            raise ProviderCapabilityError(
                message="Databricks statement execution does not support interactive transactions"
            )
        return self._connection.execute_statement(self.sql, self.timeout)

    def execute_non_query(self) -> int:
        response = self._run()
        for row in self._connection.iter_rows(response):
            affected = row.get("num_affected_rows")
            if affected is not None and affected.value is not None:
                return int(affected.value)
            break
        return 0

    def execute_reader(self) -> Iterator[Row]:
        response = self._run()
        return self._connection.iter_rows(response)

    def execute_ddl(self) -> bool:
        self._run()
        return True


class DatabricksConnection:
    """Session against one Databricks SQL warehouse

    Attributes:
        client: Authenticated Databricks WorkspaceClient
        warehouse_id: SQL warehouse to run statements on
        catalog: Default catalog for statements
        schema: Default schema for statements
        poll_interval: Seconds between status polls
    """

    def __init__(
        self,
        client: WorkspaceClient,
        warehouse_id: str,
        catalog: str | None = None,
        schema: str | None = None,
        poll_interval: float = 1.0,
    ) -> None:
        self.client = client
        self.warehouse_id = warehouse_id
        self.catalog = catalog
        self.schema = schema
        self.poll_interval = poll_interval

    @classmethod
    def from_settings(cls, settings: ConnectionSettings) -> "DatabricksConnection":
        if not settings.warehouse:
            raise ConnectionFailureError(
                message="Databricks connections require Warehouse=<warehouse id>"
            )
        client = create_databricks_client(profile=settings.profile, host=settings.endpoint)
        return cls(
            client=client,
            warehouse_id=settings.warehouse,
            catalog=settings.database,
            schema=settings.db_schema,
        )

    def open(self) -> None:
        """Nothing to open: every statement is an independent API request."""

    def ping(self) -> None:
        self.execute_statement("SELECT 1", timeout_seconds=30)

    def close(self) -> None:
        """Nothing to release."""

    def create_command(self, sql: str) -> DatabricksCommand:
        return DatabricksCommand(self, sql)

    def create_select_command(self, sql: str) -> DatabricksCommand:
        return DatabricksCommand(self, sql)

    def create_ddl_command(self, sql: str) -> DatabricksCommand:
        return DatabricksCommand(self, sql)

    def begin_transaction(self) -> Any:
        raise ProviderCapabilityError(
            message="Databricks statement execution does not support interactive transactions"
        )

    def execute_statement(self, sql: str, timeout_seconds: int) -> Any:
        """Submit a statement and poll until it succeeds.

        Returns:
            The SUCCEEDED statement response (first result chunk included)

        Raises:
            ConnectionFailureError: On failure, cancellation, timeout or API error
        """
        try:
            response = self.client.statement_execution.execute_statement(
                warehouse_id=self.warehouse_id,
                statement=sql,
                catalog=self.catalog,
                schema=self.schema,
                wait_timeout="0s",
            )
        except Exception as e:
            raise ConnectionFailureError(message=f"API error: {e}") from e

        statement_id = response.statement_id or ""
        if not statement_id:
            raise ConnectionFailureError(message="Databricks did not return a statement ID")

        terminal = self._poll_until_terminal(statement_id, timeout_seconds)
        if terminal is None:
            self._cancel(statement_id)
            raise ConnectionFailureError(
                message=f"Statement execution timed out after {timeout_seconds}s"
            )

        state = terminal.status.state
        if state == StatementState.SUCCEEDED:
            return terminal
        if state == StatementState.FAILED:
            error = terminal.status.error
            raise ConnectionFailureError(message=error.message if error else "Unknown error")
        raise ConnectionFailureError(message="Statement was canceled")

    def _poll_until_terminal(self, statement_id: str, timeout_seconds: int) -> Any | None:
        """Poll until the statement reaches a terminal state or times out.

        Returns the final status response, or None on timeout.
        """
        start = time.time()
        while (time.time() - start) < timeout_seconds:
            try:
                resp = self.client.statement_execution.get_statement(statement_id)
            except Exception as e:
                raise ConnectionFailureError(message=f"API error: {e}") from e
            if not resp or not resp.status:
                raise ConnectionFailureError(message="Failed to get statement status")
            if resp.status.state in _TERMINAL_STATES:
                return resp
            time.sleep(self.poll_interval)
        return None

    def _cancel(self, statement_id: str) -> None:
        try:
            self.client.statement_execution.cancel_execution(statement_id)
        except Exception:
            log.warning("Could not cancel statement %s", statement_id, exc_info=True)

    def iter_rows(self, response: Any) -> Iterator[Row]:
        """Yield typed rows from a SUCCEEDED response, fetching further chunks lazily."""
        if not (response.manifest and response.manifest.schema and response.manifest.schema.columns):
            return
        columns = [(col.name, _type_name(col)) for col in response.manifest.schema.columns]

        chunk = response.result
        while chunk is not None:
            for record in chunk.data_array or []:
                yield {
                    name: _to_column(type_name, record[i] if i < len(record) else None)
                    for i, (name, type_name) in enumerate(columns)
                }
            next_index = getattr(chunk, "next_chunk_index", None)
            if next_index is None:
                return
            chunk = self.client.statement_execution.get_statement_result_chunk_n(
                response.statement_id, next_index
            )
