"""Unit tests for statement dispatch against a connection double."""

import time

import pytest

from camusql.core.classifier import StatementKind
from camusql.core.dispatcher import dispatch, dispatch_statement
from camusql.core.session import SessionState, TransactionState
from camusql.domain.errors import NoActiveTransactionError, TransactionAlreadyActiveError
from camusql.domain.results import (
    RowsAffected,
    RowsReturned,
    SchemaChangeApplied,
    TransactionCommitted,
    TransactionRolledBack,
    TransactionStarted,
)
from tests.utils import FakeCommand, FakeConnection, make_row


class _CollectingSink:
    def __init__(self) -> None:
        self.rows: list[dict] = []

    def render_row(self, row: dict) -> None:
        self.rows.append(row)


def test_query_streams_rows_and_counts_them(
    session: SessionState, connection: FakeConnection
) -> None:
    connection.rows = [make_row(id=1, name="a"), make_row(id=2, name="b")]
    sink = _CollectingSink()

    outcome = dispatch(session, StatementKind.QUERY, "select * from t", sink)

    assert isinstance(outcome, RowsReturned)
    assert outcome.returned == 2
    assert outcome.elapsed >= 0
    assert [row["name"].value for row in sink.rows] == ["a", "b"]
    assert connection.requests == [("query", "select * from t", None, 60)]


class _SlowReaderCommand(FakeCommand):
    """Reader that returns at once but spends `delay` seconds per streamed row."""

    delay = 0.05

    def execute_reader(self):
        rows = super().execute_reader()

        def stream():
            for row in rows:
                time.sleep(self.delay)
                yield row

        return stream()


class _SlowReaderConnection(FakeConnection):
    def create_select_command(self, sql: str) -> FakeCommand:
        return _SlowReaderCommand(self, "query", sql)


def test_query_elapsed_excludes_row_streaming() -> None:
    connection = _SlowReaderConnection()
    connection.rows = [make_row(id=n) for n in range(4)]
    sink = _CollectingSink()

    outcome = dispatch(SessionState(connection=connection), StatementKind.QUERY, "select id from t", sink)

    assert isinstance(outcome, RowsReturned)
    assert outcome.returned == 4
    assert len(sink.rows) == 4
    assert outcome.elapsed < _SlowReaderCommand.delay


def test_query_without_sink_still_counts_rows(
    session: SessionState, connection: FakeConnection
) -> None:
    connection.rows = [make_row(id=1)] * 3
    outcome = dispatch(session, StatementKind.QUERY, "select id from t")
    assert outcome.rows == 3


def test_non_query_reports_affected_rows(
    session: SessionState, connection: FakeConnection
) -> None:
    connection.affected = 4

    outcome = dispatch(session, StatementKind.NON_QUERY, "update t set x = 1")

    assert isinstance(outcome, RowsAffected)
    assert outcome.affected == 4
    assert connection.requests[0][0] == "non_query"


def test_schema_change_never_carries_the_transaction(
    session: SessionState, connection: FakeConnection
) -> None:
    dispatch(session, StatementKind.BEGIN_TRANSACTION, "begin")

    outcome = dispatch(session, StatementKind.SCHEMA_CHANGE, "create table t (id int)")

    assert isinstance(outcome, SchemaChangeApplied)
    assert connection.requests == [("ddl", "create table t (id int)", None, 60)]


def test_commands_get_the_session_timeout(connection: FakeConnection) -> None:
    session = SessionState(connection=connection, command_timeout=5)
    dispatch(session, StatementKind.NON_QUERY, "delete from t")
    assert connection.requests[0][3] == 5


def test_commands_are_closed_after_use(
    session: SessionState, connection: FakeConnection
) -> None:
    dispatch(session, StatementKind.QUERY, "select 1 from t")
    dispatch(session, StatementKind.NON_QUERY, "delete from t")
    dispatch(session, StatementKind.SCHEMA_CHANGE, "drop table t")
    assert connection.closed_commands == 3


def test_commands_are_closed_when_execution_fails(
    session: SessionState, connection: FakeConnection
) -> None:
    connection.failing.add("delete from t")
    with pytest.raises(RuntimeError, match="boom"):
        dispatch(session, StatementKind.NON_QUERY, "delete from t")
    assert connection.closed_commands == 1


def test_begin_twice_fails_and_keeps_original_handle(
    session: SessionState, connection: FakeConnection
) -> None:
    assert isinstance(dispatch(session, StatementKind.BEGIN_TRANSACTION, "begin"), TransactionStarted)
    original = session.active_transaction

    with pytest.raises(TransactionAlreadyActiveError):
        dispatch(session, StatementKind.BEGIN_TRANSACTION, "start transaction")

    assert session.active_transaction is original
    assert len(connection.transactions) == 1


@pytest.mark.parametrize(
    ("kind", "statement"),
    [(StatementKind.COMMIT, "commit"), (StatementKind.ROLLBACK, "rollback")],
)
def test_commit_or_rollback_while_idle_fails(
    session: SessionState, kind: StatementKind, statement: str
) -> None:
    with pytest.raises(NoActiveTransactionError):
        dispatch(session, kind, statement)
    assert session.state is TransactionState.IDLE


def test_rollback_closes_the_transaction(
    session: SessionState, connection: FakeConnection
) -> None:
    dispatch(session, StatementKind.BEGIN_TRANSACTION, "begin")

    outcome = dispatch(session, StatementKind.ROLLBACK, "rollback")

    assert isinstance(outcome, TransactionRolledBack)
    assert connection.transactions[0].rollbacks == 1
    assert connection.transactions[0].commits == 0
    assert session.state is TransactionState.IDLE


def test_begin_insert_commit_end_to_end(
    session: SessionState, connection: FakeConnection
) -> None:
    states = []
    outcomes = []
    for statement in ["begin", "insert into t values (1)", "commit"]:
        outcomes.append(dispatch_statement(session, statement))
        states.append(session.state)

    assert states == [
        TransactionState.IN_TRANSACTION,
        TransactionState.IN_TRANSACTION,
        TransactionState.IDLE,
    ]
    assert [type(outcome) for outcome in outcomes] == [
        TransactionStarted,
        RowsAffected,
        TransactionCommitted,
    ]
    transaction = connection.transactions[0]
    assert connection.requests == [("non_query", "insert into t values (1)", transaction, 60)]
    assert transaction.commits == 1


def test_query_inside_transaction_carries_the_handle(
    session: SessionState, connection: FakeConnection
) -> None:
    dispatch_statement(session, "begin")
    dispatch_statement(session, "select * from t")
    assert connection.requests[0][2] is connection.transactions[0]


def test_new_transaction_after_commit_gets_a_new_handle(
    session: SessionState, connection: FakeConnection
) -> None:
    for statement in ["begin", "commit", "begin", "update t set a = 2"]:
        dispatch_statement(session, statement)

    assert len(connection.transactions) == 2
    assert connection.requests[-1][2] is connection.transactions[1]
