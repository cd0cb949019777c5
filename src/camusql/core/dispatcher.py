"""
Statement dispatch.

Maps a classified statement onto the connection capability that executes it,
keeps the session's transaction slot up to date and reports timings.
"""

import logging
import time
from collections.abc import Callable
from typing import Protocol

from camusql.core.classifier import StatementKind, classify
from camusql.core.session import SessionState
from camusql.domain.results import (
    Outcome,
    RowsAffected,
    RowsReturned,
    SchemaChangeApplied,
    TransactionCommitted,
    TransactionRolledBack,
    TransactionStarted,
)
from camusql.providers.base.connection import Row

log = logging.getLogger(__name__)


class RowSink(Protocol):
    """Receives query rows while they are streamed."""

    def render_row(self, row: Row) -> None: ...


def _execute_query(session: SessionState, statement: str, sink: RowSink | None) -> Outcome:
    with session.connection.create_select_command(statement) as command:
        command.timeout = session.command_timeout
        command.transaction = session.active_transaction

        start = time.perf_counter()
        reader = command.execute_reader()
        elapsed = time.perf_counter() - start

        rows = 0
        for row in reader:
            if sink is not None:
                sink.render_row(row)
            rows += 1

    return RowsReturned(elapsed=elapsed, returned=rows)


def _execute_schema_change(
    session: SessionState, statement: str, sink: RowSink | None
) -> Outcome:
    del sink
    # DDL never runs inside the session transaction.
    with session.connection.create_ddl_command(statement) as command:
        command.timeout = session.command_timeout

        start = time.perf_counter()
        command.execute_ddl()
        elapsed = time.perf_counter() - start

    return SchemaChangeApplied(elapsed=elapsed)


def _execute_begin(session: SessionState, statement: str, sink: RowSink | None) -> Outcome:
    del statement, sink
    start = time.perf_counter()
    session.begin_transaction(session.connection.begin_transaction)
    return TransactionStarted(elapsed=time.perf_counter() - start)


def _execute_commit(session: SessionState, statement: str, sink: RowSink | None) -> Outcome:
    del statement, sink
    start = time.perf_counter()
    session.finish_transaction(lambda handle: handle.commit())
    return TransactionCommitted(elapsed=time.perf_counter() - start)


def _execute_rollback(session: SessionState, statement: str, sink: RowSink | None) -> Outcome:
    del statement, sink
    start = time.perf_counter()
    session.finish_transaction(lambda handle: handle.rollback())
    return TransactionRolledBack(elapsed=time.perf_counter() - start)


def _execute_non_query(session: SessionState, statement: str, sink: RowSink | None) -> Outcome:
    del sink
    with session.connection.create_command(statement) as command:
        command.timeout = session.command_timeout
        command.transaction = session.active_transaction

        start = time.perf_counter()
        affected = command.execute_non_query()
        elapsed = time.perf_counter() - start

    return RowsAffected(elapsed=elapsed, affected=affected)


_HANDLERS: dict[StatementKind, Callable[[SessionState, str, RowSink | None], Outcome]] = {
    StatementKind.QUERY: _execute_query,
    StatementKind.SCHEMA_CHANGE: _execute_schema_change,
    StatementKind.BEGIN_TRANSACTION: _execute_begin,
    StatementKind.COMMIT: _execute_commit,
    StatementKind.ROLLBACK: _execute_rollback,
    StatementKind.NON_QUERY: _execute_non_query,
}


def dispatch(
    session: SessionState,
    kind: StatementKind,
    statement: str,
    sink: RowSink | None = None,
) -> Outcome:
    """Execute one classified statement against the session's connection.

    Args:
        session: Session holding the connection and transaction slot
        kind: Statement category (see classify)
        statement: Trimmed statement text
        sink: Optional receiver for query rows

    Returns:
        Outcome describing the result and its elapsed time

    Raises:
        TransactionAlreadyActiveError: On begin while a transaction is open
        NoActiveTransactionError: On commit/rollback while idle
        Exception: Anything the connection raises is propagated unchanged
    """
    log.debug("Dispatching %s statement: %s", kind.value, statement)
    return _HANDLERS[kind](session, statement, sink)


def dispatch_statement(
    session: SessionState, statement: str, sink: RowSink | None = None
) -> Outcome:
    """Classify and dispatch one statement."""
    return dispatch(session, classify(statement), statement, sink)
