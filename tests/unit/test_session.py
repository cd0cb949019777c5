"""Unit tests for the session transaction state machine."""

import pytest

from camusql.core.session import SessionState, TransactionState
from camusql.domain.errors import NoActiveTransactionError, TransactionAlreadyActiveError
from tests.utils import FakeConnection, FakeTransaction


def test_initial_state_is_idle(session: SessionState) -> None:
    assert session.state is TransactionState.IDLE
    assert session.active_transaction is None
    assert not session.in_transaction


def test_begin_stores_handle(session: SessionState) -> None:
    handle = FakeTransaction("tx")
    assert session.begin_transaction(lambda: handle) is handle
    assert session.state is TransactionState.IN_TRANSACTION
    assert session.active_transaction is handle


def test_second_begin_fails_without_requesting_a_handle(session: SessionState) -> None:
    original = FakeTransaction("first")
    session.begin_transaction(lambda: original)
    requested: list[str] = []

    def _open() -> FakeTransaction:
        requested.append("called")
        return FakeTransaction("second")

    with pytest.raises(TransactionAlreadyActiveError):
        session.begin_transaction(_open)

    assert requested == []
    assert session.active_transaction is original


def test_finish_clears_handle(session: SessionState) -> None:
    handle = FakeTransaction("tx")
    session.begin_transaction(lambda: handle)

    finished = session.finish_transaction(lambda h: h.commit())

    assert finished is handle
    assert handle.commits == 1
    assert session.state is TransactionState.IDLE


def test_finish_without_transaction_fails(session: SessionState) -> None:
    with pytest.raises(NoActiveTransactionError):
        session.finish_transaction(lambda h: h.commit())
    assert session.state is TransactionState.IDLE


def test_failed_finish_keeps_handle(session: SessionState) -> None:
    handle = FakeTransaction("tx")
    session.begin_transaction(lambda: handle)

    def _fail(_handle: FakeTransaction) -> None:
        raise RuntimeError("network down")

    with pytest.raises(RuntimeError):
        session.finish_transaction(_fail)
    assert session.active_transaction is handle


def test_failed_open_leaves_session_idle(session: SessionState) -> None:
    def _fail() -> FakeTransaction:
        raise RuntimeError("refused")

    with pytest.raises(RuntimeError):
        session.begin_transaction(_fail)
    assert session.state is TransactionState.IDLE


def test_take_transaction_detaches_handle(session: SessionState) -> None:
    handle = FakeTransaction("tx")
    session.begin_transaction(lambda: handle)

    assert session.take_transaction() is handle
    assert session.take_transaction() is None
    assert session.state is TransactionState.IDLE


def test_history_is_append_only_and_per_session() -> None:
    first = SessionState(connection=FakeConnection())
    second = SessionState(connection=FakeConnection())

    first.record("select 1")
    first.record("select 2")

    assert first.history == ["select 1", "select 2"]
    assert second.history == []
