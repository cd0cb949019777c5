"""
Session state and the per-session transaction state machine.

IDLE --begin--> IN_TRANSACTION --commit/rollback--> IDLE

Illegal transitions raise recoverable TransactionStateError subclasses and
leave the state untouched.
"""

import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from camusql.domain.errors import NoActiveTransactionError, TransactionAlreadyActiveError
from camusql.providers.base.connection import Connection, TransactionHandle


class TransactionState(str, Enum):
    """Transaction state of one session"""

    IDLE = "idle"
    IN_TRANSACTION = "in_transaction"


@dataclass
class SessionState:
    """Mutable state of one interactive session.

    The connection is owned by the caller. The active transaction handle is
    owned by the session while open and is only read or replaced under
    `_lock`, so an interrupt never observes a half-updated slot.
    """

    connection: Connection
    command_timeout: int = 60
    history: list[str] = field(default_factory=list)
    _transaction: TransactionHandle | None = field(default=None, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    @property
    def active_transaction(self) -> TransactionHandle | None:
        with self._lock:
            return self._transaction

    @property
    def state(self) -> TransactionState:
        if self.active_transaction is None:
            return TransactionState.IDLE
        return TransactionState.IN_TRANSACTION

    @property
    def in_transaction(self) -> bool:
        return self.state is TransactionState.IN_TRANSACTION

    def record(self, line: str) -> None:
        """Append one input line to the in-memory history."""
        self.history.append(line)

    def begin_transaction(
        self, open_transaction: Callable[[], TransactionHandle]
    ) -> TransactionHandle:
        """Open a transaction through `open_transaction` and store its handle.

        Raises:
            TransactionAlreadyActiveError: If a handle is already stored; the
                stored handle is left unchanged and nothing is requested.
        """
        with self._lock:
            if self._transaction is not None:
                raise TransactionAlreadyActiveError()
            handle = open_transaction()
            self._transaction = handle
            return handle

    def finish_transaction(self, finish: Callable[[TransactionHandle], None]) -> TransactionHandle:
        """Apply `finish` (commit or rollback) to the stored handle, then clear it.

        If `finish` raises, the handle stays stored so the user can retry or
        roll back.

        Raises:
            NoActiveTransactionError: If no handle is stored
        """
        with self._lock:
            handle = self._transaction
            if handle is None:
                raise NoActiveTransactionError()
            finish(handle)
            self._transaction = None
            return handle

    def take_transaction(self) -> TransactionHandle | None:
        """Detach and return the stored handle (None when idle)."""
        with self._lock:
            handle = self._transaction
            self._transaction = None
            return handle
