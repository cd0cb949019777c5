"""
Core Engine

Provider-agnostic statement handling for the shell:
- SQL utils: quote-aware statement segmentation
- Classifier: statement kind from the leading keyword
- Session: transaction slot and state machine
- Dispatcher: executes classified statements against a connection
- Interrupt: forced rollback and history flush on shutdown
"""

from .classifier import StatementKind, classify
from .dispatcher import dispatch, dispatch_statement
from .history import HistoryStore
from .interrupt import ShutdownRequested, force_rollback, handle_interrupt
from .session import SessionState, TransactionState
from .settings import ShellSettings
from .sql_utils import iter_statements, split_sql_statements

__all__ = [
    "StatementKind",
    "classify",
    "dispatch",
    "dispatch_statement",
    "HistoryStore",
    "ShutdownRequested",
    "force_rollback",
    "handle_interrupt",
    "SessionState",
    "TransactionState",
    "ShellSettings",
    "iter_statements",
    "split_sql_statements",
]
