"""
camusql

Interactive SQL shell: quote-aware statement segmentation, keyword-based
classification and transaction-aware dispatch against a database connection.
"""

__version__ = "0.0.10"

from .core import (
    SessionState,
    StatementKind,
    TransactionState,
    classify,
    dispatch,
    dispatch_statement,
    iter_statements,
    split_sql_statements,
)
from .domain import (
    CamusShellError,
    NoActiveTransactionError,
    Outcome,
    TransactionAlreadyActiveError,
)

__all__ = [
    "__version__",
    "SessionState",
    "StatementKind",
    "TransactionState",
    "classify",
    "dispatch",
    "dispatch_statement",
    "iter_statements",
    "split_sql_statements",
    "CamusShellError",
    "NoActiveTransactionError",
    "Outcome",
    "TransactionAlreadyActiveError",
]
