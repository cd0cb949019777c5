"""Domain contracts: error taxonomy and dispatch outcomes."""

from .errors import (
    CamusShellError,
    ConnectionFailureError,
    ConnectionStringError,
    NoActiveTransactionError,
    ProviderCapabilityError,
    SourceFileNotFoundError,
    SourceFileReadError,
    TransactionAlreadyActiveError,
    TransactionStateError,
)
from .results import (
    Outcome,
    RowsAffected,
    RowsReturned,
    SchemaChangeApplied,
    TransactionCommitted,
    TransactionRolledBack,
    TransactionStarted,
)

__all__ = [
    "CamusShellError",
    "ConnectionFailureError",
    "ConnectionStringError",
    "NoActiveTransactionError",
    "ProviderCapabilityError",
    "SourceFileNotFoundError",
    "SourceFileReadError",
    "TransactionAlreadyActiveError",
    "TransactionStateError",
    "Outcome",
    "RowsAffected",
    "RowsReturned",
    "SchemaChangeApplied",
    "TransactionCommitted",
    "TransactionRolledBack",
    "TransactionStarted",
]
