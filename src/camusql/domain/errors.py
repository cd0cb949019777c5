"""Unified error taxonomy for statement dispatch and the shell loop."""

from dataclasses import dataclass


@dataclass(slots=True)
class CamusShellError(Exception):
    """Base class for shell/domain-level failures."""

    message: str
    code: str

    def __str__(self) -> str:
        return self.message


class TransactionStateError(CamusShellError):
    """Raised for illegal transaction transitions. Recoverable: the batch continues."""


@dataclass
class TransactionAlreadyActiveError(TransactionStateError):
    """Raised when a transaction is begun while another one is open."""

    message: str = "There's an active transaction already"
    code: str = "transaction_already_active"


@dataclass
class NoActiveTransactionError(TransactionStateError):
    """Raised on commit/rollback without an open transaction."""

    message: str = "There's no active transaction"
    code: str = "no_active_transaction"


@dataclass
class ConnectionFailureError(CamusShellError):
    """Raised when the connection collaborator cannot complete a request."""

    code: str = "connection_failure"


@dataclass
class ProviderCapabilityError(CamusShellError):
    """Raised when a provider cannot satisfy a requested capability."""

    code: str = "provider_capability"


@dataclass
class ConnectionStringError(CamusShellError):
    """Raised for malformed or unsupported connection strings."""

    code: str = "invalid_connection_string"


@dataclass
class SourceFileNotFoundError(CamusShellError):
    """Raised when `source <path>` points at a missing file."""

    code: str = "source_not_found"


@dataclass
class SourceFileReadError(CamusShellError):
    """Raised when a `source` file exists but cannot be read as UTF-8 text."""

    code: str = "source_unreadable"
