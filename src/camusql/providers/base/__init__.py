"""Provider-agnostic connection contracts."""

from .connection import (
    BaseCommand,
    ColumnType,
    ColumnValue,
    Command,
    Connection,
    ConnectionSettings,
    Row,
    TransactionHandle,
    parse_connection_string,
)

__all__ = [
    "BaseCommand",
    "ColumnType",
    "ColumnValue",
    "Command",
    "Connection",
    "ConnectionSettings",
    "Row",
    "TransactionHandle",
    "parse_connection_string",
]
