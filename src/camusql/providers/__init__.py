"""
Provider System

Connection providers the shell can talk to. Providers register a factory
that builds a Connection from parsed ConnectionSettings.
"""

from .base.connection import Connection, ConnectionSettings, parse_connection_string
from .databricks import DatabricksConnection
from .registry import ProviderRegistry
from .sqlite import SqliteConnection

__all__ = [
    "Connection",
    "ConnectionSettings",
    "parse_connection_string",
    "ProviderRegistry",
    "DatabricksConnection",
    "SqliteConnection",
]


def initialize_providers() -> None:
    """Register the built-in providers; idempotent."""
    if not ProviderRegistry.has("sqlite"):
        ProviderRegistry.register("sqlite", SqliteConnection.from_settings)
    if not ProviderRegistry.has("databricks"):
        ProviderRegistry.register("databricks", DatabricksConnection.from_settings)


# Auto-initialize on import
initialize_providers()
