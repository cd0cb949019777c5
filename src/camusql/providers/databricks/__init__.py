"""Databricks SQL warehouse provider (Statement Execution API)."""

from .auth import AuthenticationError, create_databricks_client
from .connection import DatabricksCommand, DatabricksConnection

__all__ = [
    "AuthenticationError",
    "create_databricks_client",
    "DatabricksCommand",
    "DatabricksConnection",
]
