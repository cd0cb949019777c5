"""
Provider Registry

Central registry of connection factories, keyed by the `Provider=` value of a
connection string.
"""

import logging
from collections.abc import Callable

from camusql.domain.errors import ConnectionStringError
from camusql.providers.base.connection import (
    Connection,
    ConnectionSettings,
    parse_connection_string,
)

log = logging.getLogger(__name__)

ConnectionFactory = Callable[[ConnectionSettings], Connection]


class ProviderRegistryClass:
    """Registry for managing connection providers"""

    def __init__(self) -> None:
        self.providers: dict[str, ConnectionFactory] = {}

    def register(self, provider_id: str, factory: ConnectionFactory) -> None:
        """
        Register a provider

        Raises:
            ValueError: If a provider with the same ID is already registered
        """
        if provider_id in self.providers:
            raise ValueError(f"Provider with ID '{provider_id}' is already registered")

        self.providers[provider_id] = factory
        log.debug("Registered provider: %s", provider_id)

    def get(self, provider_id: str) -> ConnectionFactory | None:
        return self.providers.get(provider_id)

    def get_all_ids(self) -> list[str]:
        return list(self.providers.keys())

    def has(self, provider_id: str) -> bool:
        return provider_id in self.providers

    def unregister(self, provider_id: str) -> None:
        self.providers.pop(provider_id, None)

    def connect(self, connection_string: str) -> Connection:
        """
        Build, open and ping a connection described by a connection string

        Raises:
            ConnectionStringError: If the string is malformed or names an unknown provider
            ConnectionFailureError: If the provider cannot connect
        """
        settings = parse_connection_string(connection_string)
        factory = self.get(settings.provider)
        if factory is None:
            available = ", ".join(sorted(self.get_all_ids()))
            raise ConnectionStringError(
                message=f"Provider '{settings.provider}' not found. Available providers: {available}"
            )

        connection = factory(settings)
        connection.open()
        connection.ping()
        return connection


# Singleton instance
ProviderRegistry = ProviderRegistryClass()
