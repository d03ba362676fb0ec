"""Container provider registry."""

from __future__ import annotations

from typing import Any

from dbcontainers.containers import DatabaseContainer
from dbcontainers.core.exceptions import ProviderNotFoundError
from dbcontainers.core.models import ResolverDefaults
from dbcontainers.core.url import parse_connection_url
from dbcontainers.providers.base import ContainerProvider


def available_providers() -> list[type[ContainerProvider]]:
    """Return every registered provider class, in lookup order."""
    from dbcontainers.providers.mariadb import MariaDBProvider
    from dbcontainers.providers.mysql import MySQLProvider
    from dbcontainers.providers.postgres import PostgresProvider

    return [PostgresProvider, MySQLProvider, MariaDBProvider]


def get_provider(
        database_type: str,
        *,
        defaults: ResolverDefaults | None = None,
        logger: Any = None,
) -> ContainerProvider:
    """Instantiate the first provider that supports *database_type*.

    Raises:
        ProviderNotFoundError: If no registered provider supports the type.
    """
    for provider_cls in available_providers():
        if provider_cls.supports(database_type):
            return provider_cls(defaults=defaults, logger=logger)

    raise ProviderNotFoundError(f"Unsupported database type: {database_type}")


def resolve_url(
        url: str,
        *,
        defaults: ResolverDefaults | None = None,
        logger: Any = None,
) -> DatabaseContainer:
    """Parse *url* and return the configured, unstarted container it describes.

    Raises:
        ConnectionUrlError: If the URL is malformed.
        ProviderNotFoundError: If the database type is not supported.
        ImageNameError: If the image reference or tag is invalid.
    """
    descriptor = parse_connection_url(url)
    provider = get_provider(descriptor.database_type, defaults=defaults, logger=logger)
    return provider.create_from_descriptor(descriptor)


__all__ = ["ContainerProvider", "available_providers", "get_provider", "resolve_url"]
