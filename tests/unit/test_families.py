"""Tests for the concrete database families and the provider registry."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from dbcontainers.core.exceptions import ConnectionUrlError, ProviderNotFoundError
from dbcontainers.core.models import ResolverDefaults
from dbcontainers.core.url import parse_connection_url
from dbcontainers.providers import available_providers, get_provider, resolve_url
from dbcontainers.providers.mariadb import MariaDBContainer, MariaDBProvider
from dbcontainers.providers.mysql import MySQLContainer, MySQLProvider
from dbcontainers.providers.postgres import PostgresContainer, PostgresProvider


class TestProviderRegistry:
    @pytest.mark.parametrize(
        ("database_type", "expected"),
        [
            ("postgresql", PostgresProvider),
            ("postgres", PostgresProvider),
            ("mysql", MySQLProvider),
            ("mariadb", MariaDBProvider),
        ],
    )
    def test_lookup(self, database_type: str, expected: type) -> None:
        assert isinstance(get_provider(database_type), expected)

    def test_unsupported(self) -> None:
        with pytest.raises(ProviderNotFoundError, match="Unsupported database type: oracle"):
            get_provider("oracle")

    def test_passes_defaults_and_logger(self, mock_logger: MagicMock) -> None:
        defaults = ResolverDefaults(username="app")
        provider = get_provider("mysql", defaults=defaults, logger=mock_logger)
        assert provider.defaults is defaults
        assert provider.log is mock_logger

    def test_available_providers(self) -> None:
        assert available_providers() == [PostgresProvider, MySQLProvider, MariaDBProvider]


class TestPostgresProvider:
    def test_pinned_default(self, mock_logger: MagicMock) -> None:
        container = PostgresProvider(logger=mock_logger).create_default()
        assert isinstance(container, PostgresContainer)
        assert str(container.image) == "postgres:9.6.12"
        mock_logger.warning.assert_not_called()

    def test_descriptor_applies_credentials(self, mock_logger: MagicMock) -> None:
        descriptor = parse_connection_url(
            "jdbc:tc:postgresql:14://localhost/orders?user=alice&password=s3cret&TC_REUSABLE=true"
        )
        container = PostgresProvider(logger=mock_logger).create_from_descriptor(descriptor)
        assert str(container.image) == "postgres:14"
        assert container.database_name == "orders"
        assert container.username == "alice"
        assert container.password == "s3cret"
        assert container.reuse is True

    def test_password_kept_verbatim(self, mock_logger: MagicMock) -> None:
        descriptor = parse_connection_url(
            "jdbc:tc:postgresql:14://localhost/app?user=a%40b&password=p+w"
        )
        container = PostgresProvider(logger=mock_logger).create_from_descriptor(descriptor)
        assert container.username == "a%40b"
        assert container.password == "p+w"

    def test_descriptor_credential_defaults(self, mock_logger: MagicMock) -> None:
        descriptor = parse_connection_url("jdbc:tc:postgresql://localhost")
        container = PostgresProvider(logger=mock_logger).create_from_descriptor(descriptor)
        assert str(container.image) == "postgres:9.6.12"
        assert container.database_name == "test"
        assert container.username == "test"
        assert container.password == "test"
        assert container.reuse is False

    def test_environment(self) -> None:
        container = PostgresProvider().create_with_tag("16")
        container.with_database_name("app").with_username("u").with_password("p")
        assert container.environment() == {
            "POSTGRES_DB": "app",
            "POSTGRES_USER": "u",
            "POSTGRES_PASSWORD": "p",
        }
        assert container.default_port == 5432


class TestMySQLProvider:
    def test_pinned_default(self, mock_logger: MagicMock) -> None:
        container = MySQLProvider(logger=mock_logger).create_default()
        assert isinstance(container, MySQLContainer)
        assert str(container.image) == "mysql:5.7.34"
        mock_logger.warning.assert_not_called()

    def test_registry_descriptor(self, mock_logger: MagicMock) -> None:
        descriptor = parse_connection_url("jdbc:tc:myregistry.io/mysql:8.0://localhost/shop")
        container = MySQLProvider(logger=mock_logger).create_from_descriptor(descriptor)
        assert str(container.image) == "myregistry.io/mysql:8.0"
        assert container.database_name == "shop"

    def test_environment_root_user(self) -> None:
        container = MySQLProvider().create_with_tag("8.0")
        container.with_database_name("app").with_username("root").with_password("pw")
        env = container.environment()
        assert "MYSQL_USER" not in env
        assert env["MYSQL_ROOT_PASSWORD"] == "pw"
        assert env["MYSQL_DATABASE"] == "app"

    def test_environment_empty_password(self) -> None:
        container = MySQLProvider().create_with_tag("8.0").with_username("app")
        env = container.environment()
        assert env["MYSQL_USER"] == "app"
        assert env["MYSQL_ALLOW_EMPTY_PASSWORD"] == "yes"


class TestMariaDBProvider:
    def test_unpinned_default_warns(self, mock_logger: MagicMock) -> None:
        container = MariaDBProvider(logger=mock_logger).create_default()
        assert isinstance(container, MariaDBContainer)
        assert str(container.image) == "mariadb:latest"
        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args.kwargs["provider"] == (
            "dbcontainers.providers.mariadb.MariaDBProvider"
        )

    def test_descriptor_without_tag_warns_once(self, mock_logger: MagicMock) -> None:
        descriptor = parse_connection_url("jdbc:tc:mariadb://localhost/app")
        container = MariaDBProvider(logger=mock_logger).create_from_descriptor(descriptor)
        assert str(container.image) == "mariadb:latest"
        assert mock_logger.warning.call_count == 1

    def test_environment(self) -> None:
        container = MariaDBProvider().create_with_tag("11.4")
        container.with_database_name("app").with_username("u").with_password("p")
        env = container.environment()
        assert env["MARIADB_DATABASE"] == "app"
        assert env["MARIADB_USER"] == "u"
        assert env["MARIADB_PASSWORD"] == "p"


class TestResolveUrl:
    def test_registry_example(self, mock_logger: MagicMock) -> None:
        container = resolve_url(
            "jdbc:tc:myregistry.io/postgres:14://localhost/app?TC_REUSABLE=true",
            logger=mock_logger,
        )
        assert isinstance(container, PostgresContainer)
        assert str(container.image) == "myregistry.io/postgres:14"
        assert container.reuse is True

    def test_uses_defaults(self, mock_logger: MagicMock) -> None:
        container = resolve_url(
            "jdbc:tc:mysql:8.0://localhost",
            defaults=ResolverDefaults(database_name="ci", username="ci", password="ci"),
            logger=mock_logger,
        )
        assert (container.database_name, container.username, container.password) == ("ci", "ci", "ci")

    def test_unsupported_family(self) -> None:
        with pytest.raises(ProviderNotFoundError):
            resolve_url("jdbc:tc:oracle:21://localhost/app")

    def test_malformed_url(self) -> None:
        with pytest.raises(ConnectionUrlError):
            resolve_url("postgresql://localhost/app")
