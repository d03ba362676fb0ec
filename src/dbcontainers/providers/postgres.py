"""PostgreSQL container provider."""

from __future__ import annotations

from dbcontainers.containers import DatabaseContainer
from dbcontainers.core.models import ConnectionDescriptor, ImageName
from dbcontainers.providers.base import ContainerProvider

USER_PARAM = "user"
PASSWORD_PARAM = "password"


class PostgresContainer(DatabaseContainer):
    """Handle for the official ``postgres`` image."""

    default_port = 5432

    def environment(self) -> dict[str, str]:
        env: dict[str, str] = {}
        if self.database_name:
            env["POSTGRES_DB"] = self.database_name
        if self.username:
            env["POSTGRES_USER"] = self.username
        if self.password:
            env["POSTGRES_PASSWORD"] = self.password
        return env


class PostgresProvider(ContainerProvider):
    """Provider for ``jdbc:tc:postgresql:`` URLs."""

    NAMES = frozenset({"postgresql", "postgres"})
    IMAGE = ImageName(repository="postgres")
    DEFAULT_TAG = "9.6.12"

    @classmethod
    def supports(cls, database_type: str) -> bool:
        return database_type in cls.NAMES

    def create_default(self) -> DatabaseContainer:
        return self.create_with_tag(self.DEFAULT_TAG)

    def create_with_tag(self, tag: str) -> DatabaseContainer:
        return self.create_with_image(self.IMAGE.with_tag(tag))

    def create_with_image(self, image: ImageName) -> DatabaseContainer:
        return PostgresContainer(image)

    def create_from_descriptor(self, descriptor: ConnectionDescriptor | None) -> DatabaseContainer:
        return self.create_with_credential_defaults(descriptor, USER_PARAM, PASSWORD_PARAM)
