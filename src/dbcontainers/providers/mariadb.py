"""MariaDB container provider.

No default tag is pinned, so URLs without a version fall back to the
configured fallback tag with a warning.
"""

from __future__ import annotations

from dbcontainers.containers import DatabaseContainer
from dbcontainers.core.models import ConnectionDescriptor, ImageName
from dbcontainers.providers.base import ContainerProvider

USER_PARAM = "user"
PASSWORD_PARAM = "password"


class MariaDBContainer(DatabaseContainer):
    """Handle for the official ``mariadb`` image."""

    default_port = 3306

    def environment(self) -> dict[str, str]:
        env: dict[str, str] = {}
        if self.database_name:
            env["MARIADB_DATABASE"] = self.database_name
        if self.username and self.username != "root":
            env["MARIADB_USER"] = self.username
        if self.password:
            env["MARIADB_PASSWORD"] = self.password
            env["MARIADB_ROOT_PASSWORD"] = self.password
        else:
            env["MARIADB_ALLOW_EMPTY_ROOT_PASSWORD"] = "1"
        return env


class MariaDBProvider(ContainerProvider):
    """Provider for ``jdbc:tc:mariadb:`` URLs."""

    NAME = "mariadb"
    IMAGE = ImageName(repository="mariadb")

    @classmethod
    def supports(cls, database_type: str) -> bool:
        return database_type == cls.NAME

    def create_with_tag(self, tag: str) -> DatabaseContainer:
        return self.create_with_image(self.IMAGE.with_tag(tag))

    def create_with_image(self, image: ImageName) -> DatabaseContainer:
        return MariaDBContainer(image)

    def create_from_descriptor(self, descriptor: ConnectionDescriptor | None) -> DatabaseContainer:
        return self.create_with_credential_defaults(descriptor, USER_PARAM, PASSWORD_PARAM)
