"""MySQL container provider."""

from __future__ import annotations

from dbcontainers.containers import DatabaseContainer
from dbcontainers.core.models import ConnectionDescriptor, ImageName
from dbcontainers.providers.base import ContainerProvider

USER_PARAM = "user"
PASSWORD_PARAM = "password"


class MySQLContainer(DatabaseContainer):
    """Handle for the official ``mysql`` image."""

    default_port = 3306

    def environment(self) -> dict[str, str]:
        env: dict[str, str] = {}
        if self.database_name:
            env["MYSQL_DATABASE"] = self.database_name
        # The image creates root itself and rejects MYSQL_USER=root
        if self.username and self.username != "root":
            env["MYSQL_USER"] = self.username
        if self.password:
            env["MYSQL_PASSWORD"] = self.password
            env["MYSQL_ROOT_PASSWORD"] = self.password
        else:
            env["MYSQL_ALLOW_EMPTY_PASSWORD"] = "yes"
        return env


class MySQLProvider(ContainerProvider):
    """Provider for ``jdbc:tc:mysql:`` URLs."""

    NAME = "mysql"
    IMAGE = ImageName(repository="mysql")
    DEFAULT_TAG = "5.7.34"

    @classmethod
    def supports(cls, database_type: str) -> bool:
        return database_type == cls.NAME

    def create_default(self) -> DatabaseContainer:
        return self.create_with_tag(self.DEFAULT_TAG)

    def create_with_tag(self, tag: str) -> DatabaseContainer:
        return self.create_with_image(self.IMAGE.with_tag(tag))

    def create_with_image(self, image: ImageName) -> DatabaseContainer:
        return MySQLContainer(image)

    def create_from_descriptor(self, descriptor: ConnectionDescriptor | None) -> DatabaseContainer:
        return self.create_with_credential_defaults(descriptor, USER_PARAM, PASSWORD_PARAM)
