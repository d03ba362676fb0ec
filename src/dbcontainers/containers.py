"""Unstarted database container handles."""

from __future__ import annotations

from typing import Any

from dbcontainers.core.models import ImageName


class DatabaseContainer:
    """A configured but not yet started database container.

    Setters return the container itself so calls can be chained::

        PostgresContainer(image).with_database_name("app").with_reuse(True)
    """

    default_port: int | None = None

    def __init__(self, image: ImageName) -> None:
        self.image = image
        self.database_name: str | None = None
        self.username: str | None = None
        self.password: str | None = None
        self.reuse = False

    def with_database_name(self, database_name: str) -> DatabaseContainer:
        self.database_name = database_name
        return self

    def with_username(self, username: str) -> DatabaseContainer:
        self.username = username
        return self

    def with_password(self, password: str) -> DatabaseContainer:
        self.password = password
        return self

    def with_reuse(self, reuse: bool) -> DatabaseContainer:
        self.reuse = reuse
        return self

    def environment(self) -> dict[str, str]:
        """Environment variables the image expects at start-up."""
        return {}

    def describe(self, *, show_password: bool = False) -> dict[str, Any]:
        """Return a plain dict describing the handle (password masked by default)."""
        password = self.password if show_password or self.password is None else "***"
        return {
            "image": str(self.image),
            "database_name": self.database_name,
            "username": self.username,
            "password": password,
            "reuse": self.reuse,
            "port": self.default_port,
        }

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} image={self.image} reuse={self.reuse}>"
