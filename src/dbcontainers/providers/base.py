"""Abstract base class for database container providers."""

from __future__ import annotations

import abc
from typing import Any, ClassVar

from dbcontainers.containers import DatabaseContainer
from dbcontainers.core.exceptions import MissingDescriptorError
from dbcontainers.core.models import ConnectionDescriptor, ImageName, ResolverDefaults
from dbcontainers.logging import get_logger

_UNPINNED_TAG_HINT = (
    "No explicit version tag was provided in the connection URL and this provider "
    "does not override create_default() to set a default tag. The fallback tag will "
    "be used but results may be unreliable!"
)


def _require(descriptor: ConnectionDescriptor | None) -> ConnectionDescriptor:
    if descriptor is None:
        raise MissingDescriptorError("Connection descriptor cannot be None")
    return descriptor


class ContainerProvider(abc.ABC):
    """Turns connection descriptors into configured, unstarted database containers.

    One subclass exists per database family. The container is never started here;
    ownership passes to the caller on return.
    """

    IMAGE: ClassVar[ImageName]
    DEFAULT_TAG: ClassVar[str | None] = None

    def __init__(
            self,
            defaults: ResolverDefaults | None = None,
            logger: Any = None,
    ) -> None:
        self.defaults = defaults or ResolverDefaults()
        self.log = logger or get_logger(__name__)

    # ────────────── Family ──────────────────

    @classmethod
    @abc.abstractmethod
    def supports(cls, database_type: str) -> bool:
        """Return True if this provider handles *database_type* (the URL's base image name)."""

    # ────────────── Construction ────────────

    @abc.abstractmethod
    def create_with_image(self, image: ImageName) -> DatabaseContainer:
        """Instantiate a container bound to a fully qualified image reference."""

    @abc.abstractmethod
    def create_with_tag(self, tag: str) -> DatabaseContainer:
        """Instantiate a container from the family's base image at *tag*.

        Raises:
            dbcontainers.core.exceptions.ImageNameError if the tag is malformed.
        """

    def create_default(self) -> DatabaseContainer:
        """Instantiate a container when no version tag was requested.

        Subclasses should override this to pin a tag more stable than ``latest``.
        """
        self.log.warning(
            "image_tag_not_pinned",
            provider=self.qualified_name,
            fallback_tag=self.defaults.fallback_tag,
            hint=_UNPINNED_TAG_HINT,
        )
        return self.create_with_tag(self.defaults.fallback_tag)

    def create_from_descriptor(self, descriptor: ConnectionDescriptor | None) -> DatabaseContainer:
        """Instantiate a container using the image, tag and reuse flag of *descriptor*.

        Raises:
            MissingDescriptorError: If *descriptor* is None.
        """
        return self._basic_instance(descriptor)

    def _basic_instance(self, descriptor: ConnectionDescriptor | None) -> DatabaseContainer:
        descriptor = _require(descriptor)
        if descriptor.registry:
            reference = f"{descriptor.registry}/{descriptor.image_name}"
            if descriptor.image_tag:
                reference += f":{descriptor.image_tag}"
            container = self.create_with_image(ImageName.parse(reference))
        elif descriptor.image_tag:
            container = self.create_with_tag(descriptor.image_tag)
        else:
            container = self.create_default()

        container.with_reuse(descriptor.reusable)
        return container

    def create_with_credential_defaults(
            self,
            descriptor: ConnectionDescriptor | None,
            user_param: str,
            password_param: str,
    ) -> DatabaseContainer:
        """Like create_from_descriptor, also applying database name and credentials.

        Args:
            descriptor: Parsed connection URL.
            user_param: Query parameter holding the username.
            password_param: Query parameter holding the password.
        """
        descriptor = _require(descriptor)
        container = self._basic_instance(descriptor)

        params = descriptor.query_parameters
        return (
            container
            .with_database_name(descriptor.database_name or self.defaults.database_name)
            .with_username(params.get(user_param, self.defaults.username))
            .with_password(params.get(password_param, self.defaults.password))
        )

    # ────────────── Helpers ─────────────────

    @property
    def qualified_name(self) -> str:
        cls = type(self)
        return f"{cls.__module__}.{cls.__qualname__}"

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"
