"""Pydantic models for dbcontainers configuration, image references and connection URLs."""

from __future__ import annotations

import enum
import re
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from dbcontainers.core.exceptions import ImageNameError

# ──────────────────────── Enums ──────────────────────────


class LogFormat(enum.StrEnum):
    """Structured log output format."""

    CONSOLE = "console"
    JSON = "json"


# ──────────────────── Image References ───────────────────

_REPOSITORY_RE = re.compile(
    r"^[a-z0-9]+(?:(?:[._]|__|-+)[a-z0-9]+)*(?:/[a-z0-9]+(?:(?:[._]|__|-+)[a-z0-9]+)*)*$"
)
_TAG_RE = re.compile(r"^[\w][\w.-]{0,127}$")
_DIGEST_RE = re.compile(r"^[A-Za-z][A-Za-z0-9]*(?:[-_+.][A-Za-z][A-Za-z0-9]*)*:[0-9a-fA-F]{32,}$")

LATEST_TAG = "latest"


def _looks_like_registry(component: str) -> bool:
    return "." in component or ":" in component or component == "localhost"


class ImageName(BaseModel):
    """A parsed container image reference: ``[registry/]repository[:tag][@digest]``."""

    model_config = ConfigDict(frozen=True)

    registry: str | None = None
    repository: str
    tag: str | None = None
    digest: str | None = None

    @classmethod
    def parse(cls, reference: str) -> ImageName:
        """Parse and validate an image reference.

        Raises:
            ImageNameError: If the reference, tag or digest is malformed.
        """
        if not reference or reference != reference.strip():
            raise ImageNameError(f"Invalid image reference: {reference!r}")

        remainder, at, digest = reference.partition("@")

        registry: str | None = None
        first, sep, rest = remainder.partition("/")
        if sep and _looks_like_registry(first):
            registry, remainder = first, rest

        tag: str | None = None
        last_slash = remainder.rfind("/")
        colon = remainder.rfind(":")
        if colon > last_slash:
            remainder, tag = remainder[:colon], remainder[colon + 1:]

        if not _REPOSITORY_RE.match(remainder):
            raise ImageNameError(f"Invalid image repository {remainder!r} in {reference!r}")
        if tag is not None and not _TAG_RE.match(tag):
            raise ImageNameError(f"Invalid image tag {tag!r} in {reference!r}")
        if at and not _DIGEST_RE.match(digest):
            raise ImageNameError(f"Invalid image digest {digest!r} in {reference!r}")

        return cls(registry=registry, repository=remainder, tag=tag, digest=digest or None)

    def with_tag(self, tag: str) -> ImageName:
        """Return a copy of this image pinned to *tag*."""
        if not _TAG_RE.match(tag or ""):
            raise ImageNameError(f"Invalid image tag {tag!r} for {self.unversioned}")
        return self.model_copy(update={"tag": tag, "digest": None})

    @property
    def unversioned(self) -> str:
        """Registry and repository without tag or digest."""
        return f"{self.registry}/{self.repository}" if self.registry else self.repository

    @property
    def version(self) -> str:
        """The tag, digest, or ``latest`` when neither is set."""
        return self.tag or self.digest or LATEST_TAG

    def __str__(self) -> str:
        reference = self.unversioned
        if self.tag:
            reference += f":{self.tag}"
        if self.digest:
            reference += f"@{self.digest}"
        return reference


# ──────────────────── Connection URLs ────────────────────


class ConnectionDescriptor(BaseModel):
    """A parsed ``jdbc:tc:`` connection URL. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    url: str = ""
    database_type: str
    registry: str | None = None
    image_name: str
    image_tag: str | None = None
    database_host_string: str = ""
    database_name: str | None = None
    query_parameters: Mapping[str, str] = Field(default_factory=dict, validate_default=True)
    container_parameters: Mapping[str, str] = Field(default_factory=dict, validate_default=True)
    reusable: bool = False

    @field_validator("query_parameters", "container_parameters", mode="after")
    @classmethod
    def freeze_parameters(cls, v: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(v))

    @field_serializer("query_parameters", "container_parameters")
    def serialize_parameters(self, v: Mapping[str, str]) -> dict[str, str]:
        return dict(v)

    @property
    def image_reference(self) -> str:
        """``registry/image[:tag]`` as written in the URL (registry may be absent)."""
        reference = f"{self.registry}/{self.image_name}" if self.registry else self.image_name
        if self.image_tag:
            reference += f":{self.image_tag}"
        return reference


# ──────────────────── Config Models ──────────────────────


class ResolverDefaults(BaseModel):
    """Values applied when a connection URL leaves them out."""

    database_name: str = "test"
    username: str = "test"
    password: str = "test"
    fallback_tag: str = LATEST_TAG

    @field_validator("fallback_tag")
    @classmethod
    def validate_fallback_tag(cls, v: str) -> str:
        if not _TAG_RE.match(v):
            msg = f"Invalid fallback tag: {v!r}"
            raise ValueError(msg)
        return v


class LoggingConfig(BaseModel):
    """Logging settings."""

    level: str = "INFO"
    log_file: Path | None = None
    format: LogFormat = LogFormat.CONSOLE


class AppConfig(BaseModel):
    """Top-level application configuration."""

    defaults: ResolverDefaults = ResolverDefaults()
    logging: LoggingConfig = LoggingConfig()
