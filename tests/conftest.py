"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from dbcontainers.containers import DatabaseContainer
from dbcontainers.core.models import ConnectionDescriptor, ImageName
from dbcontainers.providers.base import ContainerProvider


class RecordingProvider(ContainerProvider):
    """Minimal family used to exercise the base provider behaviour."""

    IMAGE = ImageName(repository="fakedb")

    @classmethod
    def supports(cls, database_type: str) -> bool:
        return database_type == "fakedb"

    def create_with_tag(self, tag: str) -> DatabaseContainer:
        return self.create_with_image(self.IMAGE.with_tag(tag))

    def create_with_image(self, image: ImageName) -> DatabaseContainer:
        return DatabaseContainer(image)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the default config file at an empty temp location and clear env overrides."""
    import os

    config_file = tmp_path / "config" / "config.toml"
    monkeypatch.setattr("dbcontainers.core.config.CONFIG_FILE", config_file)
    for key in list(os.environ):
        if key.startswith("DBCONTAINERS_"):
            monkeypatch.delenv(key)
    return config_file


@pytest.fixture()
def mock_logger() -> MagicMock:
    """A stand-in for the injected structlog logger."""
    return MagicMock()


@pytest.fixture()
def provider(mock_logger: MagicMock) -> RecordingProvider:
    return RecordingProvider(logger=mock_logger)


@pytest.fixture()
def make_descriptor():
    """Build a ConnectionDescriptor for the fake database family."""

    def _make(**overrides) -> ConnectionDescriptor:
        fields = {"database_type": "fakedb", "image_name": "fakedb"}
        fields.update(overrides)
        return ConnectionDescriptor(**fields)

    return _make
