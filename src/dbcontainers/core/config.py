"""Configuration loading for dbcontainers.

Configuration sources (highest to lowest priority):
  1. CLI arguments (passed directly)
  2. Environment variables (DBCONTAINERS_* prefix)
  3. Config file (~/.config/dbcontainers/config.toml)
  4. Defaults
"""

from __future__ import annotations

import os
import sys
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from dbcontainers.core.exceptions import ConfigError
from dbcontainers.core.models import AppConfig, LoggingConfig, ResolverDefaults

# ──────────────────── Paths ──────────────────────────────

_APP_NAME = "dbcontainers"


def _get_config_dir() -> Path:
    """Return the platform-appropriate config directory."""
    if sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    elif sys.platform == "win32":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return base / _APP_NAME


CONFIG_DIR = _get_config_dir()
CONFIG_FILE = CONFIG_DIR / "config.toml"

# ──────────────────── Environment Loading ────────────────

_ENV_PREFIX = "DBCONTAINERS_"


def _env(key: str, default: str | None = None) -> str | None:
    """Read an environment variable with the DBCONTAINERS_ prefix."""
    return os.environ.get(f"{_ENV_PREFIX}{key}", default)


def _load_defaults_from_env() -> dict[str, Any]:
    """Load resolver default overrides from environment."""
    overrides: dict[str, Any] = {}
    if dn := _env("DEFAULT_DATABASE_NAME"):
        overrides["database_name"] = dn
    if du := _env("DEFAULT_USERNAME"):
        overrides["username"] = du
    if dp := _env("DEFAULT_PASSWORD"):
        overrides["password"] = dp
    if ft := _env("FALLBACK_TAG"):
        overrides["fallback_tag"] = ft
    return overrides


def _load_logging_from_env() -> dict[str, Any]:
    """Load logging config overrides from environment."""
    overrides: dict[str, Any] = {}
    if ll := _env("LOG_LEVEL"):
        overrides["level"] = ll.upper()
    if lf := _env("LOG_FILE"):
        overrides["log_file"] = Path(lf)
    if fmt := _env("LOG_FORMAT"):
        overrides["format"] = fmt.lower()
    return overrides


# ──────────────────── TOML File Loading ──────────────────


def load_config_file(path: Path | None = None) -> dict[str, Any]:
    """Load and return the raw TOML config dict. Returns empty dict if file missing."""
    config_path = path or CONFIG_FILE
    if not config_path.exists():
        return {}
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {config_path}: {exc}") from exc


def config_to_dict(config: AppConfig) -> dict[str, Any]:
    """Convert an AppConfig to a plain dict with the password masked."""
    data = config.model_dump(mode="json", exclude_none=True)
    data["defaults"]["password"] = "***"
    return data


# ──────────────────── Main Loader ────────────────────────


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load the full application config (file + env overrides)."""
    raw = load_config_file(config_path)

    try:
        defaults_data = raw.get("defaults", {})
        defaults_data.update(_load_defaults_from_env())
        defaults = ResolverDefaults(**defaults_data) if defaults_data else ResolverDefaults()

        log_data = raw.get("logging", {})
        log_data.update(_load_logging_from_env())
        logging_config = LoggingConfig(**log_data) if log_data else LoggingConfig()
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc

    return AppConfig(defaults=defaults, logging=logging_config)
