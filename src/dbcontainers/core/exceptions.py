"""Custom exceptions for dbcontainers."""


class DbContainersError(Exception):
    """Base exception for all dbcontainers errors."""


class MissingDescriptorError(DbContainersError, ValueError):
    """Raised when a provider is asked to resolve an absent connection descriptor."""


class ProviderNotFoundError(DbContainersError):
    """Raised when no registered provider supports a database type."""


class ImageNameError(DbContainersError):
    """Raised when an image reference or tag cannot be parsed."""


class ConnectionUrlError(DbContainersError):
    """Raised when a connection URL does not follow the jdbc:tc: format."""


class ConfigError(DbContainersError):
    """Raised when configuration is invalid or missing."""
