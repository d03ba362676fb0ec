"""dbcontainers: resolve jdbc:tc: connection URLs into database container handles."""

__version__ = "0.1.0"
