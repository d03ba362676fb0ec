"""structlog setup for dbcontainers.

Events are emitted through structlog and routed to stdlib handlers, so the
CLI renders them on stderr and keeps stdout free for ``resolve --json``.
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
from pathlib import Path

import structlog

from dbcontainers.core.models import LogFormat

_MASK = "***REDACTED***"

# Substrings of event keys that carry credentials from connection URLs
_CREDENTIAL_MARKERS = ("password", "passwd", "pwd", "secret")

_LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
_LOG_FILE_BACKUPS = 3


def _redact_credentials(
        _logger: logging.Logger,
        _method: str,
        event_dict: dict,
) -> dict:
    """Mask values whose key names a credential."""
    for key in event_dict:
        if any(marker in key.lower() for marker in _CREDENTIAL_MARKERS):
            event_dict[key] = _MASK
    return event_dict


def _stdlib_formatter(renderer: structlog.types.Processor) -> logging.Formatter:
    return structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )


def _console_renderer(log_format: LogFormat) -> structlog.types.Processor:
    if log_format == LogFormat.JSON:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def setup_logging(
        level: str = "INFO",
        log_file: Path | None = None,
        log_format: LogFormat = LogFormat.CONSOLE,
) -> None:
    """Route structlog events to stderr and, optionally, a rotating JSON log file.

    Args:
        level: Log level name; unknown names fall back to INFO.
        log_file: Optional JSON log file. Parent dirs are created automatically.
        log_format: Rendering on stderr, console or json.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            _redact_credentials,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(_stdlib_formatter(_console_renderer(log_format)))
    handlers: list[logging.Handler] = [stderr_handler]

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=_LOG_FILE_MAX_BYTES,
            backupCount=_LOG_FILE_BACKUPS,
            encoding="utf-8",
        )
        file_handler.setFormatter(_stdlib_formatter(structlog.processors.JSONRenderer()))
        handlers.append(file_handler)

    root_logger = logging.getLogger()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog bound logger."""
    return structlog.get_logger(name)
