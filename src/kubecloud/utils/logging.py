"""Structured logging for kubecloud.

kubecloud is a library: nothing here runs on import. Applications call
``configure_logging`` (or ``setup_logging``) once at startup; until then
structlog's defaults apply.
"""

import logging
import sys
from typing import Any, TextIO

import structlog
from structlog.types import EventDict, Processor

from kubecloud.core.config import LoggingConfig

REDACTED = "[REDACTED]"
SECRET_KEYS = frozenset({"token", "bearer_token", "access_token", "ca_data", "presigned_url"})


def redact_secrets(_logger: Any, _method: str, event_dict: EventDict) -> EventDict:
    """Mask credential-bearing fields before rendering."""
    for key in SECRET_KEYS.intersection(event_dict):
        event_dict[key] = REDACTED
    return event_dict


def _renderer(format: str) -> list[Processor]:
    if format == "json":
        return [
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [structlog.dev.ConsoleRenderer()]


def _stream(output: str) -> TextIO:
    return sys.stderr if output == "stderr" else sys.stdout


def setup_logging(level: str = "INFO", format: str = "json", output: str = "stdout") -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: ``json`` or ``console``
        output: ``stdout`` or ``stderr``
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    stream = _stream(output)

    logging.basicConfig(format="%(message)s", stream=stream, level=log_level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            redact_secrets,
            structlog.processors.TimeStamper(fmt="iso"),
            *_renderer(format),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )


def configure_logging(config: LoggingConfig) -> None:
    """Apply the ``logging`` section of a KubeCloudConfig."""
    setup_logging(level=config.level, format=config.format, output=config.output)


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a structured logger, typically with ``__name__``."""
    return structlog.get_logger(name)


def log_error(
    logger: structlog.BoundLogger,
    error: Exception,
    operation: str | None = None,
    **kwargs: Any,
) -> None:
    """Log an exception's type and message with extra context fields.

    Args:
        logger: Logger instance
        error: Exception instance
        operation: Operation name (optional)
        **kwargs: Additional context fields
    """
    context = {"error_type": type(error).__name__, "error_message": str(error), **kwargs}
    if operation:
        context["operation"] = operation

    logger.error("error_occurred", **context)
