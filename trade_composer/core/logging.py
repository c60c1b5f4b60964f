"""
Structured logging configuration using structlog.

Composition runs inside the caller's request handling, so the caller's
context variables (client id, request id) are merged into every event.
"""

import logging
import sys

import structlog

from trade_composer.config import settings


def configure_logging(log_level: str | None = None, json_output: bool | None = None) -> None:
    """
    Configure structured logging for the composition pipeline.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR). Defaults to settings.log_level.
        json_output: JSON logs if True, colored console output if False. Defaults to settings.log_json.
    """
    level = (log_level or settings.log_level).upper()
    if json_output is None:
        json_output = settings.log_json

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level),
    )

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_output:
        processors = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def bind_context(**context) -> None:
    """Bind context variables to all log events of the current composition."""
    structlog.contextvars.bind_contextvars(**context)


def clear_context() -> None:
    """Drop composition-scoped logging context."""
    structlog.contextvars.clear_contextvars()


def get_logger(name: str = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (usually __name__ of the calling module)

    Returns:
        A bound logger instance with structured logging capabilities.
    """
    return structlog.get_logger(name)
