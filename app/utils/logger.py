"""
Logging configuration for the Health Literacy Translator.

Every log line is a structlog event carrying a ``component`` field
(``translator``, ``llm_engine``, ``routes`` ...). Production output is
JSON; debug mode switches to the colored console renderer.
"""

import logging
import sys
from typing import Optional

import structlog
from structlog.types import Processor

from app.config import settings

# Standard-library loggers that log every outbound or inbound request
NOISY_LOGGERS = ("httpx", "httpcore")


def build_processors(json_format: bool) -> list[Processor]:
    """Processor chain shared by every component logger."""
    chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if json_format:
        return chain + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return chain + [structlog.dev.ConsoleRenderer(colors=True)]


def configure_logging(
    log_level: Optional[str] = None,
    json_format: bool = True
) -> None:
    """
    Configure structlog and the standard library root logger.

    Args:
        log_level: Override log level (defaults to settings.log_level)
        json_format: JSON lines (True) or console output (False)
    """
    numeric_level = getattr(logging, (log_level or settings.log_level).upper(), logging.INFO)

    structlog.configure(
        processors=build_processors(json_format),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # uvicorn logs through the standard library
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=numeric_level,
    )
    # The model and remote translator calls are logged by their callers
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))


def get_logger(component: str = "translator") -> structlog.BoundLogger:
    """
    Get a lazily bound logger that tags events with ``component``.

    Args:
        component: Module or subsystem name
    """
    return structlog.get_logger(component=component)


configure_logging(
    log_level=settings.log_level,
    json_format=not settings.debug
)
