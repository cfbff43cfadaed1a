"""
Structured Logging Configuration.
"""

import logging
import os
from typing import Any

import structlog

LOG_LEVEL_ENV = "STATESUGAR_LOG_LEVEL"


def configure_logging(log_level: str | None = None, json_format: bool = False) -> None:
    """
    Configure structlog for statesugar.
    Priority: argument > STATESUGAR_LOG_LEVEL > WARNING.
    """
    log_level = log_level or os.getenv(LOG_LEVEL_ENV, "WARNING")
    level = getattr(logging, log_level.upper(), logging.WARNING)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True
    )

def get_logger(name: str) -> Any:
    """
    Get a structured logger.
    """
    return structlog.get_logger(name)
