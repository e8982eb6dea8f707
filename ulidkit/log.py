"""Structured logging for ulidkit, built on structlog.

The codec never logs; the generator and the command-line interface do.
"""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.types import Processor


def configure_logging(log_level: str = 'WARNING', json_output: bool = False) -> None:
    """Configure structlog for the command-line interface.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        json_output: render JSON lines instead of the console format
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt='iso', utc=True),
        structlog.processors.format_exc_info,
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str = 'ulidkit'):
    return structlog.get_logger(name)
