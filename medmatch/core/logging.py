"""Logging setup for the engine and its command-line scripts."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

from .config import Settings, get_settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(
    level: str | None = None,
    *,
    settings: Settings | None = None,
    stream: TextIO | None = None,
) -> None:
    """Send stdlib and structlog output to ``stream`` (stderr by default).

    Scripts print their results on stdout, so log lines never go there.
    """
    resolved_settings = settings or get_settings()
    effective_level = (level or resolved_settings.log_level).upper()
    numeric_level = getattr(logging, effective_level, logging.INFO)
    target = stream or sys.stderr

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(format=LOG_FORMAT, level=numeric_level, stream=target)
    root_logger.setLevel(numeric_level)

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(file=target),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
