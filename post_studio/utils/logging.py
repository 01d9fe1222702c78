"""Structured logging for the studio."""
import logging
import sys

import structlog

from post_studio.config import settings


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a configured structlog logger."""
    return structlog.get_logger(name)


def _level() -> int:
    return getattr(logging, settings.log_level.upper(), logging.INFO)


def setup_logging() -> None:
    """Configure structlog and stdlib logging. Call once at startup."""
    renderer = (
        structlog.dev.ConsoleRenderer()
        if settings.log_level.upper() == "DEBUG"
        else structlog.processors.JSONRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_level()),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=_level())
    # Both log every poll job run or request at INFO
    for noisy in ("apscheduler", "httpx"):
        logging.getLogger(noisy).setLevel(max(_level(), logging.WARNING))
