"""
structlog setup for the command line.

Library modules only call ``structlog.get_logger``; the CLI decides where
events go and how verbose they are.
"""

import logging
import sys

import structlog

_LEVELS = {
    -1: logging.ERROR,
    0: logging.WARNING,
    1: logging.INFO,
}


def level_for(verbosity: int) -> int:
    """Map a -q/-v count to a logging level (negative is quiet, 2+ is debug)."""
    if verbosity >= 2:
        return logging.DEBUG
    return _LEVELS[max(verbosity, -1)]


def configure_logging(verbosity: int = 0) -> None:
    """Render events to stderr, dropping those below the verbosity level."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level_for(verbosity)),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
