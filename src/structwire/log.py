"""Logging setup for structwire.

Library modules log through ``structlog.get_logger()``. Nothing is configured
on import; applications (and the ``structwire`` CLI) call
:func:`setup_logging` to choose a level and renderer.
"""

from __future__ import annotations

import logging
import sys

import structlog


def setup_logging(*, debug: bool = False, json: bool = False) -> None:
    """Configure structlog for console output.

    Args:
        debug: Emit debug events (schema decisions, decode degradations)
        json: Render events as JSON lines instead of the console renderer
    """
    level = logging.DEBUG if debug else logging.INFO
    renderer: structlog.types.Processor
    if json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
