"""Structured logging setup."""

import logging
import sys
from typing import Any, Optional

import structlog

from ..config import DispatcherSettings


def setup_logging(settings: Optional[DispatcherSettings] = None) -> Any:
    """Configure structlog on top of the standard library logger.

    Args:
        settings: Dispatcher settings providing ``log_level`` and
            ``log_format``, read from the environment if omitted

    Returns:
        A bound structlog logger for the package
    """
    settings = settings or DispatcherSettings()
    level = logging.getLevelName(settings.log_level)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    logging.getLogger("radflux").setLevel(level)

    renderer: Any
    if settings.log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    return structlog.get_logger("radflux")
