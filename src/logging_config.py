"""Configures structlog on top of the standard library logging module.

Call setup_logging() once at startup. Modules then log key/value events through their module-level logger:

    logger = structlog.get_logger()
    logger.info("Generation finished", steps=steps)
"""

import logging
import sys

import structlog


def setup_logging(log_level: str = "INFO", json_logs: bool = False) -> None:
    """Configures the root logger and structlog.

    Args:
        log_level: Name of the minimum level to emit (e.g. "DEBUG", "INFO").
        json_logs: Render events as JSON lines instead of the human-readable console format.
    """
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=log_level.upper(), force=True)

    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(colors=False)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
