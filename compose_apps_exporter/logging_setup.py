"""Process-wide structlog configuration for the exporter runtime."""

import logging
import sys

import structlog


def logging_configure(level: int | str = logging.INFO) -> None:
    """Configure structlog on top of stdlib logging writing JSON lines to stderr.

    Args:
        level: Log level name or number.

    Returns:
        None: Configures logging as side effect.

    Raises:
        ValueError: Raised when the level name is unknown.
    """

    timestamper = structlog.processors.TimeStamper(fmt="iso", utc=True)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            timestamper,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(level=level, format="%(message)s", stream=sys.stderr, force=True)
