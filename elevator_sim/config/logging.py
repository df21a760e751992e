import logging
import os
import sys

import structlog


def configure_logging(log_level: str = None):
    """
    Set up structured JSON logging for the application using structlog.

    This configures the standard logging module to emit plain messages,
    then initializes structlog with processors to:
      1. Filter by level and add the logger name and level.
      2. Timestamp logs in ISO format.
      3. Include stack information and format exception info when present.
      4. Render final output as JSON for easy ingestion into log systems.

    Call this once at startup so all modules use the same logging configuration.
    """
    root_logger = logging.getLogger()

    # Return early if already configured
    if hasattr(configure_logging, "_configured"):
        return root_logger

    level_name = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )
    root_logger.setLevel(level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    configure_logging._configured = True
    return root_logger
