"""Logging configuration module for the weather AI assistant.

Provides structured logging setup with support for console and file output
in both JSON and human-readable formats.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

import structlog
from structlog.stdlib import ProcessorFormatter

from weather_ai_assistant.models.config import LoggingConfig

BYTES_PER_MEGABYTE = 1024 * 1024


def setup_logging(config: LoggingConfig, name: str) -> logging.Logger:
    """Set up logging with the specified configuration.

    Args:
        config: Logging configuration.
        name: Logger name.

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(name)

    # Clear existing handlers
    logger.handlers = []

    level = getattr(logging, config.level.upper(), logging.INFO)
    logger.setLevel(level)

    renderer = (
        structlog.processors.JSONRenderer()
        if config.format.lower() == "json"
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    # Records from plain logging.getLogger(__name__) loggers pass through the
    # foreign pre-chain so they render the same way as structlog events
    formatter = ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
        ],
    )

    file_error: str | None = None
    handler: logging.Handler
    if config.file:
        try:
            log_path = Path(config.file)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            handler = RotatingFileHandler(
                log_path,
                maxBytes=config.max_size_mb * BYTES_PER_MEGABYTE,
                backupCount=config.backup_count,
            )
        except OSError as e:
            # Fall back to console logging if file logging fails
            file_error = f"Failed to set up file logging: {e}"
            handler = logging.StreamHandler(sys.stdout)
    else:
        handler = logging.StreamHandler(sys.stdout)

    handler.setFormatter(formatter)
    handler.setLevel(level)
    logger.addHandler(handler)

    if file_error:
        logger.error(file_error)

    return logger
