"""Logging configuration module for the SVG icon sprite builder.

Provides structured logging setup with support for console and file output
in both JSON and human-readable formats. Values bound with ``log_context``,
such as the sprite being generated, are added to every record logged while
they are bound, including records of standard loggers.
"""

import logging
import sys
from contextlib import AbstractContextManager
from logging.handlers import RotatingFileHandler
from typing import Any

import structlog
from structlog.contextvars import bound_contextvars
from structlog.stdlib import ProcessorFormatter

from svg_icon_sprite.constants import BYTES_PER_MEGABYTE
from svg_icon_sprite.models.config import LoggingConfig
from svg_icon_sprite.utils.early_error_handler import handle_startup_error
from svg_icon_sprite.utils.path_utils import path_resolver


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
            structlog.contextvars.merge_contextvars,
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

    formatter = ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
        ],
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    if config.file:
        try:
            from svg_icon_sprite.utils import file_utils

            log_path = path_resolver.normalize_path(config.file)
            file_utils.ensure_dir_exists(log_path.parent)

            file_handler = RotatingFileHandler(
                config.file,
                maxBytes=config.max_size_mb * BYTES_PER_MEGABYTE,
                backupCount=config.backup_count,
            )
            file_handler.setFormatter(formatter)
            file_handler.setLevel(level)
            logger.addHandler(file_handler)
        except Exception as e:
            error_msg = f"Failed to set up file logging: {e}"
            handle_startup_error("LOGGING_FILE_ERROR", error_msg, {"log_file": str(config.file)})
            logger.error(error_msg)

    return logger


def log_context(**values: Any) -> AbstractContextManager[None]:
    """Bind values to the log records emitted in the current context.

    Bindings follow asyncio tasks and threads started from ``asyncio.to_thread``,
    so concurrently processed sprites and symbols keep their own values.

    Args:
        **values: Key/value pairs added to each record, None values are skipped

    Returns:
        Context manager removing the bindings on exit.
    """
    return bound_contextvars(**{key: value for key, value in values.items() if value is not None})
