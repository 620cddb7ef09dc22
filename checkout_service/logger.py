"""Logger module for logging messages."""

import os
import sys
from typing import Optional

from loguru import logger as loguru_logger

SERVICE_NAME = "checkout-service"

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[service]}</cyan> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[service]} | {name}:{function}:{line} - {message}"


def configure_logging(log_level: Optional[str] = None, log_file: Optional[str] = None):
    """Replace the loguru sinks with the checkout service's console and file sinks.

    Args:
        log_level: Minimum level; defaults to LOG_LEVEL or INFO.
        log_file: Optional rotating log file; defaults to LOG_FILE.

    Returns:
        logger: The loguru logger bound to the service name.
    """
    level = log_level or os.getenv("LOG_LEVEL", "INFO")
    path = log_file or os.getenv("LOG_FILE")

    loguru_logger.remove()
    loguru_logger.configure(extra={"service": SERVICE_NAME})
    loguru_logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True, enqueue=True)
    if path:
        loguru_logger.add(path, level=level, format=FILE_FORMAT, rotation="10 MB", retention="1 week")

    return loguru_logger.bind(service=SERVICE_NAME)


logger = configure_logging()

__all__ = ["configure_logging", "logger"]
