"""Logging utilities for dragdropdo modules."""

import logging

PACKAGE_LOGGERS = (
    'dragdropdo',
    'dragdropdo.client',
    'dragdropdo.api',
    'dragdropdo.upload',
    'dragdropdo.upload.part',
    'dragdropdo.upload.file',
    'dragdropdo.operations',
    'dragdropdo.status',
)


def get_logger(name: str) -> logging.Logger:
    """Get a logger that automatically inherits from root logger.

    The logger propagates to the root logger and only gets a default level
    when the root logger has no handlers (basicConfig not called yet).

    Args:
        name: Logger name (typically 'dragdropdo.<area>')

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.propagate = True

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logger.setLevel(logging.WARNING)

    return logger


def setup_logging(level: int = logging.INFO) -> None:
    """
    Configure logging for dragdropdo modules.

    Args:
        level: Logging level (default: logging.INFO)
    """
    for logger_name in PACKAGE_LOGGERS:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True
