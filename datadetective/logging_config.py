import logging
import sys
from typing import Optional

ROOT_LOGGER = "datadetective"
DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(log_level: str = "INFO", log_format: Optional[str] = None) -> logging.Logger:
    """Attach a console handler to the package logger.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Custom log format string

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    level = getattr(logging, log_level.upper())
    logger.setLevel(level)

    # Clear existing handlers to avoid duplicates
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(log_format or DEFAULT_FORMAT))
    logger.addHandler(handler)

    logger.debug(f"Logging initialized. Level: {log_level}")
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def null_logger() -> logging.Logger:
    """Logger that drops everything; pass it to silence the orchestrator."""
    logger = logging.getLogger(f"{ROOT_LOGGER}.null")
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    logger.propagate = False
    return logger
