"""
Logging setup for the retail query service.

All modules log through children of the ``retail_query`` logger, which writes
to stdout. The level comes from ``LOG_LEVEL`` at import time and can be
changed later with ``setup_logging`` (the app factory does this from config).
"""
import logging
import os
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger("retail_query")


def setup_logging(level: str = None) -> logging.Logger:
    """
    Attach the stdout handler (once) and apply the log level.

    Args:
        level: Level name such as "DEBUG"; falls back to $LOG_LEVEL, then INFO

    Returns:
        The package root logger
    """
    level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(level)

    # uvicorn configures the root logger too; keep our lines from printing twice
    logger.propagate = False
    return logger


def get_logger(name: str = None) -> logging.Logger:
    """Return ``retail_query.<name>``, or the package root logger when no name is given."""
    if name:
        return logging.getLogger(f"retail_query.{name}")
    return logger


setup_logging()
