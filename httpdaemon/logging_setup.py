import logging
import sys

from httpdaemon import __version__
from httpdaemon.constants import LOG_FORMAT, DATE_FORMAT, LOG_LEVEL

# client libraries that log every request at INFO/DEBUG
QUIET_LOGGERS = ('httpx', 'httpcore')


def setup_logging(level=LOG_LEVEL) -> logging.Logger:
    """
    Send all records to stdout through a single root handler.

    Args:
        level (int | str): Root level, either a logging constant or a name
            such as 'DEBUG'.

    Returns:
        logging.Logger: The configured root logger.
    """
    if isinstance(level, str):
        level = level.upper()

    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    if logger.hasHandlers():
        logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(logger.level, logging.WARNING))

    logger.info(f"httpdaemon {__version__} logging at {logging.getLevelName(logger.level)}")
    return logger
