"""
Logging for the passwordless client.

Every module logs through the single `PASSWORDLESS` logger returned by
`get_logger()`. Verbosity comes from the LOG_LEVEL environment variable
(DEBUG, INFO, WARNING, ERROR, CRITICAL; default INFO). DEBUG shows each
request URL and response status with timestamps and call sites.

The API secret is never written to the log at any level.
"""

import logging
import os

LOGGER_NAME = "PASSWORDLESS"

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def get_log_level() -> int:
    """Level named by LOG_LEVEL; unknown values fall back to INFO."""
    return LOG_LEVELS.get(os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)


def get_logger() -> logging.Logger:
    """
    Return the project logger, attaching a console handler on first use.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return logger

    log_level = get_log_level()
    if log_level == logging.DEBUG:
        fmt = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
    else:
        fmt = "%(levelname)s: %(message)s"

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)
    logger.setLevel(log_level)
    logger.propagate = False
    return logger
