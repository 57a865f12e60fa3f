"""
logging.py — Log Setup for the Donor Registry

Every log line, whether a request log from main.py, an auth event or a store
mutation, shares one layout:

    timestamp | level | logger name | message

`configure_logging()` runs when lifeshare.main is imported, before any app is
built, so routers and the store log with the right format from the start.
"""

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# passlib checks bcrypt's version on first use and logs a traceback at WARNING
# against bcrypt>=4; it is harmless and only clutters startup.
_QUIET_LOGGERS = {"passlib": logging.ERROR}


def configure_logging(level: str = "INFO") -> None:
    """
    Install the shared format on the root logger.

    Unknown level names fall back to INFO.
    """
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO

    logging.basicConfig(level=resolved, format=LOG_FORMAT)

    for name, quiet_level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)

    logging.getLogger(__name__).info("Log level set to %s", logging.getLevelName(resolved))


def get_logger(name: str) -> logging.Logger:
    """Module logger; call as `get_logger(__name__)`."""
    return logging.getLogger(name)
