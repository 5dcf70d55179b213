"""Logging setup for the booking resolver.

Every tenant probe logs under its module logger with the tenant config id
in the message, so one stdout stream is enough to follow a fan-out search.
"""

import logging
import sys

from roadbook.core.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Transport libraries that log one line per upstream request
_UPSTREAM_LOGGERS = ("httpx", "httpcore")


def setup_logging() -> None:
    """Configure root logging to stdout.

    DEBUG when settings.debug is set, otherwise INFO with the upstream
    transport loggers held at WARNING (their request lines carry microsite
    ids and would repeat once per tenant per search).
    """
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    if not settings.debug:
        for name in _UPSTREAM_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Module logger; pass __name__."""
    return logging.getLogger(name)
