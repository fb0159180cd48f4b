"""
Supabridge - Logging setup.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%H:%M:%S"

# Chatty client libraries underneath supabase-py
NOISY_LOGGERS = ("httpx", "httpcore", "hpack")


def setup_logging(level: str | int = "INFO") -> None:
    """Send log records to stderr and quiet down noisy libraries."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
