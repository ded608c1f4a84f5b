"""Logging setup shared by the API and the CLI."""

import logging
import sys
from functools import lru_cache

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@lru_cache(maxsize=1)
def configure_logging(log_level: str = "INFO") -> None:
    """Configure application logging.

    Sets up logging for the sesame packages with:
    - Console output with timestamps and module names
    - Configurable log level for sesame modules
    - WARNING level for noisy third-party libraries
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        stream=sys.stdout,
        force=True,  # Override any existing config
    )

    for name in ("sesame", "sesame_auth", "sesame_config"):
        logging.getLogger(name).setLevel(level)

    # Quiet down noisy third-party loggers
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
