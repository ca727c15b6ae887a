"""Console logging setup shared by the CLI and library users."""

from __future__ import annotations

import logging
from logging.config import dictConfig


DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def configure_logging(log_level: str = "INFO") -> None:
    """Configure a single stdout handler on the root logger.

    Safe to call more than once: existing root handlers are replaced instead
    of duplicated. Unknown level names fall back to INFO.
    """

    normalized_level = getattr(logging, str(log_level).upper(), logging.INFO)

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {"format": DEFAULT_FORMAT, "datefmt": DEFAULT_DATE_FORMAT},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "standard",
                    "level": normalized_level,
                    "stream": "ext://sys.stdout",
                }
            },
            "root": {
                "handlers": ["console"],
                "level": normalized_level,
            },
        }
    )

    logging.captureWarnings(True)
