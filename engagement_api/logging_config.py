# /engagement_api/logging_config.py

import logging

from .config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Configures the root logger once for the whole application."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
