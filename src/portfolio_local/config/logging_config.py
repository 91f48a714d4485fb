"""Logging configuration."""

import logging
import sys
from typing import Optional

from portfolio_local.config.settings import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILENAME = "portfolio.log"


def setup_logging(level: Optional[str] = None, to_file: bool = False) -> None:
    """
    Configure application logging.

    Args:
        level: Overrides Settings.log_level (e.g. "DEBUG" from --verbose).
        to_file: Also append to portfolio.log in the data directory.
    """
    settings = get_settings()
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if to_file:
        handlers.append(logging.FileHandler(settings.get_data_dir() / LOG_FILENAME, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, (level or settings.log_level).upper()),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("matplotlib").setLevel(logging.WARNING)
