"""Process-wide logging setup."""

from __future__ import annotations

import logging

from moviestore.config import get_settings

LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(message)s'

_configured = False


def configure_logging() -> None:
    """Configure the root logger from settings. Safe to call more than once."""
    global _configured
    if _configured:
        return

    level_name = get_settings().log_level.upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    _configured = True
