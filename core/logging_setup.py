"""
core/logging_setup.py
---------------------
One-time logging configuration shared by the backend and the scripts.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from core.settings import Settings, get_settings


def setup_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """Configure the root logger from settings and return this module's logger."""
    settings = settings or get_settings()
    level = logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Quiet chatty libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if settings.DB_ECHO else logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    return logging.getLogger(__name__)
