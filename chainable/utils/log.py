"""Logging setup for host applications."""

from __future__ import annotations

import logging

from chainable.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Apply the standard log format at the configured level."""
    name = (level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format=LOG_FORMAT,
    )
    logging.getLogger("chainable").setLevel(getattr(logging, name, logging.INFO))
