"""Application-wide logging utilities.

This module exposes a shared `logger` instance for the package so log
messages from the generator, the simulation engine and the API end up in
one place.
"""

from __future__ import annotations

import logging

logger = logging.getLogger("realstat")


def configure_logging(level: str = "INFO") -> None:
    """Attach a stream handler once and set the package log level."""
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(level.upper())
