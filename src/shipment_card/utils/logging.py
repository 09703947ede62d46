"""Logging helpers shared across the package."""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO", stream=None) -> None:
    """
    Configure the root ``shipment_card`` logger once.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        stream: Optional stream for the handler. Defaults to stderr so stdout
            stays clean for rendered output.
    """
    root = logging.getLogger("shipment_card")
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not root.handlers:
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name or "shipment_card")
