"""Mini README: Application-wide logging helpers for Sheet Ledger.

Structure:
    * get_logger - factory returning module loggers with baseline configuration.
    * configure_root_logger - optional helper to adjust the global logging level.

Usage:
    Modules import ``get_logger`` and keep a module level ``LOGGER``. The root
    handler is attached exactly once so reloading the web application during
    development does not duplicate every ledger message.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_LOGGER_INITIALISED = False


def configure_root_logger(level: Union[int, str] = logging.INFO) -> None:
    """Configure the root logger with a readable, timestamped formatter."""

    global _LOGGER_INITIALISED
    if _LOGGER_INITIALISED:
        logging.getLogger().setLevel(level)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    configure_root_logger()
    return logging.getLogger(name)
