from __future__ import annotations

import logging
import os
from typing import Final

LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

_handler: logging.Handler | None = None


def _level_from_env() -> int:
    name = os.getenv("FLAVORWHEEL_LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def get_logger(name: str) -> logging.Logger:
    """Module logger; the first call installs the shared stderr handler on the root logger.

    FLAVORWHEEL_LOG_LEVEL is re-read on every call so tests can change it.
    """
    global _handler

    level = _level_from_env()
    root = logging.getLogger()
    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        root.addHandler(_handler)
    root.setLevel(level)

    module_logger = logging.getLogger(name)
    module_logger.setLevel(level)
    return module_logger
