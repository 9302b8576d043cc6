"""Logging helpers for the aged_cache package.

The library itself only emits DEBUG records through module loggers;
applications that want to see them call setup_logging() once.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from aged_cache import config

_ROOT_LOGGER = "aged_cache"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: Optional[Union[int, str]] = None) -> logging.Logger:
    logger = logging.getLogger(_ROOT_LOGGER)
    logger.setLevel(level if level is not None else config.LOG_LEVEL)

    # One handler only; repeated calls just adjust the level
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
