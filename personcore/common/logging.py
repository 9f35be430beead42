# personcore/common/logging.py
from __future__ import annotations

import logging
from typing import Optional


def get_logger(name: str = "uvicorn.error", level: Optional[int] = None) -> logging.Logger:
    """
    Return a logger that plays nice with Uvicorn if running under it.
    If no handlers are set, we add a basicConfig once.
    Level defaults to Settings.log_level.
    """
    if level is None:
        from personcore.common.settings import get_settings  # local import: settings may log too

        level = logging.getLevelName(get_settings().log_level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(name)
    if not logging.getLogger().handlers and not logger.handlers:
        logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.setLevel(level)
    return logger
