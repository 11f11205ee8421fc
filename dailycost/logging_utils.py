"""Mini README: Application-wide logging helpers for the daily cost tracker.

Structure:
    * configure_root_logger - install the shared handler once per process.
    * get_logger - module logger factory used across the package.

Usage:
    Modules call ``get_logger(__name__)`` at import time. The CLI and the
    application factory call ``configure_root_logger`` with the configured
    level name so uvicorn reloads do not stack duplicate handlers.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_HANDLER_NAME = "dailycost"


def _resolve_level(level: Union[int, str]) -> int:
    """Translate level names such as ``"debug"`` into logging constants."""

    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def configure_root_logger(level: Union[int, str] = logging.INFO) -> None:
    """Attach the tracker's formatter to the root logger and set its level."""

    root_logger = logging.getLogger()
    root_logger.setLevel(_resolve_level(level))
    if any(handler.get_name() == _HANDLER_NAME for handler in root_logger.handlers):
        return

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(handler)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a named logger; handlers are installed by ``configure_root_logger``."""

    return logging.getLogger(name)
