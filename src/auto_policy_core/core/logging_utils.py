"""Central logging utilities for the auto policy rating core.

Key Features
------------
1. configure_logging(): idempotent initialization of the root logger.
2. get_logger(name): helper that always returns a configured logger in the
   ``auto_policy_core`` hierarchy.

Prefer explicit ``logger.<level>()`` calls; the core never prints.
"""

from __future__ import annotations

import logging
from typing import Final

from beartype import beartype

__all__: Final = [
    "configure_logging",
    "get_logger",
]

ROOT_LOGGER_NAME: Final = "auto_policy_core"
_DEFAULT_LOG_FORMAT: Final = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_is_configured: bool = False


@beartype
def configure_logging(
    *, level: int | str | None = None, fmt: str = _DEFAULT_LOG_FORMAT
) -> None:
    """Configure the root logger exactly once.

    When ``level`` is omitted the level comes from ``Settings.log_level``.
    Calling this function multiple times is safe.
    """
    global _is_configured
    if _is_configured:
        return

    if level is None:
        from .config import get_settings

        level = get_settings().log_level

    logging.basicConfig(level=level, format=fmt)
    _is_configured = True


@beartype
def get_logger(name: str | None = None, *, level: int | None = None) -> logging.Logger:
    """Return a module-scoped logger that is guaranteed to be configured."""
    configure_logging()
    if name is None:
        logger_name = ROOT_LOGGER_NAME
    elif name.startswith(ROOT_LOGGER_NAME):
        logger_name = name
    else:
        logger_name = f"{ROOT_LOGGER_NAME}.{name}"
    logger = logging.getLogger(logger_name)
    if level is not None:
        logger.setLevel(level)
    return logger
