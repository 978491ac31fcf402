"""Logging setup for the MarketLens entry points.

Library modules only call ``logging.getLogger(__name__)``; handlers are
installed once by the CLI group or the API factory.
"""

import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LEVEL_ENV_VAR = "MARKETLENS_LOG_LEVEL"


def _level_from_env(default: int) -> int:
    name = os.getenv(LEVEL_ENV_VAR, "").strip().upper()
    level = logging.getLevelName(name) if name else default
    return level if isinstance(level, int) else default


def configure_logging(level: Optional[int] = None, default: int = logging.INFO) -> None:
    """Install the MarketLens log format on the root logger.

    Does nothing when the root logger already has handlers, so a host
    application (or uvicorn) keeps its own configuration.

    Args:
        level: Explicit level. When omitted, ``MARKETLENS_LOG_LEVEL`` is
            read, falling back to ``default``.
        default: Level used when neither ``level`` nor the variable is set.
    """
    if logging.getLogger().handlers:
        return

    if level is None:
        level = _level_from_env(default)

    logging.basicConfig(level=level, format=LOG_FORMAT)
