"""Logging helpers for crossquery.

Modules log through `get_logger(__name__)`. The first logger created
configures the root logger from `settings.LOG_LEVEL`. Query construction,
combination and compilation are logged at debug level; `Logger.message`
reports user-facing events (named query definitions) at the configured level
itself, so they are shown whatever threshold was chosen.
"""

import logging
from typing import Any, Optional

from .settings import settings

_LEVELS = {name: getattr(logging, name) for name in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")}

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_ROOT = "crossquery"

_configured = False


def _level(name: Optional[str]) -> int:
    # unset or unknown names fall back to INFO
    return _LEVELS.get((name or "").upper(), logging.INFO)


def setup_global_logging(level: str = "INFO") -> None:
    """Configure the root logger once.

    Args:
        level: Log level name (e.g., "DEBUG", "INFO")
    """
    global _configured
    if _configured:
        return
    logging.basicConfig(level=_level(level), format=_FORMAT)
    _configured = True


def get_logger(name: Optional[str] = None) -> "Logger":
    """Return the logger for a module, usually called with `__name__`."""
    return Logger(name)


class Logger:
    """Stdlib logger restricted to the levels crossquery emits."""

    def __init__(self, name: Optional[str] = None) -> None:
        if not _configured:
            setup_global_logging(settings.LOG_LEVEL)
        self._logger = logging.getLogger(name or _ROOT)

    @property
    def name(self) -> str:
        return self._logger.name

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.debug(msg, *args, **kwargs)

    def message(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log at the level named by `settings.LOG_LEVEL`."""
        self._logger.log(_level(settings.LOG_LEVEL), msg, *args, **kwargs)
