"""Logging setup shared by the library and the CLI."""

import logging
import os
import sys

LOG_FORMAT = "[%(levelname)s] %(message)s"
LOG_LEVEL_ENV = "DEPCHANGE_LOG_LEVEL"
DEFAULT_LEVEL = logging.WARNING

_HANDLER_NAME = "depchange"


def _resolve_level(level: str | int | None) -> int:
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV)
    if level is None or level == "":
        return DEFAULT_LEVEL
    if isinstance(level, int):
        return level
    value = getattr(logging, str(level).strip().upper(), None)
    if not isinstance(value, int):
        return DEFAULT_LEVEL
    return value


def configure_logging(level: str | int | None = None) -> int:
    """Attach the depchange stderr handler to the root logger.

    The level comes from ``level``, then ``DEPCHANGE_LOG_LEVEL``, then
    WARNING. Calling it again only updates the level.

    Returns:
        The numeric level that was applied
    """
    root = logging.getLogger()
    resolved = _resolve_level(level)

    handler = next((h for h in root.handlers if h.get_name() == _HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    elif isinstance(handler, logging.StreamHandler):
        # sys.stderr may have been swapped since the handler was created
        handler.setStream(sys.stderr)

    root.setLevel(resolved)
    return resolved


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when ``logger`` would emit DEBUG records."""
    return logger.isEnabledFor(logging.DEBUG)
