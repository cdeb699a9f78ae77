"""stderr logging for programs that embed desktop-exec.

The library modules only create loggers; call :func:`configure_logging`
from the host program to see their warnings.
"""

import logging
import os
import sys

LOG_FORMAT = "[%(name)s] %(message)s"
VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_handler = None


def _effective_level(level):
    env_level = os.environ.get("LOG_LEVEL", "").upper()
    if env_level in VALID_LEVELS:
        return env_level
    if level and level.upper() in VALID_LEVELS:
        return level.upper()
    return "INFO"


def configure_logging(level=None):
    """Attach a stderr handler to the root logger.

    ``LOG_LEVEL`` in the environment wins over *level*; the fallback is
    ``INFO``. Calling this again does nothing.
    """
    global _handler

    if _handler is not None:
        return _handler

    effective = _effective_level(level)
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    _handler = logging.StreamHandler(sys.stderr)
    _handler.setLevel(getattr(logging, effective))
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(_handler)
    return _handler


def set_level(level_name):
    if _handler is None:
        return
    upper = level_name.upper()
    if upper in VALID_LEVELS:
        _handler.setLevel(getattr(logging, upper))
