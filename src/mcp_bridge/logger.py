"""Logging helpers shared by the bridge modules and the CLI."""

import logging
import sys
from typing import Union

_LOGGER_NAME = "mcp_bridge"
_DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger below the ``mcp_bridge`` namespace.

    Args:
        name: Module name (usually ``__name__``) or a short sub-logger name.
            Names already inside the namespace are used as-is.

    Returns:
        The requested logger.
    """
    if not name:
        return logging.getLogger(_LOGGER_NAME)
    if name == _LOGGER_NAME or name.startswith(_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")


def setup_logging(level: Union[int, str] = logging.INFO, format_str: str = _DEFAULT_FORMAT) -> None:
    """Attach a stdout handler to the bridge's root logger.

    Meant for applications and the CLI; the library itself never calls it.
    Calling it again after a handler is attached only updates the level.

    Args:
        level: Logging level, either numeric or a name such as ``"DEBUG"``.
        format_str: Log format string.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)

    if any(not isinstance(h, logging.NullHandler) for h in logger.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(format_str))
    logger.addHandler(handler)


logging.getLogger(_LOGGER_NAME).addHandler(logging.NullHandler())
