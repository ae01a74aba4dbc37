"""Logging setup for the buddy_finder package.

Every module logs through a child of the ``buddy_finder`` logger. The CLI
calls :func:`configure_logging` once per run with the loaded settings; the
``--log-level`` flag is passed as an override.
"""

import logging
import sys

from buddy_finder.config.settings import Settings, get_settings

LOGGER_NAME = "buddy_finder"

_HANDLER_NAME = "buddy_finder.stderr"
_FORMATTER = logging.Formatter(
    "%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)


def configure_logging(
    settings: Settings | None = None, override: str | None = None
) -> logging.Logger:
    """Point the application logger at stderr and set its level.

    Args:
        settings: Source of ``log_level`` (defaults to the settings singleton).
        override: Level that wins over ``settings.log_level``, e.g. from
            the ``--log-level`` flag.

    Returns:
        The ``buddy_finder`` logger.
    """
    settings = settings or get_settings()
    level = logging.getLevelName((override or settings.log_level).upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {override or settings.log_level}")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    handler = next((h for h in logger.handlers if h.name == _HANDLER_NAME), None)
    if handler is None:
        # stdout carries match output and JSON
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(_FORMATTER)
        logger.addHandler(handler)
        logger.propagate = False
    handler.setLevel(level)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return ``buddy_finder.<name>``; full module names are used as-is."""
    if name == LOGGER_NAME or name.startswith(f"{LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def reset_logging() -> None:
    """Drop the stderr handler and level so tests start clean."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
