"""Logging setup for the Quome CLI."""

from __future__ import annotations
import logging
import sys


LOGGER_NAME = "quome"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_HANDLER_ATTR = "_quome_cli_handler"


def _find_handler(logger: logging.Logger) -> logging.StreamHandler | None:
    for handler in logger.handlers:
        if getattr(handler, _HANDLER_ATTR, False):
            return handler  # type: ignore[return-value]
    return None


def configure_logging(level: str | int) -> logging.Logger:
    """Send ``quome`` log records to stderr at ``level``.

    Repeated calls reuse the handler, pointing it at the current
    ``sys.stderr`` and updating the level.
    """
    logger = logging.getLogger(LOGGER_NAME)
    handler = _find_handler(logger)
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        setattr(handler, _HANDLER_ATTR, True)
        logger.addHandler(handler)
        logger.propagate = False
    else:
        handler.setStream(sys.stderr)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    return logger


__all__ = ["LOGGER_NAME", "configure_logging"]
