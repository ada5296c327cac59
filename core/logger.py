# core/logger.py

import logging
import sys

_logger = logging.getLogger("gradebook")
if not _logger.handlers:
    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(
        "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    _logger.addHandler(handler)
    _logger.setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> logging.Logger:
    if name:
        return _logger.getChild(name)
    return _logger


def configure_logging(level: str | int) -> None:
    """Sets the level of the package logger, accepting names like "INFO"."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    _logger.setLevel(level)
