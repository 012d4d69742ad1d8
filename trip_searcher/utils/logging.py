"""Root logger setup for the viewer.

Settings come from arguments first, then ``LOG_*`` environment variables,
then the defaults below. The environment is read when ``configure_logging``
runs, so a ``.env`` file loaded beforehand takes effect.
"""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import List, Literal

LogOutput = Literal["stdout", "file", "both"]
LogFormat = Literal["text", "json"]

DEFAULT_LEVEL = "INFO"
DEFAULT_OUTPUT: LogOutput = "stdout"
DEFAULT_FILE_PATH = "logs/trip-searcher.log"
DEFAULT_FORMAT: LogFormat = "text"

_FORMATS = {
    "text": "%(asctime)s | %(levelname)s | %(name)s | %(filename)s:%(lineno)d | %(message)s",
    "json": (
        '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "name": "%(name)s", '
        '"file": "%(filename)s:%(lineno)d", "message": "%(message)s"}'
    ),
}


def _setting(value, env_var: str, default: str) -> str:
    if value is not None:
        return value
    return os.environ.get(env_var) or default


def _build_handlers(output: str, file_path: str) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []
    if output in ("stdout", "both"):
        handlers.append(logging.StreamHandler(sys.stdout))
    if output in ("file", "both"):
        log_dir = os.path.dirname(file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(RotatingFileHandler(file_path, maxBytes=5 * 1024 * 1024, backupCount=3))
    return handlers


def configure_logging(
    level: str | int | None = None,
    output: LogOutput | None = None,
    file_path: str | None = None,
    log_format: LogFormat | None = None,
) -> None:
    """Replace the root logger's handlers.

    ``output`` is "stdout", "file" or "both"; ``log_format`` is "text" or
    "json". Unknown formats fall back to text.
    """
    resolved_level = _setting(level, "LOG_LEVEL", DEFAULT_LEVEL)
    if isinstance(resolved_level, str):
        resolved_level = resolved_level.upper()
    resolved_output = _setting(output, "LOG_OUTPUT", DEFAULT_OUTPUT).lower()
    resolved_path = _setting(file_path, "LOG_FILE_PATH", DEFAULT_FILE_PATH)
    resolved_format = _setting(log_format, "LOG_FORMAT", DEFAULT_FORMAT).lower()

    formatter = logging.Formatter(_FORMATS.get(resolved_format, _FORMATS["text"]))

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved_level)
    root_logger.handlers.clear()
    for handler in _build_handlers(resolved_output, resolved_path):
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)
