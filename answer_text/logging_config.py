"""
Logging setup for the answer_text package.

Every module logs through a child of the ``answer_text`` logger; the CLI
calls setup_logging() once with the configured level (ANSWER_TEXT_LOG_LEVEL).
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

ROOT_LOGGER_NAME = "answer_text"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _as_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None
) -> logging.Logger:
    """
    Attach handlers to the ``answer_text`` logger, replacing earlier ones.

    Args:
        level: Number or name ("DEBUG"); unknown names mean INFO
        log_file: Also append records to this file
        format_string: Record format, defaults to DEFAULT_FORMAT

    Returns:
        The ``answer_text`` logger
    """
    level = _as_level(level)
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Child of the ``answer_text`` logger; module names already under it are used as-is."""
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
