"""Loguru sinks for the modx CLI and host."""

from __future__ import annotations

import sys
from typing import Optional

from loguru import logger

from .config import LoggingConfig

LOG_FILE_NAME = "modx.log"

_CONSOLE_FORMAT = "<level>{level: <8}</level> <cyan>{extra[component]}</cyan> {message}"
_FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} {level: <8} {extra[component]} {name}:{line} {message}"


def configure_logging(config: LoggingConfig) -> None:
    """Replace all sinks with a stderr sink and, when ``log_dir`` is set, a file."""

    logger.remove()
    logger.configure(extra={"component": "modx"})
    logger.add(sys.stderr, format=_CONSOLE_FORMAT, level=config.level, colorize=None)
    if config.log_dir is None:
        return
    config.log_dir.mkdir(parents=True, exist_ok=True)
    logger.add(
        config.log_dir / LOG_FILE_NAME,
        format=_FILE_FORMAT,
        level=config.level,
        rotation="10 MB",
        retention=5,
        encoding="utf-8",
    )


def get_logger(component: Optional[str] = None):
    return logger.bind(component=component or "modx")
