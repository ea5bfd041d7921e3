"""Logging setup for the vip-balance CLI"""

import logging
import sys
from pathlib import Path

from loguru import logger

VERBOSITY_LEVELS = {0: "ERROR", 1: "INFO"}

LOG_FORMAT = "{time:YYYY/MM/DD HH:mm:ss} {level}\t{message}"


class _LoguruHandler(logging.Handler):
    """Bridge stdlib logging into loguru"""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(
            level, record.getMessage()
        )


def level_for_verbosity(verbosity: int) -> str:
    """Map the -v flag to a loguru level name

    0 - errors only, 1 - info and errors, 2+ - debug
    """
    if verbosity <= 0:
        return VERBOSITY_LEVELS[0]
    return VERBOSITY_LEVELS.get(verbosity, "DEBUG")


def configure_logging(
    verbosity: int = 0, log_file: str | Path | None = None
) -> None:
    """Replace loguru sinks according to the CLI flags

    Args:
        verbosity: Verbosity level from -v
        log_file: If given, log records are appended to this file instead
            of stderr
    """
    level = level_for_verbosity(verbosity)
    logger.remove()
    if log_file:
        logger.add(
            str(log_file),
            level=level,
            format=LOG_FORMAT,
            mode="a",
            encoding="utf-8",
        )
    else:
        logger.add(sys.stderr, level=level, format=LOG_FORMAT)

    # urllib3 logs connection details at DEBUG
    std_logger = logging.getLogger("urllib3")
    std_logger.setLevel(logging.DEBUG if level == "DEBUG" else logging.WARNING)
    if not any(isinstance(h, _LoguruHandler) for h in std_logger.handlers):
        std_logger.addHandler(_LoguruHandler())
    std_logger.propagate = False
