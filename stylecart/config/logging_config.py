# stylecart/config/logging_config.py

"""Logging for one stylecart run: a ``logs/run_<timestamp>.log`` file
holding every ``stylecart.*`` record, plus a quieter stderr console."""

import logging
import sys
from datetime import datetime
from pathlib import Path

from stylecart.config.settings import Settings

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | %(module)s:%(funcName)s:%(lineno)d | "
    "%(message)s"
)
_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _console_level() -> int:
    """Level named by ``Settings.CONSOLE_LOG_LEVEL``, WARNING if unknown."""
    level = logging.getLevelName(Settings.CONSOLE_LOG_LEVEL.strip().upper())
    return level if isinstance(level, int) else logging.WARNING


def _attach(
    logger: logging.Logger, handler: logging.Handler, level: int, fmt: str
) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=_DATE_FORMAT))
    logger.addHandler(handler)


def setup_logging() -> Path:
    """Configure the ``stylecart`` logger and return this run's log file.

    Calling it again (tests, a restarted TUI) leaves the existing handlers
    in place.
    """
    logs_dir: Path = Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / f"run_{datetime.now():%Y%m%d_%H%M%S}.log"

    root_logger = logging.getLogger("stylecart")
    root_logger.setLevel(logging.DEBUG)
    if root_logger.handlers:
        return log_file

    _attach(
        root_logger,
        logging.FileHandler(log_file, encoding="utf-8"),
        logging.DEBUG,
        _FILE_FORMAT,
    )
    _attach(
        root_logger,
        logging.StreamHandler(sys.stderr),
        _console_level(),
        _CONSOLE_FORMAT,
    )
    root_logger.info("Logging to %s", log_file)
    return log_file
