from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
import sys


DEFAULT_LOG_DIR = Path.home() / ".sheetcfg" / "logs"
ROOT_LOGGER_NAME = "sheetcfg"

_CONFIGURED = False


def configure_logging(log_dir: Path | None = None) -> logging.Logger:
    """Attach the rotating file + stdout handlers to the ``sheetcfg`` logger once.

    Creates the log directory if needed.
    """
    global _CONFIGURED
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if _CONFIGURED:
        return logger

    base = Path(log_dir) if log_dir is not None else DEFAULT_LOG_DIR
    base.mkdir(parents=True, exist_ok=True)
    log_path = base / "sheetcfg.log"

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.INFO)
    logger.propagate = False

    fmt = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    file_handler = RotatingFileHandler(log_path, maxBytes=2 * 1024 * 1024, backupCount=3, encoding="utf-8")
    file_handler.setFormatter(fmt)
    logger.addHandler(file_handler)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(fmt)
    logger.addHandler(console)

    _CONFIGURED = True
    return logger


def get_logger(name: str | None = None, log_dir: Path | None = None) -> logging.Logger:
    """Return the application logger, or a child scoped under ``sheetcfg``."""

    root = configure_logging(log_dir)
    if not name:
        return root
    return root.getChild(name)


def reset_logging() -> None:
    """Detach handlers so the next ``get_logger`` call reconfigures."""

    global _CONFIGURED
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    _CONFIGURED = False
