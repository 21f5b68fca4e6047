"""Logging setup: console output plus rotating JSON log files."""
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from pythonjsonlogger import jsonlogger

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
JSON_LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5

_LEVELS = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def _file_handler(path: Path, level: int = logging.NOTSET) -> RotatingFileHandler:
    handler = RotatingFileHandler(path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUP_COUNT)
    handler.setLevel(level)
    # Fields passed through ``extra`` are written as top-level JSON keys.
    handler.setFormatter(jsonlogger.JsonFormatter(JSON_LOG_FORMAT))
    return handler


def configure_logging(level: str = "info", log_dir: Optional[str] = "logs") -> None:
    """Configure the root logger.

    Console output always; when log_dir is set, an error-only file and a
    combined file, both JSON lines rotated at 10MB with 5 backups.
    """
    logging.basicConfig(
        level=_LEVELS.get(level.lower(), logging.INFO),
        format=LOG_FORMAT,
        force=True,
    )

    if not log_dir:
        return

    directory = Path(log_dir)
    directory.mkdir(parents=True, exist_ok=True)
    root = logging.getLogger()
    root.addHandler(_file_handler(directory / "error.log", logging.ERROR))
    root.addHandler(_file_handler(directory / "combined.log"))
