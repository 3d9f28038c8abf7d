"""Project logger: one ``headereval`` tree, stderr always, a rotating file when configured."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from headereval.config.settings import settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUPS = 3


def _file_handler(log_file: str) -> logging.Handler | None:
    if not log_file:
        return None
    path = Path(log_file)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return RotatingFileHandler(path, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS, encoding="utf-8")
    except OSError:
        # unwritable log location: keep stderr only
        return None


def configure_logging(level: str, log_file: str = "") -> logging.Logger:
    """Attach handlers to the ``headereval`` logger once; later calls only return it."""

    root = logging.getLogger("headereval")
    if root.handlers:
        return root

    resolved = logging.getLevelName(str(level or "info").strip().upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO
    root.setLevel(resolved)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    file_handler = _file_handler(log_file.strip())
    if file_handler is not None:
        handlers.append(file_handler)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    root.propagate = False
    return root


logger = configure_logging(settings.log_level, settings.log_file)


def get_logger(name: str) -> logging.Logger:
    return logger.getChild(name)
