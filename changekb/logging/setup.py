from __future__ import annotations

import logging
from pathlib import Path

from ..config import get_settings

DEFAULT_LOG_NAME = "changekb"
DEFAULT_LOG_FILENAME = "changekb.log"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def configure_logging(
    *,
    app_name: str = DEFAULT_LOG_NAME,
    log_dir: Path | None = None,
    console_level: int = logging.INFO,
) -> logging.Logger:
    """
    Attach a DEBUG file handler (``changekb.log`` in ``log_dir``, defaulting to
    ``Settings.log_dir``) and a console handler to the application logger.
    Subsequent calls return the already-configured logger.
    """
    logger = logging.getLogger(app_name)
    if logger.handlers:
        return logger

    if log_dir is None:
        log_dir = get_settings().log_dir
    log_path = Path(log_dir) / DEFAULT_LOG_FILENAME
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger.setLevel(logging.DEBUG)
    formatter = logging.Formatter(LOG_FORMAT)

    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)

    # stderr, so answers printed to stdout stay clean
    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)
    return logger


__all__ = ["DEFAULT_LOG_FILENAME", "configure_logging"]
