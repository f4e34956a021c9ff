"""Logging setup."""

import logging
from pathlib import Path

from rich.logging import RichHandler

LOG_FORMAT = "[%(asctime)s] %(levelname)-6s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(log_path: Path | None = None, verbose: bool = False) -> logging.Logger:
    """Configure the hymod logger.

    Entries are appended to log_path. With verbose, they are also shown on
    the console. A log file that cannot be opened is skipped.
    """
    logger = logging.getLogger("hymod")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_path is not None:
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
        except OSError:
            file_handler = None
        if file_handler is not None:
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
            logger.addHandler(file_handler)

    if verbose:
        logger.addHandler(RichHandler(show_path=False, markup=False))

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger
