"""Logging setup shared by the CLI and the preview tools."""

import logging
import os
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_LOGGER_CONFIGURED = False


def setup_logging(level: int = logging.INFO, log_dir: str | os.PathLike | None = None) -> None:
    """
    Configure console logging, plus a file handler when `log_dir` is given.

    Never raises if the log file cannot be opened; falls back to console only.
    """
    global _LOGGER_CONFIGURED
    if _LOGGER_CONFIGURED:
        return

    logger = logging.getLogger()
    logger.setLevel(level)

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(fmt)
    logger.addHandler(console)

    if log_dir is not None:
        try:
            d = Path(log_dir)
            d.mkdir(parents=True, exist_ok=True)
            fh = logging.FileHandler(d / "famtree_layout.log", encoding="utf-8")
            fh.setLevel(level)
            fh.setFormatter(fmt)
            logger.addHandler(fh)
        except OSError as e:
            logging.getLogger(__name__).warning("Could not open log file: %s", e)

    _LOGGER_CONFIGURED = True
