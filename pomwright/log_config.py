"""Centralized logging setup for test runs."""

import logging
from pathlib import Path
from typing import Optional, Union

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


def configure_logging(level: Union[int, str] = logging.INFO, logfile: Optional[Path] = None) -> None:
    """
    Configure root logging.

    Args:
        level: Logging level or level name
        logfile: Optional file receiving the same records as the console
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    formatter = logging.Formatter(DEFAULT_FORMAT)
    if not any(type(h) is logging.StreamHandler for h in root_logger.handlers):
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        root_logger.addHandler(stream_handler)

    if logfile is not None:
        logfile = Path(logfile)
        logfile.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(logfile, encoding='utf-8')
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
