"""
Colorized console logging for the command-line scripts.
"""

__all__ = ["configure_logging", "ColorFormatter"]

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from colorama import Fore, Style, init as colorama_init

PathLike = Union[str, os.PathLike]


class ColorFormatter(logging.Formatter):
    """Colorized console formatter."""
    COLORS = {
        "DEBUG":    Fore.CYAN,
        "INFO":     Fore.GREEN,
        "WARNING":  Fore.YELLOW,
        "ERROR":    Fore.RED,
        "CRITICAL": Fore.RED + Style.BRIGHT,
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "")
        reset = Style.RESET_ALL
        return (
            f"[{self.formatTime(record, self.datefmt)}] "
            f"[{color}{record.levelname:<5s}{reset}] "
            f"[{record.name}] "
            f"{record.getMessage()}"
        )


def configure_logging(level: int = logging.INFO,
                      log_file: Optional[PathLike] = None,
                      name: Optional[str] = None) -> logging.Logger:
    """Configure colorized console (+ optional rotating file) logging."""
    colorama_init(strip=False, convert=True)
    datefmt = "%H:%M:%S"

    logger = logging.getLogger(name)
    logger.setLevel(level)
    for h in list(logger.handlers):
        logger.removeHandler(h)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(ColorFormatter(datefmt=datefmt))
    logger.addHandler(console)

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(path, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
        fh.setLevel(level)
        fh.setFormatter(logging.Formatter(
            "[%(asctime)s] [%(levelname)-5s] [%(name)s] %(message)s", datefmt=datefmt
        ))
        logger.addHandler(fh)

    return logger
