# === FILE: lawtree/logger.py ===
"""Shared ``LawTree`` logger.

Modules log through :data:`logger`; the CLI calls :func:`init_logging` once
its options are parsed to pick the level and an optional rotating log file.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Optional, Union

_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_LOGGER_NAME: Final[str] = "LawTree"

# rotation of the optional log file
_MAX_BYTES: Final[int] = 5 * 1024 * 1024
_BACKUPS: Final[int] = 3


def init_logging(
    level: Union[int, str] = "INFO",
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """Reset the project logger's handlers: stderr always, *log_file* if given."""
    lg = logging.getLogger(_LOGGER_NAME)
    lg.setLevel(level)
    for handler in lg.handlers:
        handler.close()
    lg.handlers.clear()

    formatter = logging.Formatter(_FORMAT)
    # stdout carries the JSON tree printed by the CLI
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(
                str(log_file), maxBytes=_MAX_BYTES, backupCount=_BACKUPS, encoding="utf-8"
            )
        )
    for handler in handlers:
        handler.setFormatter(formatter)
        lg.addHandler(handler)

    lg.propagate = False
    return lg


logger: logging.Logger = init_logging()

__all__ = ["logger", "init_logging"]
