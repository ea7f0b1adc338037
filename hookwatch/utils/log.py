# hookwatch/utils/log.py
# Process-wide logging setup for hookwatch.
# get_logger(name) configures the root console handler once, plus a rotating
# file handler when LOG_TO_FILE=true.

from __future__ import annotations
import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

_DEFAULT_FMT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

_INITIALIZED = False


def _level_from_env() -> int:
    lvl = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), None)
    return lvl if isinstance(lvl, int) else logging.INFO


def _init_root() -> None:
    global _INITIALIZED
    if _INITIALIZED:
        return

    lvl = _level_from_env()
    root = logging.getLogger()
    root.setLevel(lvl)

    # Drop handlers from an earlier init (module reloads in notebooks/tests);
    # handlers installed by anyone else stay.
    for h in list(root.handlers):
        if getattr(h, "_hookwatch", False):
            root.removeHandler(h)
            h.close()

    ch = logging.StreamHandler()
    ch._hookwatch = True
    ch.setLevel(lvl)
    ch.setFormatter(logging.Formatter(_DEFAULT_FMT, datefmt=_DEFAULT_DATEFMT))
    root.addHandler(ch)

    if os.getenv("LOG_TO_FILE", "false").lower() == "true":
        log_dir = Path(os.getenv("LOG_DIR", "logs"))
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(
            log_dir / "hookwatch.log",
            maxBytes=int(os.getenv("LOG_MAX_BYTES", "1048576")),
            backupCount=int(os.getenv("LOG_BACKUPS", "5")),
        )
        fh._hookwatch = True
        fh.setLevel(lvl)
        fh.setFormatter(logging.Formatter(_DEFAULT_FMT, datefmt=_DEFAULT_DATEFMT))
        root.addHandler(fh)

    _INITIALIZED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the shared hookwatch format and level.

    Usage:
        from .utils.log import get_logger
        logger = get_logger("hookwatch.dispatcher")
    """
    _init_root()
    return logging.getLogger(name)
