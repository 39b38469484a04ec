# src/ib_app/core/logging.py
from __future__ import annotations

import logging
import sys


def configure_logging(level: int | str = logging.WARNING, json: bool = False) -> None:
    """
    Configure the root logger once per process. Keep it minimal.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    handlers = [logging.StreamHandler(sys.stdout)]

    fmt = (
        '{"level":"%(levelname)s","time":"%(asctime)s","name":"%(name)s",'
        '"message":"%(message)s","module":"%(module)s","line":%(lineno)d}'
        if json
        else "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    )
    logging.basicConfig(level=level, handlers=handlers, format=fmt, force=True)

    # Pillow logs every plugin probe at DEBUG
    logging.getLogger("PIL").setLevel(max(level, logging.INFO))


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(name or "ib_app")
