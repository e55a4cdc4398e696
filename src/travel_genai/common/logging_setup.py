"""Central logging setup for the project."""
from __future__ import annotations
import logging
import os
import sys

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"

def resolve_level(value: str | int | None) -> int:
    """
    Turn a level name ("debug", "INFO") or number into a logging level.

    Unknown names fall back to INFO.
    """
    if value is None or value == "":
        return logging.INFO
    if isinstance(value, int):
        return value
    if value.strip().isdigit():
        return int(value)
    level = logging.getLevelName(value.strip().upper())
    return level if isinstance(level, int) else logging.INFO

def setup_logging(level: str | int | None = None) -> None:
    """
    Configure the root logger to write to stdout.

    Args:
        level: Logging level or level name. Defaults to $LOG_LEVEL, then INFO.
    """
    if level is None:
        level = os.getenv("LOG_LEVEL")
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(resolve_level(level))
    # httpx logs every request line at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
