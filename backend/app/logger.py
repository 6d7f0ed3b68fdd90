"""Shared logging setup so every module logs with the same format."""
from __future__ import annotations

import logging

from app.config import get_settings

_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False


def _configure_root() -> None:
    global _configured
    if _configured:
        return
    level_name = str((get_settings().logging or {}).get("level", "INFO")).upper()
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT))
    root = logging.getLogger("human_essentials")
    root.setLevel(getattr(logging, level_name, logging.INFO))
    root.addHandler(handler)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a child of the application logger, configuring handlers on first use."""
    _configure_root()
    return logging.getLogger(f"human_essentials.{name}")
