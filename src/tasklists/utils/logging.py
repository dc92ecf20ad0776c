"""Logging helpers shared by every module."""

import logging
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO", fmt: Optional[str] = None) -> None:
    """Configure the root logger for the CLI. Existing handlers are kept."""
    logging.basicConfig(format=fmt or DEFAULT_FORMAT)
    logging.getLogger().setLevel(level.upper())


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
