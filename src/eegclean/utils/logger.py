"""Centralized logger factory for the cleaning pipeline.

Every module does ``logger = get_logger(__name__)`` so that messages share one
format and one handler under the ``eegclean`` namespace.
"""

from __future__ import annotations
import logging
from typing import Optional

_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


def get_logger(name: Optional[str] = None, level: int = logging.INFO) -> logging.Logger:
    """
    Create or retrieve a module-scoped logger.

    Args:
        name: Optional logger name (defaults to the package logger 'eegclean').
        level: Level applied the first time the logger is configured.

    Returns:
        Configured logging.Logger instance.
    """
    logger = logging.getLogger(name or "eegclean")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt="%H:%M:%S"))
        logger.addHandler(handler)
        logger.setLevel(level)
    return logger


def set_verbosity(verbose: bool) -> None:
    """Switch every already-created ``eegclean`` logger between DEBUG and INFO."""
    level = logging.DEBUG if verbose else logging.INFO
    for name, obj in logging.root.manager.loggerDict.items():
        if isinstance(obj, logging.Logger) and (name == "eegclean" or name.startswith("eegclean.")):
            obj.setLevel(level)
