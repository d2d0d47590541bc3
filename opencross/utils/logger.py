"""Shared logging setup for the opencross pipeline, lexicon clients and play session."""

from __future__ import annotations

import logging
from typing import Optional


def configure_logging(level: int = logging.INFO) -> None:
    """Install one stderr handler on the root logger.

    Modules log under their dotted ``opencross.*`` names: the lexicon
    providers report each Datamuse or Gemini request, the selector reports
    every rejected attempt at DEBUG and the session reports state changes.
    The CLI calls this once with the level from ``--log-level``.
    """

    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return ``name`` or the package logger, installing the default handler on first use."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name or "opencross")
