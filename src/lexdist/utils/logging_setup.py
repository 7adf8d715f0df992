"""Logging configuration shared by the CLI commands."""

from __future__ import annotations

import logging
import sys

_FORMAT = "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Send lexdist logs to stderr at *level*, replacing earlier handlers."""
    numeric = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric,
        format=_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )
