# -*- coding: utf-8 -*-
"""Logging setup shared by the Streamlit app and batch callers."""

from __future__ import annotations
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: int = logging.INFO) -> logging.Logger:
    """Attach a single stream handler to the package logger (idempotent)."""
    logger = logging.getLogger("skin_market")
    if not any(getattr(h, "_skin_market", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._skin_market = True
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger
