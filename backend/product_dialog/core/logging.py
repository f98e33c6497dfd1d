"""Logging bootstrap for embedding applications."""

from __future__ import annotations

import logging

from product_dialog.core.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Settings | None = None) -> None:
    """Apply the configured log level to the package logger.

    The host application owns the root logger; this only attaches a handler
    when nothing upstream has configured one yet.
    """
    settings = settings or get_settings()
    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        level = logging.INFO

    if not logging.getLogger().handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)

    logging.getLogger("product_dialog").setLevel(level)
