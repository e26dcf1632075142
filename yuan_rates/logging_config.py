from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .infra.settings import SettingsLoader

LOGGER_NAME = "yuan_rates"


def _level(name: object, fallback: int) -> int:
    return getattr(logging, str(name).upper(), fallback)


def configure_logging() -> None:
    """Configure project-wide logging with rotating file and console output.

    Uses SettingsLoader for file path, levels, and rotation settings. Idempotent:
    subsequent calls won't duplicate handlers, only refresh levels.
    """
    settings = SettingsLoader()
    log_file = Path(settings.get("log_file"))
    level = _level(settings.get("log_level", "INFO"), logging.INFO)
    console_level = _level(
        settings.get("console_log_level", "WARNING"), logging.WARNING
    )

    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        # Already configured
        logger.setLevel(level)
        for h in logger.handlers:
            # RotatingFileHandler is a StreamHandler subclass too
            if not isinstance(h, logging.FileHandler):
                h.setLevel(console_level)
        return

    fmt = logging.Formatter(
        fmt=(
            "%(levelname)s %(asctime)s %(message)s"
        ),
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
    logger.setLevel(level)

    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            log_file,
            maxBytes=int(settings.get("log_rotation_bytes", 1_048_576)),
            backupCount=int(settings.get("log_backup_count", 5)),
            encoding="utf-8",
        )
    except OSError as exc:
        # Read-only install location: keep console logging only
        handler = None
        logger.debug("File logging disabled: %s", exc)
    if handler is not None:
        handler.setFormatter(fmt)
        logger.addHandler(handler)

    # Console goes to stderr so stdout stays the conversion output
    stream = logging.StreamHandler()
    stream.setLevel(console_level)
    stream.setFormatter(fmt)
    logger.addHandler(stream)
