# app/utils/logger.py
"""
Centralised logging configuration for the registry service.

Handlers on the root logger:
  - console
  - LOG_DIR/<LOG_FILE>        rotating, everything at LOG_LEVEL
  - LOG_DIR/admissions.log    rotating, only the registry's admit/reject/remove
                              lines (logger app.services.vehicle_service)

Set LOG_FILE empty to log to console only. LOG_SQL=true echoes SQL through
the sqlalchemy.engine logger.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from app.config import settings

DEFAULT_LOG_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "logs")
ADMISSIONS_LOGGER = "app.services.vehicle_service"
ADMISSIONS_FILE = "admissions.log"

_configured = False


def _formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def rotating_file_handler(log_dir: str, filename: str, level: str) -> Optional[logging.Handler]:
    """Rotating file handler (5 × 5MB), or None when log_dir is not writable."""
    try:
        os.makedirs(log_dir, exist_ok=True)
        handler = RotatingFileHandler(
            filename=os.path.join(log_dir, filename),
            maxBytes=5 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
    except OSError as e:
        logging.getLogger(__name__).warning(f"File logging disabled, cannot write to {log_dir}: {e}")
        return None
    handler.setLevel(level)
    handler.setFormatter(_formatter())
    return handler


def configure_logging():
    """Attach handlers once per process. Reads settings at call time."""
    global _configured
    if _configured:
        return
    _configured = True

    level = settings.LOG_LEVEL.upper()
    log_dir = settings.LOG_DIR or DEFAULT_LOG_DIR

    root = logging.getLogger()
    root.setLevel(level)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(_formatter())
    root.addHandler(console)

    if settings.LOG_FILE:
        main_handler = rotating_file_handler(log_dir, settings.LOG_FILE, level)
        if main_handler:
            root.addHandler(main_handler)

        audit_handler = rotating_file_handler(log_dir, ADMISSIONS_FILE, "INFO")
        if audit_handler:
            logging.getLogger(ADMISSIONS_LOGGER).addHandler(audit_handler)

    # Request lines are already logged by the timing middleware
    if level != "DEBUG":
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    if settings.LOG_SQL:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)


def get_logger(name: str) -> logging.Logger:
    """Get a named logger. Call this at the top of every module."""
    configure_logging()
    return logging.getLogger(name)
