"""
Centralized logging configuration for LunchTrayWeb.

This module provides session-aware logging: every log message carries the
id of the ordering session that produced it, so one customer's pass
through the wizard can be followed in a busy log.

Features:
    - Automatic order session id in all log messages
    - Console output (always enabled)
    - Rotating file logs (optional, for production)
    - Separate error log for ERROR/CRITICAL messages
    - Helper functions for getting loggers with consistent naming

Log Format:
    2026-10-19 12:01:30 [INFO    ] [-] lunch_tray.app - Starting LunchTrayWeb
    2026-10-19 12:01:41 [DEBUG   ] [3f2a9c1e] lunch_tray.core.screen_flow - START -> ENTREE (trigger: START)
    2026-10-19 12:02:05 [INFO    ] [3f2a9c1e] lunch_tray.core.screen_flow - Order confirmed on CHECKOUT, returning to START

Usage:
    # At application startup
    from logging_config import setup_logging, get_logger

    setup_logging(log_level=logging.INFO, enable_file_logging=True)

    # In modules
    logger = get_logger(__name__)
    logger.info("This message includes the session id automatically")

    # For one ordering session
    session_logger = get_session_logger("3f2a9c1e...")
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from flask import has_request_context, session


APP_LOGGER_NAME = "lunch_tray"

# Key of the order session id in the Flask session
SESSION_ID_KEY = "order_session_id"


# =============================================================================
# SESSION CONTEXT FILTER
# =============================================================================

class SessionContextFilter(logging.Filter):
    """
    Logging filter that adds the ordering session id to all log records.

    Adds ``session_id``: the first 8 characters of the order session id
    when logging inside a request that has one, otherwise ``-``. Records
    that already carry one (from get_session_logger) keep it.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "session_id", None):
            return True

        session_id = None
        if has_request_context():
            session_id = session.get(SESSION_ID_KEY)
        record.session_id = session_id[:8] if session_id else "-"

        # Never drop records, only annotate them
        return True


# =============================================================================
# LOGGING SETUP
# =============================================================================

def setup_logging(
    app_name: str = APP_LOGGER_NAME,
    log_level: int = logging.INFO,
    log_dir: Optional[Path] = None,
    enable_file_logging: bool = True,
) -> logging.Logger:
    """
    Configure application logging with session context.

    This sets up:
    1. Console handler (always enabled)
    2. Rotating file handler (optional)
    3. Error file handler (optional) - ERROR/CRITICAL only
    4. Session context filter - adds the order session id to all messages

    Args:
        app_name: Name of the root logger (default: "lunch_tray")
        log_level: Minimum log level (default: INFO)
        log_dir: Directory for log files (default: ./logs relative to this file)
        enable_file_logging: Whether to write to log files (default: True)

    Returns:
        Configured root logger instance
    """
    logger = logging.getLogger(app_name)
    logger.setLevel(log_level)
    logger.propagate = False  # Prevent duplicate logs to root logger

    # Allows re-configuration (e.g. one app per test)
    logger.handlers.clear()

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)-8s] [%(session_id)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    session_filter = SessionContextFilter()

    # ---------------------------------------------------------------------
    # Console Handler (always enabled)
    # ---------------------------------------------------------------------
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(session_filter)
    logger.addHandler(console_handler)

    # ---------------------------------------------------------------------
    # File Handlers (optional)
    # ---------------------------------------------------------------------
    if enable_file_logging:
        if log_dir is None:
            log_dir = Path(__file__).parent / "logs"

        log_dir.mkdir(parents=True, exist_ok=True)

        app_log_file = log_dir / f"{app_name}.log"
        file_handler = RotatingFileHandler(
            filename=app_log_file,
            maxBytes=10 * 1024 * 1024,  # 10 MB per file
            backupCount=5,
            encoding="utf-8"
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(session_filter)
        logger.addHandler(file_handler)

        error_log_file = log_dir / f"{app_name}_error.log"
        error_handler = RotatingFileHandler(
            filename=error_log_file,
            maxBytes=10 * 1024 * 1024,  # 10 MB per file
            backupCount=5,
            encoding="utf-8"
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(formatter)
        error_handler.addFilter(session_filter)
        logger.addHandler(error_handler)

        logger.info(f"File logging enabled: {app_log_file}")

    logger.info(f"Logging configured at level {logging.getLevelName(log_level)}")
    return logger


# =============================================================================
# LOGGER FACTORY FUNCTIONS
# =============================================================================

def get_logger(name: str) -> logging.Logger:
    """
    Get a child logger with the application namespace.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger under "lunch_tray", e.g. "lunch_tray.core.order_state"
    """
    if not name.startswith(APP_LOGGER_NAME):
        name = f"{APP_LOGGER_NAME}.{name}"

    return logging.getLogger(name)


def get_session_logger(session_id: str) -> logging.LoggerAdapter:
    """
    Get a logger for one ordering session.

    All sessions share the single "lunch_tray.session" logger; the session id
    travels on each record as ``session_id`` instead of in the logger name,
    so the logger registry does not grow with the number of visitors.

    Args:
        session_id: Order session id (only first 8 chars are stamped)

    Returns:
        LoggerAdapter over "lunch_tray.session"
    """
    short_id = session_id[:8] if len(session_id) >= 8 else session_id
    return logging.LoggerAdapter(
        logging.getLogger(f"{APP_LOGGER_NAME}.session"),
        {"session_id": short_id},
    )
