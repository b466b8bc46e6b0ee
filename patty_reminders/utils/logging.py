import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

import structlog

from ..core.config import get_settings


def setup_logging(
    log_level: Optional[str] = None,
    log_to_file: Optional[bool] = None,
    logs_dir: Optional[str] = None,
) -> None:
    """Set up logging for the host application.

    Arguments left as None come from Settings (PATTY_LOG_LEVEL,
    PATTY_LOG_TO_FILE, PATTY_LOGS_DIR).

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_to_file: Whether to log to files in addition to console
        logs_dir: Directory for rotating log files
    """
    settings = get_settings()
    log_level = log_level or settings.log_level
    log_to_file = settings.log_to_file if log_to_file is None else log_to_file
    logs_dir = logs_dir or settings.logs_dir

    level = getattr(logging, log_level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.set_exc_info,
            (
                structlog.processors.JSONRenderer()
                if log_to_file
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)

    if log_to_file:
        logs_path = Path(logs_dir)
        logs_path.mkdir(parents=True, exist_ok=True)

        app_handler = logging.handlers.RotatingFileHandler(
            logs_path / "reminders.log", maxBytes=10 * 1024 * 1024, backupCount=5  # 10MB
        )
        app_handler.setLevel(logging.INFO)
        app_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
            )
        )
        root_logger.addHandler(app_handler)

        # Error-only log file for critical issues
        error_handler = logging.handlers.RotatingFileHandler(
            logs_path / "errors.log", maxBytes=5 * 1024 * 1024, backupCount=10  # 5MB
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s - %(exc_info)s"
            )
        )
        root_logger.addHandler(error_handler)


def get_reminder_logger(name: Optional[str] = None) -> structlog.BoundLogger:
    """Get a structured logger for reminder scheduling events."""
    return structlog.get_logger(name or "reminders")


def log_gateway_failure(
    operation: str,
    error: Exception,
    context: Dict[str, Any],
    logger: Optional[structlog.BoundLogger] = None,
) -> None:
    """Record a swallowed scheduler gateway failure with its context.

    Args:
        operation: Gateway call that failed (schedule, cancel, ...)
        error: The exception raised by the gateway
        context: Extra fields, e.g. notification_id
        logger: Logger to use (creates one if not provided)
    """
    if logger is None:
        logger = get_reminder_logger()

    logger.warning(
        "Scheduler gateway call failed; persisted state kept",
        operation=operation,
        error_type=type(error).__name__,
        error_message=str(error),
        timestamp=datetime.now().isoformat(),
        **context,
    )
