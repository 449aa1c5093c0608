"""
Logging utility for Wayleadr Parking Bot

Provides consistent logging format across the application with:
- A shared "parking_bot" logger hierarchy
- Console output in a fixed format
- Error context capture for debugging (JSON Lines error log)
"""

import json
import logging
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

LOGGER_NAME = "parking_bot"


def setup_logger(name: str = LOGGER_NAME, level: int = logging.INFO) -> logging.Logger:
    """
    Set up a logger with consistent formatting.

    Args:
        name: Logger name
        level: Logging level (default: INFO)

    Returns:
        Configured logger instance
    """

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid duplicate handlers
    if any(type(handler) is logging.StreamHandler for handler in logger.handlers):
        return logger

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)

    # Formatter
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_handler.setFormatter(formatter)

    logger.addHandler(console_handler)

    return logger


def get_logger(component: str) -> logging.Logger:
    """Child logger of the application logger, e.g. parking_bot.ledger"""
    return logging.getLogger(f"{LOGGER_NAME}.{component}")


# ========== Error Logging ==========

class ErrorTracker:
    """
    Track and log errors with debugging information
    """

    def __init__(self, log_dir: Path = None):
        if log_dir is None:
            log_dir = Path("logs") / "errors"

        self.log_dir = Path(log_dir)
        self.error_log_file = self.log_dir / "error_log.jsonl"  # JSON Lines format

    def log_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        level: str = "error",
    ):
        """
        Log an error with full context and stack trace

        Args:
            error: The exception that occurred
            context: Additional context information
            level: Error level (error, warning, critical)
        """
        error_data = {
            "timestamp": datetime.now().isoformat(),
            "level": level,
            "error_type": type(error).__name__,
            "error_message": str(error),
            "stack_trace": "".join(
                traceback.format_exception(type(error), error, error.__traceback__)
            ),
            "context": context or {},
        }

        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            with open(self.error_log_file, 'a', encoding='utf-8') as f:
                f.write(json.dumps(error_data) + '\n')
        except OSError as e:
            get_logger("errors").warning(f"Failed to write error log: {e}")

    def log_booking_error(
        self,
        date: str,
        error: Exception,
        step: Optional[str] = None,
        additional_context: Optional[Dict[str, Any]] = None
    ):
        """
        Log booking-specific errors with structured context

        Args:
            date: The parking date being booked
            error: The exception that occurred
            step: Booking step that failed (login, date selection, ...)
            additional_context: Additional context information
        """
        context = {
            "parking_date": date,
            "step": step,
            "workflow": "parking_booking",
            **(additional_context or {})
        }

        self.log_error(error, context=context, level="error")


# Global error tracker instance
_error_tracker = None

def get_error_tracker() -> ErrorTracker:
    """Get or create the global error tracker"""
    global _error_tracker
    if _error_tracker is None:
        _error_tracker = ErrorTracker()
    return _error_tracker


def set_error_tracker(tracker: ErrorTracker):
    """Replace the global error tracker (entry scripts point it at Config.LOGS_DIR)"""
    global _error_tracker
    _error_tracker = tracker


def log_booking_failure(
    date: str,
    error: Exception,
    step: Optional[str] = None,
    **kwargs
):
    """
    Convenience function to log booking failures

    Args:
        date: Parking date
        error: The exception that occurred
        step: Booking step that failed
        **kwargs: Additional context
    """
    tracker = get_error_tracker()
    tracker.log_booking_error(date, error, step=step, additional_context=kwargs)
