"""
File logging utility for debugging
Logs all actions to a timestamped file with size rotation
"""

import logging
from logging.handlers import RotatingFileHandler
from datetime import datetime
from pathlib import Path

from src.utils.logger import LOGGER_NAME


def setup_file_logger(
    name: str = LOGGER_NAME,
    logs_dir: Path = None,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 3,
):
    """
    Attach a size-rotated file handler to a logger.

    Args:
        name: Logger name
        logs_dir: Directory for log files (default: ./logs)
        max_bytes: Maximum log file size before rotation (default: 10MB)
        backup_count: Number of backup files to keep (default: 3)

    Returns:
        Tuple of (logger instance, log file path)
    """

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)

    # Avoid duplicate handlers
    for handler in logger.handlers:
        if isinstance(handler, RotatingFileHandler):
            return logger, Path(handler.baseFilename)

    if logs_dir is None:
        logs_dir = Path("logs")
    logs_dir.mkdir(parents=True, exist_ok=True)

    # Log file with timestamp
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = logs_dir / f"booking_{timestamp}.log"

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding='utf-8'
    )
    file_handler.setLevel(logging.DEBUG)
    file_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    file_handler.setFormatter(file_formatter)

    logger.addHandler(file_handler)

    logger.debug(f"Logging to: {log_file} (max size: {max_bytes // 1024 // 1024}MB, {backup_count} backups)")

    return logger, log_file
