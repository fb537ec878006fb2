"""Logging configuration using loguru."""

import sys
import uuid
from pathlib import Path
from typing import Optional

from loguru import logger

LOG_FORMATS = ("text", "json")


def setup_logger(
    verbose: bool = False,
    log_format: str = "json",
    log_file_path: Optional[str] = None,
    log_max_size_mb: int = 100,
    log_backup_count: int = 5,
):
    """Configure application logging using loguru.

    Text output goes to stderr in a colorized human format, JSON output is
    serialized to stdout. An optional rotating file sink follows the same
    format choice.

    Args:
        verbose: Log at DEBUG instead of INFO
        log_format: "text" or "json"
        log_file_path: Optional path of an additional log file

    Returns:
        Logger bound with a ``run_id`` unique to this run
    """
    if log_format not in LOG_FORMATS:
        raise ValueError(f"Invalid log format: {log_format}")

    level = "DEBUG" if verbose else "INFO"

    # Remove default handler
    logger.remove()

    if log_format == "json":
        logger.add(sys.stdout, format="{message}", level=level, serialize=True)
    else:
        console_format = (
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        )
        logger.add(sys.stderr, format=console_format, level=level, colorize=True)

    if log_file_path:
        log_path = Path(log_file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_format = (
            "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | "
            "{name}:{function}:{line} - {message}"
        )
        logger.add(
            log_path,
            format="{message}" if log_format == "json" else file_format,
            level=level,
            rotation=f"{log_max_size_mb} MB",
            retention=log_backup_count,
            serialize=log_format == "json",
        )

    run_logger = logger.bind(run_id=str(uuid.uuid4()))
    run_logger.debug(f"Logger initialized with level: {level}, format: {log_format}")

    return run_logger


def get_logger():
    """Get the shared logger instance."""
    return logger
