"""Logging configuration for pokerledger."""

from pathlib import Path
import sys

from loguru import logger

from pokerledger.core.config import get_log_dir, get_log_level


def configure_logging(log_dir: str | None = None) -> None:
    """Configure loguru logger with console output and rotated log files."""
    logs_dir = Path(log_dir or get_log_dir())
    logs_dir.mkdir(parents=True, exist_ok=True)
    level = get_log_level()

    # Remove default handler (console only)
    logger.remove()

    logger.add(
        sink=sys.stdout,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=level,
        colorize=True,
    )

    logger.add(
        sink=logs_dir / "pokerledger_{time:YYYY-MM-DD}.log",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        level=level,
        rotation="00:00",  # Rotate at midnight
        retention="30 days",
        compression="zip",
        enqueue=True,  # Thread-safe logging
    )

    # Errors are kept longer than the regular log
    logger.add(
        sink=logs_dir / "pokerledger_errors_{time:YYYY-MM-DD}.log",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        level="ERROR",
        rotation="00:00",
        retention="90 days",
        compression="zip",
        enqueue=True,
    )

    logger.info(f"Logging configured: console + file output enabled ({level})")
