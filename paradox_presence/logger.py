"""Loguru logger configuration for the application."""

import sys
from pathlib import Path

from loguru import logger


def setup_logger(log_dir: Path, debug: bool = False) -> None:
    """Configure loguru with console and file sinks.

    Parameters
    ----------
    log_dir : Path
        Directory for log files, created if missing.
    debug : bool
        Lower the console level from INFO to DEBUG.
    """
    # Remove default handler
    logger.remove()

    # Console handler, coloured
    logger.add(
        sys.stderr,
        level="DEBUG" if debug else "INFO",
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{module}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        ),
        colorize=True,
    )

    # File handler, rotating, DEBUG level
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "app.log"

    logger.add(
        str(log_file),
        level="DEBUG",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {module}:{function}:{line} | {message}",
        rotation="10 MB",
        retention="7 days",
        encoding="utf-8",
        enqueue=True,  # thread-safe
    )

    logger.info("Logger initialized, file output: {}", log_file)
