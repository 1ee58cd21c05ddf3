"""
Colored loguru configuration for hexlayout tools.

Console output plus an optional rotating log file.
"""

from datetime import datetime, timezone
import os
import sys

from loguru import logger


def setup_logger(
    log_dir: str | None = None,
    level: str = "INFO",
    rotation: str = "10 MB",
    retention: str = "7 days",
    enable_colors: bool = True,
) -> str | None:
    """
    Set up colored console logging and, when ``log_dir`` is given, file logging.

    Args:
        log_dir: Directory for log files (None = console only)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        rotation: Log rotation policy (e.g., "10 MB", "1 day")
        retention: Log retention policy (e.g., "7 days", "1 month")
        enable_colors: Whether to enable colored console output

    Returns:
        Path to the log file, or None when logging to the console only
    """
    logger.remove()

    colorize = enable_colors and sys.stderr.isatty()
    if colorize:
        console_format = (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<blue>{function}</blue>:<yellow>{line}</yellow> | "
            "<level>{message}</level>"
        )
    else:
        console_format = (
            "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
            "{level: <8} | "
            "{name}:{function}:{line} | "
            "{message}"
        )

    logger.add(sys.stderr, level=level, format=console_format, colorize=colorize)

    if log_dir is None:
        logger.debug("Console logger initialized at level {}", level)
        return None

    os.makedirs(log_dir, exist_ok=True)
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    log_file = os.path.join(log_dir, f"hexlayout_{timestamp}.log")

    logger.add(
        log_file,
        level=level,
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | {message}",
        rotation=rotation,
        retention=retention,
        encoding="utf-8",
        backtrace=True,
        diagnose=False,
    )
    logger.info("Logger initialized. Logging to console and {}", log_file)
    return log_file
