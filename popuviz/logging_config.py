"""
Logging Configuration
Sets up the 'popuviz' logger for the app.
"""
import logging
import os
import sys
from typing import Optional


def level_from_env(default: int = logging.INFO) -> int:
    """Resolve POPUVIZ_LOG_LEVEL (e.g. "DEBUG") to a logging level."""
    name = os.getenv("POPUVIZ_LOG_LEVEL", "").strip().upper()
    level = logging.getLevelName(name) if name else default
    return level if isinstance(level, int) else default


def setup_logging(level: Optional[int] = None, log_file: Optional[str] = None) -> None:
    """
    Configures the logger for the 'popuviz' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG). Defaults to POPUVIZ_LOG_LEVEL or INFO.
        log_file: Optional path to save logs to a file.
    """
    if level is None:
        level = level_from_env()

    logger = logging.getLogger("popuviz")
    logger.setLevel(level)

    # Streamlit re-runs the script on every interaction
    if logger.hasHandlers():
        logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
