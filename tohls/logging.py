"""Centralized logging configuration for tohls"""

import logging
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler

from . import config
from .utils import get_timestamp

def configure_logging(log_level: Optional[str] = None, file_logging: bool = True) -> Optional[Path]:
    """
    Configure the tohls logger with rich console output.

    Args:
        log_level: Logging level name, defaults to config.LOG_LEVEL
        file_logging: Also write a timestamped log file to config.LOG_DIR

    Returns:
        Path of the log file, or None when file logging is disabled
    """
    level = (log_level or config.LOG_LEVEL).upper()
    logger = logging.getLogger("tohls")
    logger.setLevel(logging._nameToLevel.get(level, logging.INFO))

    # Remove existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(show_path=False, rich_tracebacks=True)
    console_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(console_handler)

    log_file = None
    if file_logging:
        config.LOG_DIR.mkdir(parents=True, exist_ok=True)
        log_file = config.LOG_DIR / f"tohls_{get_timestamp()}.log"
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        ))
        logger.addHandler(file_handler)

    logging.captureWarnings(True)
    return log_file
