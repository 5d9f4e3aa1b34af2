"""
Logging Configuration
Sets up the 'glyphfield' logger used by the renderer, clock and exporters.
"""
import logging
import sys
from typing import Optional

from .config import log_level_from_env


def setup_logging(level: Optional[int] = None, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the logger for the 'glyphfield' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG). When omitted it is read
            from GLYPHFIELD_LOG_LEVEL, falling back to INFO.
        log_file: Optional path to save logs to a file.
    """
    if level is None:
        level = log_level_from_env()

    logger = logging.getLogger("glyphfield")
    logger.setLevel(level)

    # Drop handlers from a previous call so records are not emitted twice
    if logger.hasHandlers():
        logger.handlers.clear()

    # 1. Console Handler (stdout)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    # Format: Time - Module - Level - Message
    # Per-frame render messages stay at DEBUG, clock start/stop and exports at INFO
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # 2. File Handler (Optional)
    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info("Logging initialized at %s.", logging.getLevelName(level))
    return logger
