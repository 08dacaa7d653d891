"""
Logger configuration utility
"""
import sys
from pathlib import Path
from typing import Optional, Union
from loguru import logger


LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | <level>{message}</level>"
)


def setup_logger(level: str = "INFO", log_file: Optional[Union[str, Path]] = None):
    """
    Setup loguru logger for the note generator
    
    Logs go to stderr so that Markdown written to stdout stays clean.
    
    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional path of an additional plain-text log file
    """
    logger.remove()
    logger.add(
        sys.stderr,
        format=LOG_FORMAT,
        level=level,
        colorize=True,
        backtrace=True,
        diagnose=False,
    )
    if log_file:
        logger.add(
            str(log_file),
            format=LOG_FORMAT,
            level=level,
            colorize=False,
            rotation="1 MB",
            retention=3,
            encoding="utf-8",
        )
    return logger
