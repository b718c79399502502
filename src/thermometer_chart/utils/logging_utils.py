# src/thermometer_chart/utils/logging_utils.py
"""
Logging utilities for the thermometer chart.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from rich.logging import RichHandler

LOGGER_NAME = "thermometer_chart"


def setup_logging(
        level: Union[int, str] = logging.INFO,
        log_dir: Optional[Path] = None,
        rich_console: bool = True,
        file_output: bool = False,
        name: str = LOGGER_NAME
) -> logging.Logger:
    """
    Set up the package logger with console and optional file handlers.

    Args:
        level: Logging level (number or name)
        log_dir: Directory for log files
        rich_console: Use a rich console handler instead of a plain stream
        file_output: Enable file output (requires log_dir)
        name: Logger name

    Returns:
        Configured logger instance
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove existing handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    if rich_console:
        console_handler = RichHandler(rich_tracebacks=True, show_path=False)
        console_handler.setFormatter(logging.Formatter('%(message)s'))
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    if file_output and log_dir:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        log_filename = f"thermometer_chart_{datetime.now().strftime('%Y%m%d')}.log"
        file_handler = logging.FileHandler(log_dir / log_filename, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def log_exception(logger: logging.Logger, exception: Exception, message: str = ""):
    """
    Log an exception with traceback.

    Args:
        logger: Logger instance
        exception: Exception to log
        message: Additional context message
    """
    if message:
        logger.error(f"{message}: {str(exception)}", exc_info=True)
    else:
        logger.error(f"Exception occurred: {str(exception)}", exc_info=True)
