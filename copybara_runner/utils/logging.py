"""
Logging module for the Copybara runner
"""

import logging
import os
from typing import Any, Optional

from copybara_runner.constants import LOGGER_NAME

LOG_FILE_NAME = "copybara.log"


# Formatter that adds source location in verbose mode and the workflow name
# when a record carries one
class EnhancedFormatter(logging.Formatter):
    """
    Custom formatter that supports verbose mode (with module and line number)
    and appends the Copybara workflow a record was logged for
    """

    def __init__(self, fmt=None, datefmt=None, style="%", verbose=False):
        if verbose:
            fmt = "%(asctime)s - %(name)s - %(levelname)s - [%(module)s:%(lineno)d] - %(message)s"
        elif not fmt:
            fmt = "%(asctime)s - %(levelname)s - %(message)s"

        super().__init__(fmt, datefmt, style)

    def format(self, record):
        result = super().format(record)

        workflow = getattr(record, "workflow", None)
        if workflow:
            result += f" [workflow={workflow}]"

        return result


def setup_main_log_file(output_dir: str, verbose: bool = False) -> logging.FileHandler:
    """
    Set up a file handler that receives every record at DEBUG level.

    Args:
        output_dir: Directory where the log file is created
        verbose: If True, include module and line number in each line

    Returns:
        The file handler for the log file
    """
    os.makedirs(output_dir, exist_ok=True)

    log_file = os.path.join(output_dir, LOG_FILE_NAME)

    file_handler = logging.FileHandler(log_file, mode="w")
    file_handler.setLevel(logging.DEBUG)  # Always use DEBUG level for file handlers
    file_handler.setFormatter(EnhancedFormatter(verbose=verbose))

    logger = logging.getLogger(LOGGER_NAME)
    logger.addHandler(file_handler)

    logger.info(f"Log file created at: {log_file}")
    return file_handler


def setup_logger(
    verbose: bool = False, output_dir: Optional[str] = None
) -> logging.Logger:
    """
    Set up and return the logger with appropriate formatting.

    Args:
        verbose: If True, set console handler to DEBUG level; otherwise INFO level
        output_dir: Optional directory for the log file

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)

    # Clear any existing handlers to prevent duplicate messages
    if logger.handlers:
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)

    logger.setLevel(logging.DEBUG)  # Always set logger to DEBUG to capture all logs

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(EnhancedFormatter(verbose=verbose))
    logger.addHandler(console_handler)

    if output_dir:
        setup_main_log_file(output_dir, verbose)

    return logger


def log_with_context(level: int, message: str, **kwargs: Any) -> None:
    """
    Log a message with additional context information.

    Args:
        level: The logging level (e.g., logging.INFO)
        message: The log message
        **kwargs: Additional context to include in the log record
    """
    # Filter out None values from kwargs
    extras = {k: v for k, v in kwargs.items() if v is not None}

    logger = logging.getLogger(LOGGER_NAME)
    logger.log(level, message, extra=extras)


def get_logger():
    """Get the copybara_runner logger, creating it with defaults if needed."""
    runner_logger = logging.getLogger(LOGGER_NAME)
    if not runner_logger.handlers:
        # If no handlers, set up a basic logger
        runner_logger.setLevel(logging.INFO)
        handler = logging.StreamHandler()
        handler.setLevel(logging.INFO)
        handler.setFormatter(EnhancedFormatter())
        runner_logger.addHandler(handler)
    return runner_logger


# Module logger - will be properly initialized when setup_logger is called
logger = get_logger()
