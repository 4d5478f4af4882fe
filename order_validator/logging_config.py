"""
logging_config.py — Centralized Logging Configuration for the Order Validator

Configures one logging setup shared by every module of the webhook service,
so that validation, cancellation and notification lines end up in the same
stream with the same format.

Features:
    • Console logging (stdout, container friendly) with an optional log file
    • Process ID tagging for multi-worker uvicorn deployments
    • Reduced verbosity for the HTTP client libraries (httpx, httpcore)
"""

import logging
import sys
from typing import Optional


LOG_FORMAT = '%(asctime)s - %(levelname)s - [PID:%(process)d] - %(message)s'


def setup_logging(level: str = "INFO", log_file: Optional[str] = None):
    """
    Configures the global logging system for the application.

    Args:
        level (str): Root log level name, e.g. "INFO" or "DEBUG".
        log_file (str, optional): Path of an additional log file. When omitted,
            logs only go to stdout.
    """
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )

    # Every outbound request would otherwise be logged at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name):
    """
    Returns a logger for the given module name.

    Args:
        name (str): The logger name, typically the module's __name__.

    Returns:
        logging.Logger: A logger that follows the global format and handlers.
    """
    return logging.getLogger(name)
