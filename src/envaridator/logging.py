"""
Centralized logging configuration.

bootstrap_logging() configures logging consistently from any entry point
using Python's native INI format.
"""

import logging
import logging.config
import os
import sys
from pathlib import Path
from typing import Optional

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

DEFAULT_CONFIG = Path(__file__).parent / 'logging.ini'


def _find_logging_config() -> Optional[Path]:
    """
    Find the logging configuration file.

    Looks for logging.ini in the current working directory, then falls back
    to the configuration bundled with the package.

    Returns:
        Path to logging configuration file, or None if not found.
    """
    current_dir_config = Path('logging.ini')
    if current_dir_config.exists():
        return current_dir_config

    if DEFAULT_CONFIG.exists():
        return DEFAULT_CONFIG

    return None


def _resolve_log_level() -> str:
    """
    Read LOG_LEVEL from the environment, defaulting to INFO.

    Sets LOG_LEVEL so the INI file can substitute it.
    """
    log_level = os.environ.get('LOG_LEVEL', 'INFO').strip().upper()
    if log_level not in LOG_LEVELS:
        print(f"Warning: Invalid LOG_LEVEL '{log_level}', using INFO", file=sys.stderr)
        log_level = 'INFO'
    os.environ['LOG_LEVEL'] = log_level
    return log_level


def bootstrap_logging(name: Optional[str] = None) -> None:
    """
    Bootstrap logging configuration using Python's native INI format.

    Loads logging.ini with logging.config.fileConfig() and applies the
    LOG_LEVEL environment variable to the root logger and its stream
    handlers. Falls back to basicConfig when no usable file is found.

    Args:
        name: Optional name for the logger (defaults to root logger)
    """
    log_level = _resolve_log_level()
    config_path = _find_logging_config()

    if config_path is None:
        print("Warning: No logging.ini file found, using basic logging configuration", file=sys.stderr)
        logging.basicConfig(
            level=getattr(logging, log_level),
            format='%(levelname)s: %(name)s: %(message)s',
            stream=sys.stderr
        )
        return

    try:
        logging.config.fileConfig(
            str(config_path),
            defaults={'LOG_LEVEL': log_level},
            disable_existing_loggers=False
        )
    except Exception as e:
        print(f"Warning: Failed to load logging config from {config_path}: {e}", file=sys.stderr)
        print("Using basic logging configuration", file=sys.stderr)
        logging.basicConfig(
            level=getattr(logging, log_level),
            format='%(levelname)s: %(name)s: %(message)s',
            stream=sys.stderr
        )
        return

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level))
    for handler in root_logger.handlers:
        if isinstance(handler, logging.StreamHandler):
            handler.setLevel(getattr(logging, log_level))
    logging.getLogger('envaridator').setLevel(getattr(logging, log_level))

    logger = logging.getLogger(name) if name else logging.getLogger()
    logger.debug(f"Logging configured from {config_path}")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the specified name, ensuring logging is bootstrapped.

    Args:
        name: Name for the logger

    Returns:
        Configured logger instance
    """
    bootstrap_logging()
    return logging.getLogger(name)
