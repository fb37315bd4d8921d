"""
Logging configuration for the stat engine.
"""

import os
import logging
import logging.handlers
import time
from typing import Dict, Optional

# Global configuration
DEFAULT_LEVEL = logging.INFO
LOGGERS: Dict[str, logging.Logger] = {}
LOGGER_FORMAT = '%(asctime)s [%(name)s] %(levelname)s: %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
LOG_DIRECTORY = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))), 'logs')

# Marker attribute so reconfiguring only replaces handlers installed here
_HANDLER_MARKER = "_stat_engine_handler"


def configure_logging(level: int = DEFAULT_LEVEL,
                      log_directory: Optional[str] = None,
                      log_to_file: bool = False) -> None:
    """
    Configure the logging system.

    Installs a console handler on the root logger and, when requested,
    rotating file handlers for all logs and for errors only.

    Args:
        level: The log level to use.
        log_directory: Directory for log files. Defaults to ``logs/`` in the project root.
        log_to_file: Whether to write log files at all.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove handlers from a previous configure_logging() call
    for handler in root_logger.handlers[:]:
        if getattr(handler, _HANDLER_MARKER, False):
            root_logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(LOGGER_FORMAT, DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    setattr(console_handler, _HANDLER_MARKER, True)
    root_logger.addHandler(console_handler)

    if log_to_file:
        directory = log_directory or LOG_DIRECTORY
        os.makedirs(directory, exist_ok=True)

        # All logs
        log_file = os.path.join(directory, f'stat_engine_{time.strftime("%Y%m%d_%H%M%S")}.log')
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10*1024*1024,  # 10 MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        setattr(file_handler, _HANDLER_MARKER, True)
        root_logger.addHandler(file_handler)

        # Errors only
        error_log_file = os.path.join(directory, f'error_{time.strftime("%Y%m%d_%H%M%S")}.log')
        error_file_handler = logging.handlers.RotatingFileHandler(
            error_log_file,
            maxBytes=5*1024*1024,  # 5 MB
            backupCount=5,
            encoding='utf-8'
        )
        error_file_handler.setLevel(logging.ERROR)
        error_file_handler.setFormatter(formatter)
        setattr(error_file_handler, _HANDLER_MARKER, True)
        root_logger.addHandler(error_file_handler)

    root_logger.debug("Logging configured")


def configure_logging_from_config() -> None:
    """Configure logging from the ``system`` domain of the engine configuration."""
    # Imported here, config itself logs through get_logger()
    from stat_engine.base.config import get_config

    config = get_config()
    level_name = str(config.get("system.log_level", "INFO")).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = DEFAULT_LEVEL

    log_dir = config.get("system.log_dir", "logs")
    if log_dir and not os.path.isabs(log_dir):
        log_dir = os.path.join(os.path.dirname(LOG_DIRECTORY), log_dir)

    configure_logging(
        level=level,
        log_directory=log_dir,
        log_to_file=bool(config.get("system.log_to_file", False)),
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the given name.

    Args:
        name: The name of the logger.

    Returns:
        The logger.
    """
    if name in LOGGERS:
        return LOGGERS[name]

    logger = logging.getLogger(name)
    LOGGERS[name] = logger
    return logger
