"""
logging.py - Logging utilities for the hold 'em project

This module provides functions to set up and configure logging for the
engine, the console front-end and the self-play simulation.
"""

import logging
import sys
import os
from pathlib import Path
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _file_handler(log_file: str, level: int, formatter: logging.Formatter) -> logging.FileHandler:
    # Create directory if it doesn't exist
    log_dir = os.path.dirname(log_file)
    if log_dir:
        Path(log_dir).mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(log_file)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logger(name: str, level: int = logging.INFO,
                 log_file: Optional[str] = None) -> logging.Logger:
    """
    Set up a logger with the specified name and configuration.

    Args:
        name: Name of the logger
        level: Logging level (default: INFO)
        log_file: Optional path to a log file

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        logger.addHandler(_file_handler(log_file, level, formatter))

    return logger


def get_log_path(module_name: str, base_dir: Optional[Path] = None) -> Path:
    """
    Get the appropriate log file path for a module.

    Args:
        module_name: Name of the module
        base_dir: Base directory for log files (default: ./data/game_logs)

    Returns:
        Path object pointing to the log file
    """
    if base_dir is None:
        # src/holdem/utils -> project root
        project_root = Path(__file__).parent.parent.parent.parent
        base_dir = project_root / "data" / "game_logs"

    base_dir.mkdir(parents=True, exist_ok=True)

    return base_dir / f"{module_name}.log"


def configure_global_logging(level: int = logging.INFO,
                             log_file: Optional[str] = None,
                             console: bool = True) -> None:
    """
    Configure global logging settings.

    Args:
        level: Logging level (default: INFO)
        log_file: Optional path to a log file
        console: Whether to log to the console (default: True)
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT)

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    if log_file:
        root_logger.addHandler(_file_handler(log_file, level, formatter))


def log_system_info(logger: logging.Logger) -> None:
    """
    Log system information including Python version and library versions.

    Args:
        logger: Logger to use for logging
    """
    import platform
    import matplotlib
    import numpy as np

    from holdem.utils.parallel import get_parallel_info

    logger.info("System Information:")
    logger.info(f"Platform: {platform.platform()}")
    logger.info(f"Python version: {platform.python_version()}")
    logger.info(f"NumPy version: {np.__version__}")
    logger.info(f"Matplotlib version: {matplotlib.__version__}")

    info = get_parallel_info()
    logger.info(f"Number of CPUs: {info['cpu_count']} ({info['usable_cpus']} usable)")
