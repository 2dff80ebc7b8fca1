#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Logging configuration for pmapper.

The library only ever asks for loggers. Handlers are attached by
``setup_logging``, which the CLI calls once at startup.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Union


def setup_logging(
    name: str = "pmapper",
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Path] = None,
    log_to_console: bool = True,
    log_to_file: bool = False,
    process_id: Optional[int] = None,
    log_dir: Path = Path("logs")
) -> logging.Logger:
    """
    Set up logging for the application.

    Args:
        name: Logger name
        level: Logging level (logging.DEBUG, "INFO", etc.)
        log_file: Path to log file (if None, a timestamped file in log_dir)
        log_to_console: Whether to log to the console (stderr)
        log_to_file: Whether to log to file
        process_id: Optional process ID to include in logs
        log_dir: Directory for the default log file

    Returns:
        Configured logger instance
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    logger.handlers = []

    if process_id is not None:
        fmt = f'%(asctime)s - [Process-{process_id}] - %(name)s - %(levelname)s - %(message)s'
    else:
        fmt = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    formatter = logging.Formatter(fmt)

    # stderr keeps stdout free for `pmapper run` output
    if log_to_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_to_file:
        if log_file is None:
            timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
            if process_id is not None:
                log_file = Path(log_dir) / f"pmapper_process_{process_id}_{timestamp}.log"
            else:
                log_file = Path(log_dir) / f"pmapper_{timestamp}.log"

        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = "pmapper") -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
