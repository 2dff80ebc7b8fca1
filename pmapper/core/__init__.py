#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Core infrastructure for pmapper.
"""

from .config import PmapperConfig, get_config, reset_config
from .exceptions import (
    PmapperException,
    ConfigurationError,
    ValidationError,
    InsufficientItemsError,
    UnknownDataArgumentError,
    ArgumentCountError,
    MapExecutionError,
    ArgumentMismatchError,
    WorkerFailedError,
    TargetImportError,
)
from .logging import setup_logging, get_logger

__all__ = [
    # Config
    "PmapperConfig",
    "get_config",
    "reset_config",
    # Exceptions
    "PmapperException",
    "ConfigurationError",
    "ValidationError",
    "InsufficientItemsError",
    "UnknownDataArgumentError",
    "ArgumentCountError",
    "MapExecutionError",
    "ArgumentMismatchError",
    "WorkerFailedError",
    "TargetImportError",
    # Logging
    "setup_logging",
    "get_logger",
]
