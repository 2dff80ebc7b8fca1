#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
pmapper - parallel map with a progress bar.
"""

from pmapper.core import (
    PmapperException,
    ValidationError,
    InsufficientItemsError,
    UnknownDataArgumentError,
    ArgumentCountError,
    MapExecutionError,
    ArgumentMismatchError,
    WorkerFailedError,
    get_config,
)
from pmapper.processing import ParallelMapper, parallel_map

__version__ = "0.1.0"

__all__ = [
    "parallel_map",
    "ParallelMapper",
    "get_config",
    "PmapperException",
    "ValidationError",
    "InsufficientItemsError",
    "UnknownDataArgumentError",
    "ArgumentCountError",
    "MapExecutionError",
    "ArgumentMismatchError",
    "WorkerFailedError",
    "__version__",
]
