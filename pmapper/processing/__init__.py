#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Processing utilities for parallel map runs.

Includes call validation, work partitioning, progress tracking and the
parallel map itself.
"""

from .chunking import compute_chunksize, partition
from .parallel import ParallelMapper, parallel_map
from .progress import ProgressTracker
from .signature import CallSpec, validate_call

__all__ = [
    "CallSpec",
    "validate_call",
    "compute_chunksize",
    "partition",
    "ProgressTracker",
    "ParallelMapper",
    "parallel_map",
]
