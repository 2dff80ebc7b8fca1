#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Work partitioning for the worker pool.
"""

import math
from typing import Any, List, Optional, Sequence


def compute_chunksize(n_items: int, n_workers: int, requested: Optional[int] = None) -> int:
    """
    Pick how many items go into each dispatch.

    The heuristic is ``sqrt(n_items) * n_workers / 2``: larger chunks cut
    dispatch overhead, smaller ones keep workers evenly loaded. The result
    is clamped to ``[1, n_items]``.

    Args:
        n_items: Number of items to process
        n_workers: Size of the worker pool
        requested: Explicit chunk size that overrides the heuristic

    Returns:
        Chunk size (>= 1)
    """
    if requested is not None:
        size = int(requested)
    else:
        size = int(math.sqrt(n_items) * n_workers / 2)

    return max(1, min(size, max(n_items, 1)))


def partition(items: Sequence[Any], chunksize: int) -> List[List[Any]]:
    """
    Split items into consecutive chunks, preserving order.

    Args:
        items: Items to split
        chunksize: Maximum items per chunk

    Returns:
        List of chunks; only the last one may be shorter than chunksize
    """
    if chunksize < 1:
        raise ValueError(f"chunksize must be >= 1, got {chunksize}")

    return [list(items[i:i + chunksize]) for i in range(0, len(items), chunksize)]
