#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Example 1: Square numbers in parallel

Map a function over a list of numbers on a process pool, passing a flag
alongside each item.
"""

from pmapper import parallel_map
from pmapper.core import get_logger, setup_logging

setup_logging()
logger = get_logger("pmapper.examples")


def maybe_square(x, square):
    """Square x when the flag is set, otherwise return it unchanged."""
    return x * x if square else x


if __name__ == "__main__":
    items = [0, 1, 2, 3, 4]

    squared = parallel_map(maybe_square, items, "x", True)
    logger.info(f"square=True  -> {squared}")  # [0, 1, 4, 9, 16]

    unchanged = parallel_map(maybe_square, items, "x", square=False)
    logger.info(f"square=False -> {unchanged}")  # [0, 1, 2, 3, 4]
