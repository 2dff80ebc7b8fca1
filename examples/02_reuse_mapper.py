#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Example 2: Reuse a configured mapper

Run several maps with the same pool settings, report progress through a
callback and inspect the run statistics.
"""

import math

from pmapper import ParallelMapper
from pmapper.core import get_logger, setup_logging

setup_logging()
logger = get_logger("pmapper.examples")


def hypotenuse(a, b):
    return math.hypot(a, b)


def report(completed, total):
    logger.debug(f"{completed}/{total} done")


if __name__ == "__main__":
    mapper = ParallelMapper(max_workers=4, backend="process")

    sides = list(range(10_000))
    lengths = mapper.map(hypotenuse, sides, "a", b=3.0,
                         description="Hypotenuse", progress_callback=report)

    stats = mapper.get_stats()
    logger.info(
        f"Mapped {stats['items']} items in {stats['chunks']} chunks "
        f"of {stats['chunksize']} ({stats['items_per_second']:.0f} items/s)"
    )
    logger.info(f"First results: {lengths[:5]}")
