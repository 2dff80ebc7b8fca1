#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Parallel map with progress reporting.

Applies a function to every item of a sequence on a fixed-size pool of
worker processes (or threads), reports progress as chunks complete, and
returns results in input order.

Usage:
    from pmapper import parallel_map

    def scale(x, factor, offset=0):
        return x * factor + offset

    results = parallel_map(scale, range(1000), "x", 3, offset=1)
"""

from collections.abc import Sequence
from concurrent.futures import (
    Future,
    ProcessPoolExecutor,
    ThreadPoolExecutor,
    as_completed,
)
from typing import Any, Callable, Dict, List, Optional, Tuple

from pmapper.core import get_config, get_logger
from pmapper.core.config import PmapperConfig
from pmapper.core.exceptions import (
    ArgumentMismatchError,
    ConfigurationError,
    InsufficientItemsError,
    WorkerFailedError,
)
from pmapper.processing.chunking import compute_chunksize, partition
from pmapper.processing.progress import ProgressCallback, ProgressTracker
from pmapper.processing.signature import CallSpec, validate_call

BACKENDS = ("process", "thread")

# Keyword options consumed by ParallelMapper.map and parallel_map; never
# forwarded to the mapped function
MAP_OPTIONS = ("description", "progress_callback")
PARALLEL_MAP_OPTIONS = ("max_workers", "chunksize", "backend", "show_progress") + MAP_OPTIONS


# Module-level worker function for ProcessPoolExecutor
# (must be at module level to be picklable)
def _process_chunk(call: CallSpec, start_index: int, chunk: List[Any]) -> Tuple[int, List[Any]]:
    """
    Worker function to apply the mapped function to one chunk.

    Args:
        call: Validated call recipe
        start_index: Position of the chunk's first item in the input
        chunk: Items to process

    Returns:
        Tuple of (start_index, results for the chunk in order)
    """
    return start_index, [call.invoke(item) for item in chunk]


class ParallelMapper:
    """
    Maps a function over a sequence using a fixed-size worker pool.

    Work is split into chunks of roughly ``sqrt(N) * workers / 2`` items.
    Each chunk is submitted to the pool, results are collected as chunks
    complete and reassembled in input order.

    Example:
        mapper = ParallelMapper(max_workers=4, backend="thread")
        squares = mapper.map(operator.pow, [1, 2, 3, 4], "a", 2)
        print(mapper.get_stats())
    """

    def __init__(
        self,
        max_workers: int = None,
        backend: str = None,
        chunksize: int = None,
        show_progress: bool = None,
        config: PmapperConfig = None
    ):
        """
        Initialize parallel mapper.

        Args:
            max_workers: Worker pool size (default: config.num_workers)
            backend: "process" or "thread" (default: config.backend)
            chunksize: Items per dispatch (default: config.chunksize, else heuristic)
            show_progress: Render a progress bar (default: config.show_progress)
            config: Configuration to read defaults from (default: get_config())
        """
        config = config or get_config()

        self.max_workers = max_workers if max_workers is not None else config.num_workers
        self.backend = backend or config.backend
        self.chunksize = chunksize if chunksize is not None else config.chunksize
        self.show_progress = show_progress if show_progress is not None else config.show_progress

        if self.backend not in BACKENDS:
            raise ConfigurationError(
                f"Unknown backend '{self.backend}'. Choose one of: {', '.join(BACKENDS)}"
            )
        if self.max_workers < 1:
            raise ConfigurationError(f"max_workers must be >= 1, got {self.max_workers}")
        if self.chunksize is not None and self.chunksize < 1:
            raise ConfigurationError(f"chunksize must be >= 1, got {self.chunksize}")

        self._stats: Dict[str, Any] = {}

        self.logger = get_logger(f"{__name__}.ParallelMapper")
        self.logger.debug(
            f"Initialized parallel mapper: {self.max_workers} {self.backend} workers"
        )

    def map(
        self,
        func: Callable,
        data,
        data_arg: str,
        /,
        *args,
        description: Optional[str] = None,
        progress_callback: Optional[ProgressCallback] = None,
        **kwargs
    ) -> List[Any]:
        """
        Apply func to every item of data in parallel.

        ``func``, ``data`` and ``data_arg`` are positional-only, so the
        mapped function may have parameters with those names and receive
        them through ``kwargs``.

        Args:
            func: Function to apply; must be picklable for the process backend
            data: Sequence of more than one item
            data_arg: Name of the func parameter that receives each item
            *args: Extra positional arguments for func
            description: Progress bar label (default: the function name)
            progress_callback: Optional callback(completed, total)
            **kwargs: Extra keyword arguments for func

        Returns:
            List of results in the same order as data

        Raises:
            InsufficientItemsError: data has fewer than two items
            UnknownDataArgumentError: data_arg is not a parameter of func
            ArgumentCountError: extras don't match func's parameters
            ArgumentMismatchError: func raised a TypeError
            WorkerFailedError: func raised any other exception
        """
        return self._run(
            func, data, data_arg, args, kwargs,
            description=description,
            progress_callback=progress_callback,
            reserved=MAP_OPTIONS
        )

    def _run(
        self,
        func: Callable,
        data,
        data_arg: str,
        args: tuple,
        kwargs: Dict[str, Any],
        description: Optional[str],
        progress_callback: Optional[ProgressCallback],
        reserved: Tuple[str, ...]
    ) -> List[Any]:
        if not isinstance(data, Sequence):
            data = list(data)

        n_items = len(data)
        if n_items <= 1:
            raise InsufficientItemsError(n_items)

        call = validate_call(func, data_arg, args, kwargs, reserved=reserved)

        chunksize = compute_chunksize(n_items, self.max_workers, self.chunksize)
        chunks = partition(data, chunksize)
        n_workers = min(self.max_workers, len(chunks))

        self.logger.info(
            f"Mapping {call.name} over {n_items} items: {n_workers} {self.backend} workers, "
            f"chunksize {chunksize} ({len(chunks)} chunks)"
        )

        tracker = ProgressTracker(
            total=n_items,
            description=description or call.name,
            show_progress=self.show_progress,
            callback=progress_callback
        )

        results: Dict[int, List[Any]] = {}

        with self._create_executor(n_workers) as executor:
            futures: Dict[Future, int] = {}
            start_index = 0
            for chunk in chunks:
                future = executor.submit(_process_chunk, call, start_index, chunk)
                futures[future] = start_index
                start_index += len(chunk)

            # Workers are forked on first submit; the progress bar's
            # refresh thread must not exist yet at that point.
            with tracker:
                for future in as_completed(futures):
                    try:
                        chunk_start, chunk_results = future.result()
                    except TypeError as e:
                        self._abort(futures)
                        self.logger.error(
                            f"Argument mismatch calling {call.name} "
                            f"(chunk starting at item {futures[future]}): {e}"
                        )
                        raise ArgumentMismatchError(
                            f"{call.name} raised TypeError: {e}",
                            start_index=futures[future]
                        ) from e
                    except Exception as e:
                        self._abort(futures)
                        self.logger.error(
                            f"Error calling {call.name} "
                            f"(chunk starting at item {futures[future]}): "
                            f"{type(e).__name__}: {e}"
                        )
                        raise WorkerFailedError(
                            f"{call.name} failed: {type(e).__name__}: {e}",
                            start_index=futures[future]
                        ) from e

                    results[chunk_start] = chunk_results
                    tracker.advance(len(chunk_results))

        ordered: List[Any] = []
        for chunk_start in sorted(results):
            ordered.extend(results[chunk_start])

        elapsed = tracker.elapsed
        self._stats = {
            'function': call.name,
            'items': n_items,
            'chunks': len(chunks),
            'chunksize': chunksize,
            'workers': n_workers,
            'backend': self.backend,
            'elapsed_seconds': elapsed,
            'items_per_second': (n_items / elapsed) if elapsed > 0 else 0.0,
        }

        return ordered

    def _create_executor(self, n_workers: int):
        """Create the worker pool for the configured backend."""
        if self.backend == "thread":
            return ThreadPoolExecutor(max_workers=n_workers, thread_name_prefix="pmapper")
        return ProcessPoolExecutor(max_workers=n_workers)

    def _abort(self, futures: Dict[Future, int]):
        """Cancel every chunk that hasn't started yet."""
        cancelled = sum(1 for future in futures if future.cancel())
        if cancelled:
            self.logger.debug(f"Cancelled {cancelled} pending chunks")

    def get_stats(self) -> Dict[str, Any]:
        """
        Get statistics for the most recent successful run.

        Returns:
            Dictionary with run stats (empty before the first run)
        """
        return dict(self._stats)


def parallel_map(
    func: Callable,
    data,
    data_arg: str,
    /,
    *args,
    max_workers: Optional[int] = None,
    chunksize: Optional[int] = None,
    backend: Optional[str] = None,
    show_progress: Optional[bool] = None,
    description: Optional[str] = None,
    progress_callback: Optional[ProgressCallback] = None,
    **kwargs
) -> List[Any]:
    """
    Apply func to every item of data on a worker pool and return results in order.

    The item is passed as the ``data_arg`` parameter; ``args`` fill the
    remaining parameters in declaration order and ``kwargs`` bind by name.
    Together with the data argument they must cover every parameter of func.
    The options below are consumed here, so a parameter of func that shares
    a name with one of them has to be filled positionally.

    Args:
        func: Function to apply
        data: Sequence of more than one item
        data_arg: Name of the func parameter that receives each item
        *args: Extra positional arguments for func
        max_workers: Worker pool size (default: CPU count)
        chunksize: Items per dispatch (default: sqrt(N) * workers / 2)
        backend: "process" or "thread"
        show_progress: Render a progress bar on stderr
        description: Progress bar label
        progress_callback: Optional callback(completed, total)
        **kwargs: Extra keyword arguments for func

    Returns:
        List with one result per item, in input order

    Example:
        >>> def maybe_square(x, square):
        ...     return x * x if square else x
        >>> parallel_map(maybe_square, [0, 1, 2, 3, 4], "x", True)
        [0, 1, 4, 9, 16]
    """
    mapper = ParallelMapper(
        max_workers=max_workers,
        backend=backend,
        chunksize=chunksize,
        show_progress=show_progress
    )
    return mapper._run(
        func, data, data_arg, args, kwargs,
        description=description,
        progress_callback=progress_callback,
        reserved=PARALLEL_MAP_OPTIONS
    )
