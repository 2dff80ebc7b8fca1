#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Progress reporting for parallel map runs.

Renders a rich progress bar on stderr as chunks complete and logs a
one-line summary when the run finishes.
"""

import time
from typing import Callable, Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)

from pmapper.core import get_logger
from pmapper.core.formatting import format_duration, format_rate

ProgressCallback = Callable[[int, int], None]


class ProgressTracker:
    """
    Tracks completed items for a single map run.

    Example:
        with ProgressTracker(total=1000, description="Squaring") as tracker:
            for chunk in finished_chunks:
                tracker.advance(len(chunk))

        print(tracker.get_stats())
    """

    def __init__(
        self,
        total: int,
        description: str = "Mapping",
        show_progress: bool = True,
        callback: Optional[ProgressCallback] = None,
        console: Optional[Console] = None
    ):
        """
        Initialize progress tracker.

        Args:
            total: Number of items in the run
            description: Label shown next to the progress bar
            show_progress: Whether to render the progress bar
            callback: Optional callback(completed, total) after each update
            console: Console to render on (default: a stderr console)
        """
        self.total = total
        self.description = description
        self.show_progress = show_progress
        self.callback = callback
        self.console = console or Console(stderr=True)

        self.completed = 0
        self._start_time: Optional[float] = None
        self._end_time: Optional[float] = None
        self._progress: Optional[Progress] = None
        self._task_id = None

        self.logger = get_logger(f"{__name__}.ProgressTracker")

    def __enter__(self) -> "ProgressTracker":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop(success=exc_type is None)
        return False

    def start(self):
        """Start the clock and, if enabled, the progress bar."""
        self._start_time = time.monotonic()
        self._end_time = None

        if self.show_progress:
            self._progress = Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                MofNCompleteColumn(),
                TimeElapsedColumn(),
                TimeRemainingColumn(),
                console=self.console,
                transient=False
            )
            self._progress.start()
            self._task_id = self._progress.add_task(self.description, total=self.total)

    def advance(self, n_items: int):
        """
        Record that n_items more items have completed.

        Args:
            n_items: Number of items just finished
        """
        self.completed += n_items

        if self._progress is not None:
            self._progress.update(self._task_id, advance=n_items)

        if self.callback:
            self.callback(self.completed, self.total)

    def stop(self, success: bool = True):
        """Stop the progress bar and log a summary."""
        self._end_time = time.monotonic()

        if self._progress is not None:
            self._progress.stop()
            self._progress = None

        elapsed = self.elapsed
        if success:
            self.logger.info(
                f"{self.description}: {self.completed}/{self.total} items "
                f"in {format_duration(elapsed)} ({format_rate(self.completed, elapsed)})"
            )
        else:
            self.logger.warning(
                f"{self.description}: aborted after {self.completed}/{self.total} items "
                f"({format_duration(elapsed)})"
            )

    @property
    def elapsed(self) -> float:
        """Seconds since start (frozen once stopped)."""
        if self._start_time is None:
            return 0.0
        end = self._end_time if self._end_time is not None else time.monotonic()
        return end - self._start_time

    def get_stats(self) -> dict:
        """
        Get progress statistics.

        Returns:
            Dictionary with progress stats
        """
        elapsed = self.elapsed
        return {
            'description': self.description,
            'completed': self.completed,
            'total': self.total,
            'progress_percent': (self.completed / self.total * 100) if self.total else 0.0,
            'elapsed_seconds': elapsed,
            'items_per_second': (self.completed / elapsed) if elapsed > 0 else 0.0,
        }

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"ProgressTracker(description={self.description!r}, "
            f"completed={self.completed}/{self.total})"
        )
