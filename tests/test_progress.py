#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Tests for ProgressTracker.
"""

import io

import pytest
from rich.console import Console

from pmapper.processing.progress import ProgressTracker


@pytest.fixture
def quiet_console():
    """Console that renders into a buffer instead of the terminal."""
    return Console(file=io.StringIO(), width=100)


class TestProgressTracker:
    """Tests for counting, callbacks and summaries."""

    @pytest.mark.unit
    def test_advance_counts_items(self):
        tracker = ProgressTracker(total=10, show_progress=False)
        tracker.start()
        tracker.advance(3)
        tracker.advance(4)

        assert tracker.completed == 7
        tracker.stop()

    @pytest.mark.unit
    def test_callback_receives_running_total(self, progress_log):
        with ProgressTracker(total=6, show_progress=False, callback=progress_log) as tracker:
            tracker.advance(2)
            tracker.advance(2)
            tracker.advance(2)

        assert progress_log.calls == [(2, 6), (4, 6), (6, 6)]

    @pytest.mark.unit
    def test_renders_progress_bar(self, quiet_console):
        with ProgressTracker(total=4, description="Crunching", console=quiet_console) as tracker:
            tracker.advance(4)

        rendered = quiet_console.file.getvalue()
        assert "Crunching" in rendered
        assert "4/4" in rendered

    @pytest.mark.unit
    def test_no_output_when_disabled(self, quiet_console):
        with ProgressTracker(total=4, show_progress=False, console=quiet_console) as tracker:
            tracker.advance(4)

        assert quiet_console.file.getvalue() == ""

    @pytest.mark.unit
    def test_stats(self):
        with ProgressTracker(total=8, description="Stats", show_progress=False) as tracker:
            tracker.advance(2)

        stats = tracker.get_stats()
        assert stats["description"] == "Stats"
        assert stats["completed"] == 2
        assert stats["total"] == 8
        assert stats["progress_percent"] == 25.0
        assert stats["elapsed_seconds"] >= 0

    @pytest.mark.unit
    def test_elapsed_frozen_after_stop(self):
        tracker = ProgressTracker(total=2, show_progress=False)
        assert tracker.elapsed == 0.0

        tracker.start()
        tracker.stop()
        first = tracker.elapsed

        assert tracker.elapsed == first

    @pytest.mark.unit
    def test_summary_on_success(self, caplog):
        with caplog.at_level("INFO", logger="pmapper"):
            with ProgressTracker(total=3, description="Job", show_progress=False) as tracker:
                tracker.advance(3)

        assert any(r.message.startswith("Job: 3/3 items in") for r in caplog.records)

    @pytest.mark.unit
    def test_warning_when_aborted(self, caplog):
        with caplog.at_level("WARNING", logger="pmapper"):
            with pytest.raises(RuntimeError):
                with ProgressTracker(total=3, description="Job", show_progress=False) as tracker:
                    tracker.advance(1)
                    raise RuntimeError("stop")

        warnings = [r for r in caplog.records if r.levelname == "WARNING"]
        assert any("aborted after 1/3 items" in r.message for r in warnings)

    @pytest.mark.unit
    def test_repr(self):
        tracker = ProgressTracker(total=5, description="Job", show_progress=False)

        assert repr(tracker) == "ProgressTracker(description='Job', completed=0/5)"
