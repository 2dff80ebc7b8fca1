#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Shared formatting utilities used by the progress summary and the CLI.
"""

from typing import Optional


def format_duration(total_seconds: Optional[float]) -> str:
    """
    Format a duration in a human-readable way.

    Args:
        total_seconds: Duration in seconds.

    Returns:
        Formatted string like ``"0.42s"``, ``"42s"``, ``"3m 12s"``,
        ``"2h 15m"``, or ``"N/A"``.
    """
    if total_seconds is None or total_seconds < 0:
        return "N/A"

    if total_seconds < 10:
        return f"{total_seconds:.2f}s"

    total_seconds = int(total_seconds)
    if total_seconds < 60:
        return f"{total_seconds}s"
    elif total_seconds < 3600:
        minutes = total_seconds // 60
        seconds = total_seconds % 60
        return f"{minutes}m {seconds}s"
    else:
        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        return f"{hours}h {minutes}m"


def format_rate(items: int, total_seconds: float) -> str:
    """Return throughput like ``"125.0 items/s"``."""
    if total_seconds <= 0:
        return "N/A"
    return f"{items / total_seconds:.1f} items/s"
