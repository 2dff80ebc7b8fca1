"""
Command-line interface for pmapper.

This module provides Click-based CLI commands for pmapper.
"""

from pmapper.cli.main import cli

__all__ = ["cli"]
