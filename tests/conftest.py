#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Shared test fixtures for pmapper tests.

Provides reusable fixtures for:
- Temporary directories
- Isolated configuration and logging
- Preconfigured mappers
- Sample items and callbacks
"""

import logging
import os
import shutil
import sys
import tempfile
from pathlib import Path
from typing import Generator, List

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))


# =============================================================================
# Temporary Directory Fixtures
# =============================================================================

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory that's cleaned up after the test."""
    dir_path = tempfile.mkdtemp()
    yield Path(dir_path)
    shutil.rmtree(dir_path, ignore_errors=True)


# =============================================================================
# Isolation Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, temp_dir: Path):
    """Run every test with a fresh config, no PMAPPER_ env vars and no .env file."""
    from pmapper.core import reset_config

    for key in list(os.environ):
        if key.startswith("PMAPPER_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(temp_dir)

    reset_config()
    yield
    reset_config()


@pytest.fixture(autouse=True)
def isolated_logging():
    """Drop handlers the CLI attaches so they don't outlive the test's streams."""
    yield
    logger = logging.getLogger("pmapper")
    logger.handlers = []
    logger.setLevel(logging.NOTSET)


# =============================================================================
# Mapper Fixtures
# =============================================================================

@pytest.fixture
def thread_mapper():
    """A quiet ParallelMapper on a small thread pool."""
    from pmapper.processing import ParallelMapper
    return ParallelMapper(max_workers=4, backend="thread", show_progress=False)


@pytest.fixture
def process_mapper():
    """A quiet ParallelMapper on a small process pool."""
    from pmapper.processing import ParallelMapper
    return ParallelMapper(max_workers=2, backend="process", show_progress=False)


# =============================================================================
# Data Fixtures
# =============================================================================

@pytest.fixture
def sample_items() -> List[int]:
    """The five items used throughout the examples."""
    return [0, 1, 2, 3, 4]


@pytest.fixture
def many_items() -> List[int]:
    """Enough items to produce several chunks."""
    return list(range(1000))


@pytest.fixture
def progress_log():
    """Callback that records every (completed, total) pair it receives."""
    class ProgressLog:
        def __init__(self):
            self.calls = []

        def __call__(self, completed, total):
            self.calls.append((completed, total))

    return ProgressLog()
