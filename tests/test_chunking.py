#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Tests for the chunk size heuristic and partitioning.
"""

import pytest

from pmapper.processing.chunking import compute_chunksize, partition


class TestComputeChunksize:
    """Tests for compute_chunksize."""

    @pytest.mark.unit
    @pytest.mark.parametrize("n_items,n_workers,expected", [
        (100, 4, 20),      # sqrt(100) * 4 / 2
        (10_000, 8, 400),  # sqrt(10000) * 8 / 2
        (50, 2, 7),        # 7.07 truncated
    ])
    def test_heuristic(self, n_items, n_workers, expected):
        assert compute_chunksize(n_items, n_workers) == expected

    @pytest.mark.unit
    def test_never_below_one(self):
        """A single worker on a tiny input would give 0.7; clamp to 1."""
        assert compute_chunksize(2, 1) == 1

    @pytest.mark.unit
    def test_never_above_item_count(self):
        """sqrt(5) * 16 / 2 = 17.9, but there are only 5 items."""
        assert compute_chunksize(5, 16) == 5

    @pytest.mark.unit
    def test_requested_overrides_heuristic(self):
        assert compute_chunksize(100, 4, requested=3) == 3

    @pytest.mark.unit
    def test_requested_is_clamped(self):
        assert compute_chunksize(10, 4, requested=50) == 10
        assert compute_chunksize(10, 4, requested=0) == 1

    @pytest.mark.unit
    def test_grows_with_workers(self):
        assert compute_chunksize(400, 2) < compute_chunksize(400, 8)


class TestPartition:
    """Tests for partition."""

    @pytest.mark.unit
    def test_even_split(self):
        assert partition([1, 2, 3, 4], 2) == [[1, 2], [3, 4]]

    @pytest.mark.unit
    def test_last_chunk_shorter(self):
        assert partition([1, 2, 3, 4, 5], 2) == [[1, 2], [3, 4], [5]]

    @pytest.mark.unit
    def test_covers_every_item_in_order(self):
        items = list(range(103))
        chunks = partition(items, 10)

        assert len(chunks) == 11
        assert [item for chunk in chunks for item in chunk] == items

    @pytest.mark.unit
    def test_works_on_ranges_and_tuples(self):
        assert partition(range(5), 3) == [[0, 1, 2], [3, 4]]
        assert partition(("a", "b", "c"), 2) == [["a", "b"], ["c"]]

    @pytest.mark.unit
    def test_chunk_larger_than_input(self):
        assert partition([1, 2], 10) == [[1, 2]]

    @pytest.mark.unit
    def test_invalid_chunksize(self):
        with pytest.raises(ValueError, match="chunksize must be >= 1"):
            partition([1, 2], 0)
