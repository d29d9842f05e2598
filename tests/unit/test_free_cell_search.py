"""
Unit tests for the nearest-free-cell search.
"""

import pytest

import numpy as np

from mazeforge.geometry.mazes import Grid, find_nearest_free_cell, nearest_cell_without_collectible
from mazeforge.utils.exceptions import InvalidCoordinateError


class TestFindNearestFreeCell:
    """Test breadth-first search over raw grid adjacency."""

    def test_start_returned_when_free(self):
        assert find_nearest_free_cell(5, 5, (2, 2), lambda c: False) == (2, 2)

    def test_ties_resolve_north_first(self):
        """All four neighbors are free; north is enqueued first."""
        assert find_nearest_free_cell(5, 5, (2, 2), lambda c: c == (2, 2)) == (2, 3)

    def test_tie_order_without_north(self):
        excluded = {(2, 2), (2, 3)}
        assert find_nearest_free_cell(5, 5, (2, 2), excluded.__contains__) == (2, 1)

        excluded = {(2, 2), (2, 3), (2, 1)}
        assert find_nearest_free_cell(5, 5, (2, 2), excluded.__contains__) == (3, 2)

    def test_nearer_cell_wins_over_order(self):
        excluded = {(0, 0), (0, 1), (0, 2), (0, 3)}
        assert find_nearest_free_cell(4, 4, (0, 0), excluded.__contains__) == (1, 0)

    def test_all_excluded(self):
        assert find_nearest_free_cell(3, 2, (1, 1), lambda c: True) is None

    def test_single_cell(self):
        assert find_nearest_free_cell(1, 1, (0, 0), lambda c: False) == (0, 0)
        assert find_nearest_free_cell(1, 1, (0, 0), lambda c: True) is None

    def test_out_of_bounds_start(self):
        with pytest.raises(InvalidCoordinateError):
            find_nearest_free_cell(3, 3, (3, 0), lambda c: False)

    def test_ignores_walls(self):
        """A fully walled grid still has raw adjacency."""
        grid = Grid(3, 1)
        excluded = {(0, 0)}
        assert find_nearest_free_cell(grid.width, grid.height, (0, 0), excluded.__contains__) == (1, 0)


class TestNearestCellWithoutCollectible:
    """Test the decoration retargeting helper."""

    def test_skips_collectibles_and_reserved(self):
        grid = Grid(4, 1)
        collectibles = np.zeros((4, 1), dtype=bool)
        collectibles[1, 0] = True
        collectibles[2, 0] = True

        target = nearest_cell_without_collectible(grid, (1, 0), collectibles, reserved={(0, 0)})

        assert target == (3, 0)

    def test_no_free_cell(self):
        grid = Grid(2, 1)
        collectibles = np.ones((2, 1), dtype=bool)

        assert nearest_cell_without_collectible(grid, (0, 0), collectibles, reserved=set()) is None

    def test_result_differs_from_collectible_start(self):
        grid = Grid(5, 5)
        rng = np.random.default_rng(0)
        collectibles = rng.random((5, 5)) < 0.5
        start = tuple(int(v) for v in np.argwhere(collectibles)[0])

        target = nearest_cell_without_collectible(grid, start, collectibles, reserved={(0, 0)})

        assert target is not None
        assert target != start
        assert not collectibles[target]
