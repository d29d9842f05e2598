"""
Breadth-first search for the nearest free cell.

The search walks raw 4-connected grid adjacency and ignores walls entirely:
it answers "which cell is closest on the grid", not "which cell is closest
through the maze". Ties at equal distance resolve in enqueue order, with
neighbors enqueued N, S, E, W.
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from mazeforge.utils.exceptions import InvalidCoordinateError

from .grid import DIRECTIONS

if TYPE_CHECKING:
    from collections.abc import Callable, Collection

    import numpy as np

    from .grid import CellCoord, Grid


def find_nearest_free_cell(
    width: int,
    height: int,
    start: CellCoord,
    is_excluded: Callable[[CellCoord], bool],
) -> CellCoord | None:
    """
    Find the cell closest to ``start`` (by grid steps) that is not excluded.

    ``start`` itself is returned when it is not excluded.

    Args:
        width, height: Grid dimensions
        start: Coordinate to search from
        is_excluded: Predicate marking cells that cannot be chosen

    Returns:
        The nearest acceptable coordinate, or None if every cell is excluded

    Raises:
        InvalidCoordinateError: If ``start`` is outside the grid
    """
    sx, sy = start
    if not (0 <= sx < width and 0 <= sy < height):
        raise InvalidCoordinateError(start, width, height)

    visited = {start}
    queue = deque([start])

    while queue:
        current = queue.popleft()
        if not is_excluded(current):
            return current

        for direction in DIRECTIONS:
            nx, ny = direction.step(current)
            if 0 <= nx < width and 0 <= ny < height and (nx, ny) not in visited:
                visited.add((nx, ny))
                queue.append((nx, ny))

    return None


def nearest_cell_without_collectible(
    grid: Grid,
    start: CellCoord,
    collectibles: np.ndarray,
    reserved: Collection[CellCoord],
) -> CellCoord | None:
    """
    Nearest cell that holds no collectible and is not reserved.

    Args:
        grid: Maze grid (only its dimensions are used)
        start: Cell the decoration was originally drawn for
        collectibles: Boolean table of shape (width, height)
        reserved: Spawn cell and patrol-path cells

    Returns:
        Retargeted coordinate, or None if no such cell exists
    """

    def excluded(coord: CellCoord) -> bool:
        return bool(collectibles[coord]) or coord in reserved

    return find_nearest_free_cell(grid.width, grid.height, start, excluded)
