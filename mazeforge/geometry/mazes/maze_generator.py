"""
Perfect Maze Carving

Carves a fully walled grid into a perfect maze with randomized depth-first
search (recursive backtracking), run iteratively with an explicit stack so
large grids never hit the recursion limit.

A perfect maze has two properties:
1. Fully Connected: a corridor path exists between any two cells
2. No Loops: exactly one simple path between any pair of cells

Equivalently, the open corridors form a spanning tree of the grid graph:
|V| cells connected by |V| - 1 corridors.

Randomized DFS is not a uniform spanning-tree sampler; it is biased toward
long winding corridors with relatively few dead ends.

Reference: Jamis Buck, "Mazes for Programmers" (2015)
"""

from __future__ import annotations

import random
from collections import deque
from typing import TYPE_CHECKING

import numpy as np

from mazeforge.utils.exceptions import InvariantViolationError
from mazeforge.utils.maze_logging import get_logger

from .grid import Cell, Direction, Grid

if TYPE_CHECKING:
    from numpy.typing import NDArray

logger = get_logger(__name__)

ORIGIN = (0, 0)


class MazeCarver:
    """
    Randomized iterative depth-first search carver.

    The carver always starts at the origin cell (0, 0). The only random draws
    it consumes are one ``rng.choice`` per forward carve step, so a fixed
    random stream and fixed dimensions always produce the same maze.
    """

    def __init__(self, grid: Grid, rng: random.Random):
        """
        Args:
            grid: Fully walled grid to carve in place
            rng: Random source shared with the rest of the generation run
        """
        self.grid = grid
        self.rng = rng
        self.steps = 0

    def carve(self) -> Grid:
        """
        Carve the grid into a perfect maze.

        Algorithm:
        1. Mark the origin visited and make it current
        2. Collect the unvisited neighbors of current (N, S, E, W order)
        3. If any: pick one uniformly, push current, remove the shared wall,
           mark the neighbor visited and make it current
        4. Else, if the stack is non-empty: pop it into current (backtrack)
        5. Stop when there is nothing to carve and nothing to backtrack to

        Returns:
            The carved grid (same object that was passed in)
        """
        grid = self.grid
        stack: list[Cell] = []
        current = grid.cell(*ORIGIN)
        current.visited = True

        while True:
            unvisited = grid.unvisited_neighbors(current)

            if unvisited:
                chosen = self.rng.choice(unvisited)
                stack.append(current)
                grid.remove_wall(current, chosen)
                chosen.visited = True
                current = chosen
                self.steps += 1
            elif stack:
                current = stack.pop()
            else:
                break

        logger.debug(f"Carved {grid.width}x{grid.height} maze in {self.steps} steps")
        return grid


def carve_maze(
    width: int,
    height: int,
    seed: int | None = None,
    rng: random.Random | None = None,
) -> Grid:
    """
    High-level function to carve a perfect maze.

    Args:
        width: Number of columns
        height: Number of rows
        seed: Random seed, used when no ``rng`` is given
        rng: Explicit random source

    Returns:
        Carved maze grid

    Raises:
        InvariantViolationError: If the carved grid is not a perfect maze

    Example:
        >>> grid = carve_maze(20, 20, seed=42)
        >>> grid.passage_count()
        399
    """
    if rng is None:
        rng = random.Random(seed)

    grid = MazeCarver(Grid(width, height), rng).carve()

    verification = verify_perfect_maze(grid)
    if not verification["is_perfect"]:
        raise InvariantViolationError("spanning-tree", f"carved maze is not perfect: {verification}", stage="carve")

    return grid


def verify_perfect_maze(grid: Grid) -> dict:
    """
    Verify that a maze is perfect (fully connected, no loops).

    A perfect maze must satisfy:
    1. Connectivity: All cells reachable from the origin over open corridors
    2. Acyclicity: Exactly (n-1) passages for n cells

    Args:
        grid: Maze grid to verify

    Returns:
        Dictionary with verification results including:
        - is_perfect: Overall validity
        - is_connected: Connectivity check
        - is_no_loops: Acyclicity check
        - visited_cells: Number of reachable cells
        - total_cells: Total number of cells
        - passage_count: Number of passages
        - expected_passages: Expected passages for perfect maze
        - walls_symmetric: Every shared wall agrees on both sides
    """
    walls_symmetric = True
    try:
        grid.check_wall_symmetry()
    except InvariantViolationError:
        walls_symmetric = False

    start = grid.cell(*ORIGIN)
    seen = {start.coord}
    queue = deque([start])

    while queue:
        current = queue.popleft()
        for neighbor in grid.neighbors(current):
            if neighbor.coord not in seen and grid.is_corridor_open(current, neighbor):
                seen.add(neighbor.coord)
                queue.append(neighbor)

    total_cells = grid.width * grid.height
    visited_count = len(seen)
    is_connected = visited_count == total_cells

    passage_count = grid.passage_count()
    expected_passages = total_cells - 1
    is_no_loops = passage_count == expected_passages

    return {
        "is_perfect": is_connected and is_no_loops and walls_symmetric,
        "is_connected": is_connected,
        "is_no_loops": is_no_loops,
        "walls_symmetric": walls_symmetric,
        "visited_cells": visited_count,
        "total_cells": total_cells,
        "passage_count": passage_count,
        "expected_passages": expected_passages,
    }


def to_numpy_array(grid: Grid, wall_thickness: int = 1) -> NDArray[np.int32]:
    """
    Convert maze to numpy array representation.

    Row 0 of the array is the northern edge, so printing the array shows the
    maze the way it is laid out in the world (north up, east right). Each cell
    interior is ``wall_thickness + 1`` pixels square.

    Args:
        grid: Carved maze grid
        wall_thickness: Thickness of walls in pixels

    Returns:
        Numpy array of shape (height * pitch + wall_thickness,
        width * pitch + wall_thickness) with pitch = 2 * wall_thickness + 1,
        where 1 = wall and 0 = passage
    """
    wt = wall_thickness
    interior = wt + 1
    pitch = interior + wt

    maze = np.ones((grid.height * pitch + wt, grid.width * pitch + wt), dtype=np.int32)

    for cell in grid.all_cells():
        r0 = wt + (grid.height - 1 - cell.y) * pitch
        c0 = wt + cell.x * pitch

        maze[r0 : r0 + interior, c0 : c0 + interior] = 0

        if not cell.has_wall(Direction.NORTH) and cell.y < grid.height - 1:
            maze[r0 - wt : r0, c0 : c0 + interior] = 0
        if not cell.has_wall(Direction.EAST) and cell.x < grid.width - 1:
            maze[r0 : r0 + interior, c0 + interior : c0 + pitch] = 0

    return maze
