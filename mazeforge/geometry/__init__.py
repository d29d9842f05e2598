"""Grid geometry for level generation."""

from .mazes import Cell, Direction, Grid, MazeCarver, carve_maze, verify_perfect_maze

__all__ = [
    "Cell",
    "Direction",
    "Grid",
    "MazeCarver",
    "carve_maze",
    "verify_perfect_maze",
]
