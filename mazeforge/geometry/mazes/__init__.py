"""
Maze carving and level placement.

- grid: cells, walls and the Direction enumeration
- maze_generator: randomized depth-first carving into a perfect maze
- wall_classifier: L/T junction detection for breakable-wall eligibility
- patrol_paths: straight and L-shaped non-overlapping patrol paths
- free_cell_search: nearest free cell by breadth-first search
- placement: staged placement plan (collectibles, walls, decorations)

Examples
--------
>>> import random
>>> from mazeforge.geometry.mazes import Grid, MazeCarver, verify_perfect_maze
>>> grid = MazeCarver(Grid(8, 8), random.Random(1)).carve()
>>> verify_perfect_maze(grid)["is_perfect"]
True
"""

from .context import GenerationContext
from .free_cell_search import find_nearest_free_cell, nearest_cell_without_collectible
from .grid import DIRECTIONS, Cell, CellCoord, Direction, Grid
from .maze_generator import MazeCarver, carve_maze, to_numpy_array, verify_perfect_maze
from .patrol_paths import PathShape, PatrolPath, PatrolPathPlanner, ReservedCells, validate_patrol_paths
from .placement import (
    CellFeatures,
    CellPlacement,
    DecorationAnchor,
    PlacementPlan,
    assemble_plan,
    place_cell_features,
    place_decorations,
    plan_patrol_paths,
)
from .wall_classifier import is_breakable_candidate, is_restricted

__all__ = [
    "DIRECTIONS",
    "Cell",
    "CellCoord",
    "CellFeatures",
    "CellPlacement",
    "DecorationAnchor",
    "Direction",
    "GenerationContext",
    "Grid",
    "MazeCarver",
    "PathShape",
    "PatrolPath",
    "PatrolPathPlanner",
    "PlacementPlan",
    "ReservedCells",
    "assemble_plan",
    "carve_maze",
    "find_nearest_free_cell",
    "is_breakable_candidate",
    "is_restricted",
    "nearest_cell_without_collectible",
    "place_cell_features",
    "place_decorations",
    "plan_patrol_paths",
    "to_numpy_array",
    "validate_patrol_paths",
    "verify_perfect_maze",
]
