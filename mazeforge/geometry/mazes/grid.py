"""
Grid model for maze generation.

A maze is a width x height array of cells. Every cell starts with all four
walls present; carving removes walls between grid-adjacent cells. Two cells
are connected by a corridor iff the wall they share is absent on both sides.

Coordinate convention:
    x grows eastward, y grows northward. Cell (0, 0) is the south-west
    corner, cell (width - 1, height - 1) the north-east corner.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from mazeforge.utils.exceptions import InvalidCoordinateError, InvariantViolationError, validate_dimension

if TYPE_CHECKING:
    from collections.abc import Iterator

CellCoord = tuple[int, int]


class Direction(Enum):
    """The four cardinal directions with their unit offsets (dx, dy)."""

    NORTH = (0, 1)
    SOUTH = (0, -1)
    EAST = (1, 0)
    WEST = (-1, 0)

    @property
    def offset(self) -> tuple[int, int]:
        return self.value

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    @property
    def perpendicular(self) -> tuple[Direction, Direction]:
        """The two directions orthogonal to this one."""
        return _PERPENDICULARS[self]

    @property
    def is_horizontal(self) -> bool:
        return self.dx != 0

    def step(self, coord: CellCoord) -> CellCoord:
        """Coordinate one step from ``coord`` in this direction."""
        return (coord[0] + self.dx, coord[1] + self.dy)

    @classmethod
    def between(cls, a: CellCoord, b: CellCoord) -> Direction | None:
        """Direction leading from ``a`` to grid-adjacent ``b``, or None."""
        return _BY_OFFSET.get((b[0] - a[0], b[1] - a[1]))


_OPPOSITES = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}

_PERPENDICULARS = {
    Direction.NORTH: (Direction.EAST, Direction.WEST),
    Direction.SOUTH: (Direction.EAST, Direction.WEST),
    Direction.EAST: (Direction.NORTH, Direction.SOUTH),
    Direction.WEST: (Direction.NORTH, Direction.SOUTH),
}

_BY_OFFSET = {d.value: d for d in Direction}

# Enumeration order used everywhere a set of directions is built
DIRECTIONS: tuple[Direction, ...] = (Direction.NORTH, Direction.SOUTH, Direction.EAST, Direction.WEST)


@dataclass(eq=False)
class Cell:
    """
    Represents a cell in the maze grid.

    Attributes:
        x: Column index (west to east)
        y: Row index (south to north)
        north: Wall present on the north side
        south: Wall present on the south side
        east: Wall present on the east side
        west: Wall present on the west side
        visited: Temporary flag for carving
    """

    x: int
    y: int
    north: bool = True
    south: bool = True
    east: bool = True
    west: bool = True
    visited: bool = False

    def __hash__(self):
        """Make cell hashable based on position only."""
        return hash((self.x, self.y))

    def __eq__(self, other):
        """Equality based on position only."""
        if not isinstance(other, Cell):
            return False
        return self.x == other.x and self.y == other.y

    @property
    def coord(self) -> CellCoord:
        return (self.x, self.y)

    def has_wall(self, direction: Direction) -> bool:
        return getattr(self, direction.name.lower())

    def _clear_wall(self, direction: Direction) -> None:
        setattr(self, direction.name.lower(), False)

    def walls(self) -> tuple[Direction, ...]:
        """Directions that still carry a wall, in N, S, E, W order."""
        return tuple(d for d in DIRECTIONS if self.has_wall(d))

    @property
    def wall_count(self) -> int:
        return len(self.walls())


class Grid:
    """Grid of cells for maze generation."""

    def __init__(self, width: int, height: int):
        """
        Initialize a fully walled grid.

        Args:
            width: Number of columns (x extent)
            height: Number of rows (y extent)

        Raises:
            ConfigurationError: If a dimension is not a positive integer
        """
        self.width = validate_dimension(width, "width")
        self.height = validate_dimension(height, "height")
        self.cells: list[list[Cell]] = [[Cell(x, y) for y in range(self.height)] for x in range(self.width)]

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height}, passages={self.passage_count()})"

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cell(self, x: int, y: int) -> Cell:
        """
        Get cell at position.

        Raises:
            InvalidCoordinateError: If (x, y) is outside the grid
        """
        if not self.in_bounds(x, y):
            raise InvalidCoordinateError((x, y), self.width, self.height)
        return self.cells[x][y]

    def get_cell(self, x: int, y: int) -> Cell | None:
        """Get cell at position, or None if outside the grid."""
        if self.in_bounds(x, y):
            return self.cells[x][y]
        return None

    def _resolve(self, ref: Cell | CellCoord) -> Cell:
        if isinstance(ref, Cell):
            return self.cell(ref.x, ref.y)
        return self.cell(ref[0], ref[1])

    def adjacent(self, cell: Cell | CellCoord, direction: Direction) -> Cell | None:
        """Neighbor of ``cell`` in ``direction``, or None past the boundary."""
        cell = self._resolve(cell)
        return self.get_cell(cell.x + direction.dx, cell.y + direction.dy)

    def neighbors(self, cell: Cell | CellCoord) -> list[Cell]:
        """All in-bounds 4-connected neighbors, in N, S, E, W order."""
        cell = self._resolve(cell)
        return [n for n in (self.adjacent(cell, d) for d in DIRECTIONS) if n is not None]

    def unvisited_neighbors(self, cell: Cell | CellCoord) -> list[Cell]:
        return [n for n in self.neighbors(cell) if not n.visited]

    def is_corridor_open(self, a: Cell | CellCoord, b: Cell | CellCoord) -> bool:
        """True iff ``a`` and ``b`` are grid-adjacent and their shared wall is absent on both sides."""
        a = self._resolve(a)
        b = self._resolve(b)
        direction = Direction.between(a.coord, b.coord)
        if direction is None:
            return False
        return not a.has_wall(direction) and not b.has_wall(direction.opposite)

    def remove_wall(self, a: Cell | CellCoord, b: Cell | CellCoord) -> None:
        """
        Remove the wall shared by two adjacent cells, on both sides.

        Raises:
            InvalidCoordinateError: If the cells are not grid-adjacent
        """
        a = self._resolve(a)
        b = self._resolve(b)
        direction = Direction.between(a.coord, b.coord)
        if direction is None:
            raise InvalidCoordinateError(
                b.coord, self.width, self.height, reason=f"Cells {a.coord} and {b.coord} are not adjacent"
            )
        a._clear_wall(direction)
        b._clear_wall(direction.opposite)

    def is_boundary(self, x: int, y: int, direction: Direction) -> bool:
        """True if the wall on ``direction`` of cell (x, y) faces outside the grid."""
        return not self.in_bounds(x + direction.dx, y + direction.dy)

    def all_cells(self) -> list[Cell]:
        """All cells in scan order (x outer, y inner)."""
        return [cell for column in self.cells for cell in column]

    def coords(self) -> Iterator[CellCoord]:
        """All coordinates in scan order (x outer, y inner)."""
        for x in range(self.width):
            for y in range(self.height):
                yield (x, y)

    def reset_visited(self):
        """Reset visited flags for all cells."""
        for cell in self.all_cells():
            cell.visited = False

    def passage_count(self) -> int:
        """Number of open corridors (each counted once)."""
        count = 0
        for cell in self.all_cells():
            if cell.x < self.width - 1 and not cell.east:
                count += 1
            if cell.y < self.height - 1 and not cell.north:
                count += 1
        return count

    def check_wall_symmetry(self) -> None:
        """
        Verify that every pair of adjacent cells agrees on their shared wall.

        Raises:
            InvariantViolationError: On the first inconsistent pair found
        """
        for cell in self.all_cells():
            for direction in (Direction.NORTH, Direction.EAST):
                neighbor = self.adjacent(cell, direction)
                if neighbor is None:
                    continue
                if cell.has_wall(direction) != neighbor.has_wall(direction.opposite):
                    raise InvariantViolationError(
                        "wall-symmetry",
                        f"cells {cell.coord} and {neighbor.coord} disagree on their shared wall",
                        stage="grid",
                    )

    def boundary_intact(self) -> bool:
        """True if no wall facing outside the grid has been removed."""
        for cell in self.all_cells():
            for direction in DIRECTIONS:
                if self.is_boundary(cell.x, cell.y, direction) and not cell.has_wall(direction):
                    return False
        return True
