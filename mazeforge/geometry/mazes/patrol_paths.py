"""
Patrol path planning over a carved maze.

Patrol paths are short corridor segments that roaming agents walk back and
forth along. Two shapes are generated:

- Straight: every step goes the same direction, at least 3 cells
- L-shaped: a straight run, one 90 degree turn, a perpendicular run.
  Each run has at least 2 cells and the runs share the turning cell.

Paths never overlap each other and never touch the spawn cell. Every cell of
an accepted path is added to the reserved set; a rejected attempt leaves the
reserved set untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from mazeforge.utils.exceptions import InvariantViolationError
from mazeforge.utils.maze_logging import get_logger

from .grid import DIRECTIONS, Direction

if TYPE_CHECKING:
    import random
    from collections.abc import Iterable, Iterator, Sequence

    from .grid import CellCoord, Grid

logger = get_logger(__name__)

STRAIGHT_MIN_CELLS = 3
RUN_MIN_CELLS = 2
PATH_MIN_CELLS = 3
STRAIGHT_SHAPE_CHANCE = 0.5
EARLY_STOP_CHANCE = 0.5


class PathShape(Enum):
    STRAIGHT = "straight"
    L_SHAPED = "l_shaped"


@dataclass(frozen=True)
class PatrolPath:
    """An ordered run of corridor-connected cells claimed by one patrolling agent."""

    cells: tuple[CellCoord, ...]
    shape: PathShape

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[CellCoord]:
        return iter(self.cells)

    def __contains__(self, coord) -> bool:
        return coord in self.cells

    @property
    def start(self) -> CellCoord:
        return self.cells[0]

    @property
    def end(self) -> CellCoord:
        return self.cells[-1]

    @property
    def turning_cell(self) -> CellCoord | None:
        """The corner cell of an L-shaped path, None for straight paths."""
        if self.shape is PathShape.STRAIGHT:
            return None
        first = Direction.between(self.cells[0], self.cells[1])
        for i in range(1, len(self.cells) - 1):
            if Direction.between(self.cells[i], self.cells[i + 1]) is not first:
                return self.cells[i]
        return None

    def patrol_points(self, max_points: int = 3) -> tuple[CellCoord, ...]:
        """
        Waypoints handed to the patrolling agent.

        With the default of 3 points a straight path yields start, start+1,
        start+2 and an L-shaped path whose first run is 2 cells yields the
        corner as the middle point.
        """
        return self.cells[:max_points]

    def to_world(self, cell_size: float) -> list[tuple[float, float]]:
        """Path cells as world-space (x, z) positions of the cell centers."""
        return [(x * cell_size, y * cell_size) for x, y in self.cells]


class ReservedCells:
    """
    Grow-only set of cells that no new path or decoration may use.

    Holds the spawn cell plus every cell of every accepted patrol path.
    Cells are never removed.
    """

    def __init__(self, initial: Iterable[CellCoord] = ()):
        self._cells: set[CellCoord] = set()
        self.reserve(initial)

    def __contains__(self, coord) -> bool:
        return coord in self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[CellCoord]:
        return iter(self._cells)

    def reserve(self, cells: Iterable[CellCoord]) -> None:
        """
        Claim cells.

        Raises:
            InvariantViolationError: If any cell is already reserved, or
                listed twice in ``cells``
        """
        cells = list(cells)
        clashes = [c for c in cells if c in self._cells]
        if clashes or len(set(cells)) != len(cells):
            raise InvariantViolationError(
                "reserved-cell double-claim",
                f"cells already claimed: {clashes or cells}",
                stage="patrol_paths",
            )
        self._cells.update(cells)

    def freeze(self) -> frozenset[CellCoord]:
        return frozenset(self._cells)


class PatrolPathPlanner:
    """
    Generates non-overlapping straight and L-shaped patrol paths.

    Random draws, in order, for every unreserved start cell in scan order
    (x outer, y inner):
    1. ``rng.random() < path_chance`` - attempt a path here at all
    2. ``rng.random() < 0.5`` - straight, otherwise L-shaped
    3. Direction choice and per-step early-stop coins of that shape
    """

    def __init__(
        self,
        grid: Grid,
        rng: random.Random,
        reserved: ReservedCells,
        path_chance: float,
    ):
        self.grid = grid
        self.rng = rng
        self.reserved = reserved
        self.path_chance = path_chance
        self.paths: list[PatrolPath] = []
        self.attempts = 0

    def plan(self) -> list[PatrolPath]:
        """Scan every cell once and return the accepted paths in acceptance order."""
        for start in self.grid.coords():
            if start in self.reserved:
                continue
            if self.rng.random() >= self.path_chance:
                continue

            self.attempts += 1
            if self.rng.random() < STRAIGHT_SHAPE_CHANCE:
                candidate = self.straight_path(start)
            else:
                candidate = self.l_shaped_path(start)

            if candidate is not None:
                self.accept(candidate)

        logger.debug(f"Planned {len(self.paths)} patrol paths from {self.attempts} attempts")
        return self.paths

    def accept(self, path: PatrolPath) -> None:
        self.reserved.reserve(path.cells)
        self.paths.append(path)

    def is_free(self, coord: CellCoord) -> bool:
        return self.grid.in_bounds(*coord) and coord not in self.reserved

    def can_step(self, current: CellCoord, direction: Direction) -> bool:
        nxt = direction.step(current)
        return self.is_free(nxt) and self.grid.is_corridor_open(current, nxt)

    def open_directions(self, cell: CellCoord, candidates: Sequence[Direction] = DIRECTIONS) -> list[Direction]:
        """Directions from ``cell`` leading to a corridor-open, unreserved neighbor."""
        return [d for d in candidates if self.can_step(cell, d)]

    def _grow_run(self, start: CellCoord, direction: Direction, stop_from: int) -> list[CellCoord]:
        """
        Extend a straight run from ``start``.

        Stops at the first blocked step. Once the run holds ``stop_from``
        cells, every further successful step is followed by a fair coin
        that may end the run early.
        """
        run = [start]
        current = start
        while self.can_step(current, direction):
            current = direction.step(current)
            run.append(current)
            if len(run) >= stop_from and self.rng.random() < EARLY_STOP_CHANCE:
                break
        return run

    def straight_path(self, start: CellCoord) -> PatrolPath | None:
        """Straight path of at least 3 cells from ``start``, or None."""
        directions = self.open_directions(start)
        if not directions:
            return None

        direction = self.rng.choice(directions)
        run = self._grow_run(start, direction, STRAIGHT_MIN_CELLS)
        if len(run) < STRAIGHT_MIN_CELLS:
            return None
        return PatrolPath(tuple(run), PathShape.STRAIGHT)

    def l_shaped_path(self, start: CellCoord) -> PatrolPath | None:
        """L-shaped path from ``start`` turning once at the end of its first run, or None."""
        directions = self.open_directions(start)
        if not directions:
            return None

        primary_dir = self.rng.choice(directions)
        primary = self._grow_run(start, primary_dir, RUN_MIN_CELLS)
        if len(primary) < RUN_MIN_CELLS:
            return None

        turn = primary[-1]
        turns = self.open_directions(turn, primary_dir.perpendicular)
        if not turns:
            return None

        perp_dir = self.rng.choice(turns)
        perpendicular = self._grow_run(turn, perp_dir, RUN_MIN_CELLS)
        if len(perpendicular) < RUN_MIN_CELLS:
            return None

        cells = primary + perpendicular[1:]
        if len(cells) < PATH_MIN_CELLS:
            return None
        return PatrolPath(tuple(cells), PathShape.L_SHAPED)


def validate_patrol_paths(grid: Grid, paths: Sequence[PatrolPath], spawn: CellCoord) -> None:
    """
    Check every path against the patrol-path invariants.

    Raises:
        InvariantViolationError: On a short path, a repeated or shared cell,
            a step through a wall, or a path touching the spawn cell
    """
    claimed: dict[CellCoord, int] = {}
    for index, path in enumerate(paths):
        if len(path) < PATH_MIN_CELLS:
            raise InvariantViolationError("patrol-path length", f"path {index} has {len(path)} cells")
        if len(set(path.cells)) != len(path):
            raise InvariantViolationError("patrol-path simple", f"path {index} repeats a cell")
        if spawn in path:
            raise InvariantViolationError("patrol-path spawn", f"path {index} contains spawn cell {spawn}")
        for a, b in zip(path.cells, path.cells[1:]):
            if not grid.is_corridor_open(a, b):
                raise InvariantViolationError("patrol-path corridor", f"path {index} steps through a wall {a}->{b}")
        for cell in path:
            if cell in claimed:
                raise InvariantViolationError(
                    "patrol-path overlap", f"cell {cell} shared by paths {claimed[cell]} and {index}"
                )
            claimed[cell] = index
