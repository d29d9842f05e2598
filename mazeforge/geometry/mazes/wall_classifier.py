"""
Wall junction classification.

A wall that meets another wall at a corner (L-junction) or in a three-way
intersection (T-junction) carries structure: breaking it would leave a
free-standing wall stub. Such walls are excluded from breakable-wall
eligibility.

For a wall on direction ``d`` of cell ``c`` with perpendicular directions
``p1, p2``, the wall is restricted if

    c has walls on d and on p1 or p2                    (seen from c), or
    c' = neighbor across d has walls on opposite(d)
         and on one of its own perpendiculars           (seen from c')

The second clause makes the answer independent of which side of the wall is
queried. Walls on the outer boundary are never breakable; that check lives
in :func:`is_breakable_candidate`, not in :func:`is_restricted`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .grid import Cell, Direction, Grid


def _forms_junction(cell: Cell, direction: Direction) -> bool:
    if not cell.has_wall(direction):
        return False
    return any(cell.has_wall(p) for p in direction.perpendicular)


def is_restricted(grid: Grid, x: int, y: int, direction: Direction) -> bool:
    """
    Report whether the wall on ``direction`` at (x, y) is part of an L or T junction.

    Args:
        grid: Carved maze grid
        x, y: Cell coordinates
        direction: Side of the cell the wall is on

    Returns:
        True if the wall must be excluded from breakable-wall eligibility

    Raises:
        InvalidCoordinateError: If (x, y) is outside the grid
    """
    cell = grid.cell(x, y)
    if _forms_junction(cell, direction):
        return True

    neighbor = grid.adjacent(cell, direction)
    return neighbor is not None and _forms_junction(neighbor, direction.opposite)


def is_breakable_candidate(grid: Grid, x: int, y: int, direction: Direction) -> bool:
    """True if the wall exists, faces another cell, and is not junction-restricted."""
    cell = grid.cell(x, y)
    return (
        cell.has_wall(direction)
        and not grid.is_boundary(x, y, direction)
        and not is_restricted(grid, x, y, direction)
    )
