"""
Placement decisions layered on top of a carved maze.

The placement plan is built in stages. Each stage takes the output of the
stages it depends on, so the ordering constraints are carried by the
function signatures:

    place_cell_features(ctx)                      -> CellFeatures
    plan_patrol_paths(ctx)                        -> tuple[PatrolPath, ...]
    place_decorations(ctx, features, paths)       -> tuple[DecorationAnchor, ...]
    assemble_plan(ctx, features, decorations)     -> PlacementPlan

Random draws follow grid scan order (x outer, y inner) within each stage:

    per cell:  floor variant, collectible draw (+ variant on success),
               then per present wall in N, S, E, W order:
               wall variant, breakable draw
    per cell:  patrol path draws (see patrol_paths)
    per cell:  decoration draw, anchor edge, decoration variant

The breakable draw is consumed for every present wall, including boundary
and junction-restricted walls whose result is then discarded. Asset
categories with no variants are skipped without drawing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

import numpy as np

from mazeforge.utils.maze_logging import get_logger

from .free_cell_search import nearest_cell_without_collectible
from .grid import DIRECTIONS, Direction
from .patrol_paths import PatrolPathPlanner, validate_patrol_paths
from .wall_classifier import is_breakable_candidate

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from .context import GenerationContext
    from .grid import CellCoord
    from .patrol_paths import PatrolPath

logger = get_logger(__name__)

_DIRECTION_INDEX = {d: i for i, d in enumerate(DIRECTIONS)}


@dataclass
class CellFeatures:
    """
    Output of the per-cell feature stage.

    Attributes:
        collectibles: Boolean table of shape (width, height)
        breakable: Boolean table of shape (width, height, 4), last axis in
            N, S, E, W order
        floor_variants: Chosen floor asset per cell
        collectible_variants: Chosen collectible asset per collectible cell
        wall_variants: Chosen wall asset per (x, y, direction)
    """

    collectibles: np.ndarray
    breakable: np.ndarray
    floor_variants: dict[CellCoord, str] = field(default_factory=dict)
    collectible_variants: dict[CellCoord, str] = field(default_factory=dict)
    wall_variants: dict[tuple[int, int, Direction], str] = field(default_factory=dict)

    @classmethod
    def empty(cls, width: int, height: int) -> CellFeatures:
        return cls(
            collectibles=np.zeros((width, height), dtype=bool),
            breakable=np.zeros((width, height, len(DIRECTIONS)), dtype=bool),
        )

    def has_collectible(self, coord: CellCoord) -> bool:
        return bool(self.collectibles[coord])

    def is_breakable(self, x: int, y: int, direction: Direction) -> bool:
        return bool(self.breakable[x, y, _DIRECTION_INDEX[direction]])


@dataclass(frozen=True)
class DecorationAnchor:
    """
    Where a decoration goes: against one wall of one cell.

    Attributes:
        cell: Cell the decoration is placed in
        edge: Wall the decoration sits against
        source: Cell whose draw produced the decoration (differs from
            ``cell`` only when the decoration was retargeted)
        edge_offset: Distance from the wall as a fraction of the cell size
        variant: Decoration asset
    """

    cell: CellCoord
    edge: Direction
    source: CellCoord
    edge_offset: float
    variant: str | None = None

    @property
    def retargeted(self) -> bool:
        return self.cell != self.source

    def world_position(self, cell_size: float) -> tuple[float, float]:
        """World (x, z) position: cell center pulled toward the anchoring wall."""
        pull = cell_size / 2 - self.edge_offset * cell_size
        return (
            self.cell[0] * cell_size + self.edge.dx * pull,
            self.cell[1] * cell_size + self.edge.dy * pull,
        )


@dataclass(frozen=True, eq=True, unsafe_hash=False)
class CellPlacement:
    """
    Decision record for one cell, as handed to the presentation layer.

    The wall mappings are read-only views; a finished record cannot be
    changed.
    """

    coord: CellCoord
    floor: bool = True
    floor_variant: str | None = None
    collectible: bool = False
    collectible_variant: str | None = None
    decoration_edges: tuple[Direction, ...] = ()
    breakable: Mapping[Direction, bool] = field(default_factory=dict)
    wall_variants: Mapping[Direction, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "breakable", MappingProxyType(dict(self.breakable)))
        object.__setattr__(self, "wall_variants", MappingProxyType(dict(self.wall_variants)))

    def __hash__(self) -> int:
        return hash((self.coord, self.floor_variant, self.collectible_variant, self.breakable_walls()))

    def breakable_walls(self) -> tuple[Direction, ...]:
        return tuple(d for d in DIRECTIONS if self.breakable.get(d, False))


@dataclass(frozen=True, eq=True, unsafe_hash=False)
class PlacementPlan:
    """Per-cell placement decisions plus decoration anchors for a whole maze."""

    width: int
    height: int
    style: str
    cells: Mapping[CellCoord, CellPlacement]
    decorations: tuple[DecorationAnchor, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "cells", MappingProxyType(dict(self.cells)))
        object.__setattr__(self, "decorations", tuple(self.decorations))

    def __hash__(self) -> int:
        return hash((self.width, self.height, self.style, self.decorations))

    def __iter__(self) -> Iterator[CellPlacement]:
        for x in range(self.width):
            for y in range(self.height):
                yield self.cells[(x, y)]

    def cell(self, x: int, y: int) -> CellPlacement:
        return self.cells[(x, y)]

    def collectible_cells(self) -> list[CellCoord]:
        return [p.coord for p in self if p.collectible]

    def collectible_mask(self) -> np.ndarray:
        mask = np.zeros((self.width, self.height), dtype=bool)
        for coord in self.collectible_cells():
            mask[coord] = True
        return mask

    def breakable_walls(self) -> list[tuple[int, int, Direction]]:
        return [(p.coord[0], p.coord[1], d) for p in self for d in p.breakable_walls()]

    def decorations_at(self, coord: CellCoord) -> list[DecorationAnchor]:
        return [anchor for anchor in self.decorations if anchor.cell == coord]

    def summary(self) -> dict[str, int]:
        return {
            "collectibles": len(self.collectible_cells()),
            "breakable_walls": len(self.breakable_walls()),
            "decorations": len(self.decorations),
            "retargeted_decorations": sum(1 for a in self.decorations if a.retargeted),
        }


def place_cell_features(ctx: GenerationContext) -> CellFeatures:
    """
    Decide floor variants, collectibles and breakable walls for every cell.

    A wall is breakable when its draw succeeds AND it does not face the
    outside of the grid AND it is not part of an L/T junction.
    """
    grid = ctx.grid
    rng = ctx.rng
    style = ctx.style
    config = ctx.config
    features = CellFeatures.empty(grid.width, grid.height)

    if not style.floor:
        ctx.warn_missing("floor", "floors are placed without a variant")
    if not config.collectibles:
        ctx.warn_missing("collectibles", "no collectibles are placed")
    for direction in DIRECTIONS:
        if not style.wall_assets(direction):
            ctx.warn_missing(
                f"{direction.name.lower()}_wall",
                f"{direction.name.lower()} walls get no variant and are never breakable",
            )

    for cell in grid.all_cells():
        coord = cell.coord

        if style.floor:
            features.floor_variants[coord] = style.floor[rng.randrange(len(style.floor))]

        if config.collectibles and rng.random() < config.collectible_spawn_chance:
            features.collectibles[coord] = True
            features.collectible_variants[coord] = config.collectibles[rng.randrange(len(config.collectibles))]

        for direction in cell.walls():
            variants = style.wall_assets(direction)
            if not variants:
                continue
            features.wall_variants[(cell.x, cell.y, direction)] = variants[rng.randrange(len(variants))]

            drawn = rng.random() < config.breakable_wall_chance
            if drawn and is_breakable_candidate(grid, cell.x, cell.y, direction):
                features.breakable[cell.x, cell.y, _DIRECTION_INDEX[direction]] = True

    logger.debug(
        f"Placed {int(features.collectibles.sum())} collectibles and "
        f"{int(features.breakable.sum())} breakable walls"
    )
    return features


def plan_patrol_paths(ctx: GenerationContext) -> tuple[PatrolPath, ...]:
    """Plan patrol paths, claiming their cells in ``ctx.reserved``."""
    if ctx.config.patrol_agent is None:
        ctx.warn_missing("patrol_agent", "patrol paths are planned but no agent marker is assigned")

    planner = PatrolPathPlanner(ctx.grid, ctx.rng, ctx.reserved, ctx.config.enemy_path_spawn_chance)
    paths = tuple(planner.plan())
    validate_patrol_paths(ctx.grid, paths, ctx.spawn_cell)
    return paths


def place_decorations(
    ctx: GenerationContext,
    features: CellFeatures,
    paths: tuple[PatrolPath, ...],
    skip_occupied: bool = True,
) -> tuple[DecorationAnchor, ...]:
    """
    Anchor decorations against walls.

    Cells claimed by a patrol path (or the spawn cell) never get a draw. With
    ``skip_occupied`` (the default) cells holding a collectible are skipped
    too; otherwise a successful draw on such a cell is moved to the nearest
    cell without a collectible or reservation.

    Args:
        ctx: Generation context (reserved set must already hold ``paths``)
        features: Output of :func:`place_cell_features`
        paths: Output of :func:`plan_patrol_paths`
        skip_occupied: Skip collectible cells before drawing

    Returns:
        Decoration anchors in placement order
    """
    style = ctx.style
    if not style.decoration:
        ctx.warn_missing("decoration", "no decorations are placed")
        return ()

    grid = ctx.grid
    rng = ctx.rng
    reserved = ctx.reserved
    anchors: list[DecorationAnchor] = []

    for coord in grid.coords():
        if coord in reserved:
            continue
        if skip_occupied and features.has_collectible(coord):
            continue

        if rng.random() >= ctx.config.decoration_spawn_chance:
            continue

        target = coord
        if features.has_collectible(coord):
            target = nearest_cell_without_collectible(grid, coord, features.collectibles, reserved)
            if target is None:
                continue
            logger.debug(f"Decoration for {coord} moved to {target}")

        edges = grid.cell(*target).walls()
        if not edges:
            continue

        edge = rng.choice(edges)
        variant = style.decoration[rng.randrange(len(style.decoration))]
        anchors.append(
            DecorationAnchor(
                cell=target,
                edge=edge,
                source=coord,
                edge_offset=ctx.config.decoration_edge_offset,
                variant=variant,
            )
        )

    logger.debug(f"Placed {len(anchors)} decorations around {len(paths)} patrol paths")
    return tuple(anchors)


def assemble_plan(
    ctx: GenerationContext,
    features: CellFeatures,
    decorations: tuple[DecorationAnchor, ...],
) -> PlacementPlan:
    """Fold the stage outputs into the per-cell placement plan."""
    grid = ctx.grid
    decorate = bool(ctx.style.decoration)
    cells: dict[CellCoord, CellPlacement] = {}

    for cell in grid.all_cells():
        coord = cell.coord
        walls = cell.walls()
        cells[coord] = CellPlacement(
            coord=coord,
            floor_variant=features.floor_variants.get(coord),
            collectible=features.has_collectible(coord),
            collectible_variant=features.collectible_variants.get(coord),
            decoration_edges=walls if decorate else (),
            breakable={d: features.is_breakable(cell.x, cell.y, d) for d in walls},
            wall_variants={
                d: features.wall_variants[(cell.x, cell.y, d)]
                for d in walls
                if (cell.x, cell.y, d) in features.wall_variants
            },
        )

    return PlacementPlan(
        width=grid.width,
        height=grid.height,
        style=ctx.style.name,
        cells=cells,
        decorations=decorations,
    )
