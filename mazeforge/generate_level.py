#!/usr/bin/env python3
"""
High-Level Level Generation Interface

Runs the whole pipeline once: validate configuration, carve the maze, place
collectibles and breakable walls, plan patrol paths, anchor decorations.

Example:
    >>> from mazeforge import generate_level
    >>>
    >>> layout = generate_level(width=12, height=8, seed=7)
    >>> layout.spawn_cell, layout.endpoint_cell
    ((0, 0), (11, 7))
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from mazeforge.config import MazeGenerationConfig, validate_generation_config
from mazeforge.geometry.mazes import (
    GenerationContext,
    Grid,
    MazeCarver,
    assemble_plan,
    place_cell_features,
    place_decorations,
    plan_patrol_paths,
    to_numpy_array,
    verify_perfect_maze,
)
from mazeforge.utils.exceptions import InvariantViolationError
from mazeforge.utils.maze_logging import (
    LoggedOperation,
    configure_logging,
    get_logger,
    log_generation_configuration,
    log_generation_summary,
)

if TYPE_CHECKING:
    import numpy as np

    from mazeforge.config import StyleBundle
    from mazeforge.geometry.mazes import CellCoord, PatrolPath, PlacementPlan

logger = get_logger(__name__)


def _logging_requested(config: MazeGenerationConfig | dict[str, Any] | None, overrides: dict[str, Any]) -> bool:
    """True if the caller chose logging settings rather than inheriting the defaults."""
    if "logging" in overrides:
        return True
    if isinstance(config, MazeGenerationConfig):
        return "logging" in config.model_fields_set
    return config is not None and "logging" in config


@dataclass(frozen=True, eq=False)
class LevelLayout:
    """
    Result of one generation run, consumed by the presentation layer.

    Layouts compare and hash by identity.

    Attributes:
        config: Validated configuration the run used
        style: Selected style bundle
        grid: Carved maze (wall flags per cell)
        plan: Per-cell placement decisions and decoration anchors
        patrol_paths: Accepted patrol paths in acceptance order
        reserved_cells: Spawn cell plus all patrol-path cells
        warnings: Degenerate-input warnings raised during the run
        seed: Seed of the random stream, None when a stream was injected
    """

    config: MazeGenerationConfig
    style: StyleBundle
    grid: Grid
    plan: PlacementPlan
    patrol_paths: tuple[PatrolPath, ...]
    reserved_cells: frozenset[CellCoord]
    warnings: tuple[str, ...] = ()
    seed: int | None = None

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    @property
    def spawn_cell(self) -> CellCoord:
        return self.config.spawn_cell

    @property
    def endpoint_cell(self) -> CellCoord:
        return self.config.endpoint_cell

    def cell_to_world(self, x: int, y: int) -> tuple[float, float]:
        """World (x, z) position of a cell center."""
        return (x * self.config.cell_size, y * self.config.cell_size)

    def patrol_paths_world(self) -> list[list[tuple[float, float]]]:
        return [path.to_world(self.config.cell_size) for path in self.patrol_paths]

    def to_numpy_array(self, wall_thickness: int = 1) -> np.ndarray:
        return to_numpy_array(self.grid, wall_thickness=wall_thickness)

    def summary(self) -> dict[str, Any]:
        return {
            "size": f"{self.width}x{self.height}",
            "style": self.style.name,
            "passages": self.grid.passage_count(),
            "patrol_paths": len(self.patrol_paths),
            "reserved_cells": len(self.reserved_cells),
            **self.plan.summary(),
            "warnings": len(self.warnings),
        }


def generate_level(
    config: MazeGenerationConfig | dict[str, Any] | None = None,
    *,
    rng: random.Random | None = None,
    seed: int | None = None,
    apply_logging_config: bool | None = None,
    **overrides: Any,
) -> LevelLayout:
    """
    Generate a complete level layout.

    Args:
        config: Configuration instance or mapping; defaults when None
        rng: Random stream to draw from; takes precedence over any seed
        seed: Seed for a fresh stream; overrides ``config.seed``
        apply_logging_config: Apply ``config.logging`` to the package loggers.
            When None, it is applied only if the caller set ``logging``
            explicitly; otherwise the current logging setup is left alone.
        **overrides: Individual configuration fields, e.g. ``width=20``

    Returns:
        LevelLayout with the carved grid, placement plan and patrol paths

    Raises:
        ConfigurationError: If any parameter is invalid. Raised before any
            generation work is done.
        InvariantViolationError: If an internal invariant breaks (a defect)

    Example:
        >>> layout = generate_level({"width": 6, "height": 6}, seed=3)
        >>> layout.grid.passage_count()
        35
    """
    start_time = time.perf_counter()
    cfg = validate_generation_config(config, **overrides)

    if apply_logging_config is None:
        apply_logging_config = _logging_requested(config, overrides)
    if apply_logging_config:
        configure_logging(**cfg.logging.model_dump())

    if rng is None:
        if seed is None:
            seed = cfg.seed if cfg.seed is not None else random.SystemRandom().getrandbits(32)
        rng = random.Random(seed)
    else:
        seed = None

    style = cfg.select_style(rng)
    log_generation_configuration(logger, cfg.model_dump(exclude={"styles", "logging"}), style.name)

    ctx = GenerationContext(config=cfg, style=style, grid=Grid(cfg.width, cfg.height), rng=rng)
    if cfg.player is None:
        ctx.warn_missing("player", "nothing is placed at the spawn cell")
    if cfg.endpoint is None:
        ctx.warn_missing("endpoint", "nothing is placed at the endpoint cell")

    with LoggedOperation(logger, "maze carving"):
        MazeCarver(ctx.grid, rng).carve()

    verification = verify_perfect_maze(ctx.grid)
    if not verification["is_perfect"]:
        raise InvariantViolationError("spanning-tree", f"carved maze is not perfect: {verification}", stage="carve")

    with LoggedOperation(logger, "cell features"):
        features = place_cell_features(ctx)

    with LoggedOperation(logger, "patrol paths"):
        paths = plan_patrol_paths(ctx)

    with LoggedOperation(logger, "decorations"):
        decorations = place_decorations(ctx, features, paths)

    layout = LevelLayout(
        config=cfg,
        style=style,
        grid=ctx.grid,
        plan=assemble_plan(ctx, features, decorations),
        patrol_paths=paths,
        reserved_cells=ctx.reserved.freeze(),
        warnings=tuple(ctx.warnings),
        seed=seed,
    )

    log_generation_summary(logger, layout.summary(), time.perf_counter() - start_time)
    return layout


__all__ = ["LevelLayout", "generate_level"]
