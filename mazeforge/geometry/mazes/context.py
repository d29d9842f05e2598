"""Per-run generation state threaded through every pipeline stage."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from mazeforge.utils.maze_logging import get_logger, log_degenerate_input

from .patrol_paths import ReservedCells

if TYPE_CHECKING:
    import random

    from mazeforge.config import MazeGenerationConfig, StyleBundle

    from .grid import CellCoord, Grid

logger = get_logger(__name__)


@dataclass
class GenerationContext:
    """
    Everything one generation run owns.

    Created by :func:`mazeforge.generate_level`, handed to each stage and
    discarded once the layout is returned. Nothing here is shared between
    runs, so independent runs can proceed side by side.

    Attributes:
        config: Validated configuration
        style: Style bundle selected for this run
        grid: Maze grid (carved in place by the carver stage)
        rng: The run's single random stream
        reserved: Spawn cell plus claimed patrol-path cells
        warnings: Degenerate-input warnings collected during the run
    """

    config: MazeGenerationConfig
    style: StyleBundle
    grid: Grid
    rng: random.Random
    reserved: ReservedCells = field(init=False)
    warnings: list[str] = field(default_factory=list)

    def __post_init__(self):
        self.reserved = ReservedCells([self.spawn_cell])

    @property
    def spawn_cell(self) -> CellCoord:
        return self.config.spawn_cell

    @property
    def endpoint_cell(self) -> CellCoord:
        return self.config.endpoint_cell

    def warn_missing(self, category: str, consequence: str) -> None:
        """Record and log a non-fatal degenerate-input warning (once per category)."""
        message = f"{category}: {consequence}"
        if message in self.warnings:
            return
        self.warnings.append(message)
        log_degenerate_input(logger, category, consequence)
