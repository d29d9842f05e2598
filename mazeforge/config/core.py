"""
Core generation configuration classes.

Configurations specify the parameters of a generation run (grid size, spawn
chances, available asset styles). They are validated up front: an invalid
configuration is rejected before any maze work starts.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from mazeforge.utils.exceptions import ConfigurationError

if TYPE_CHECKING:
    import random
    from pathlib import Path

    from mazeforge.geometry.mazes.grid import Direction


class StyleBundle(BaseModel):
    """
    One visual theme: the asset keys available per feature category.

    Asset keys are opaque to the generator. Only the number of keys matters
    (an empty category disables that feature) and which key gets picked.

    Attributes
    ----------
    name : str
        Identity of the style, handed on to the presentation layer
    floor : list[str]
        Floor tile variants
    north_wall, south_wall, east_wall, west_wall : list[str]
        Wall variants per side
    decoration : list[str]
        Decoration variants
    """

    name: str = Field(min_length=1)
    floor: list[str] = Field(default_factory=list)
    north_wall: list[str] = Field(default_factory=list)
    south_wall: list[str] = Field(default_factory=list)
    east_wall: list[str] = Field(default_factory=list)
    west_wall: list[str] = Field(default_factory=list)
    decoration: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def wall_assets(self, direction: Direction) -> list[str]:
        return getattr(self, f"{direction.name.lower()}_wall")

    def empty_categories(self) -> list[str]:
        categories = ("floor", "north_wall", "south_wall", "east_wall", "west_wall", "decoration")
        return [name for name in categories if not getattr(self, name)]


def default_style(name: str = "default") -> StyleBundle:
    """A style with one asset key per category."""
    return StyleBundle(
        name=name,
        floor=[f"{name}/floor"],
        north_wall=[f"{name}/wall_north"],
        south_wall=[f"{name}/wall_south"],
        east_wall=[f"{name}/wall_east"],
        west_wall=[f"{name}/wall_west"],
        decoration=[f"{name}/decoration"],
    )


class LoggingConfig(BaseModel):
    """
    Configuration for logging.

    Attributes
    ----------
    level : Literal["DEBUG", "INFO", "WARNING", "ERROR"]
        Logging level (default: INFO)
    use_colors : bool
        Colored console output (default: True)
    include_location : bool
        Append file:line to each record (default: False)
    log_to_file : bool
        Also write records to a file (default: False)
    log_file_path : str | None
        File to write to; a timestamped file under ./logs when omitted
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    use_colors: bool = True
    include_location: bool = False
    log_to_file: bool = False
    log_file_path: str | None = None

    @model_validator(mode="after")
    def validate_log_file(self) -> LoggingConfig:
        if self.log_file_path is not None and not self.log_to_file:
            raise ValueError("log_file_path is only used when log_to_file is True")
        return self


class MazeGenerationConfig(BaseModel):
    """
    Parameters of one maze generation run.

    Attributes
    ----------
    width, height : int
        Grid dimensions in cells (>= 1)
    cell_size : float
        World units per cell, for converting grid to world positions
    collectible_spawn_chance : float
        Per-cell probability of a collectible
    decoration_spawn_chance : float
        Per-cell probability of a decoration
    breakable_wall_chance : float
        Per-wall probability that an eligible wall is breakable
    enemy_path_spawn_chance : float
        Per-cell probability of attempting a patrol path from that cell
    decoration_edge_offset : float
        Fraction of ``cell_size`` a decoration sits in from its wall
    styles : list[StyleBundle]
        Available visual themes (at least one)
    style : str | None
        Name of the style to use; drawn from the random stream when None
    collectibles : list[str]
        Collectible variants (empty disables collectibles)
    patrol_agent, player, endpoint : str | None
        Markers placed at path starts, the spawn cell and the endpoint cell
    seed : int | None
        Seed for the run's random stream
    logging : LoggingConfig
        Logging configuration

    Examples
    --------
    >>> config = MazeGenerationConfig(width=12, height=8, seed=7)
    >>> config = MazeGenerationConfig.from_yaml("levels/forest.yaml")
    """

    width: int = Field(default=10, ge=1, strict=True)
    height: int = Field(default=10, ge=1, strict=True)
    cell_size: float = Field(default=1.0, gt=0)

    collectible_spawn_chance: float = Field(default=0.2, ge=0.0, le=1.0)
    decoration_spawn_chance: float = Field(default=0.1, ge=0.0, le=1.0)
    breakable_wall_chance: float = Field(default=0.3, ge=0.0, le=1.0)
    enemy_path_spawn_chance: float = Field(default=0.1, ge=0.0, le=1.0)
    decoration_edge_offset: float = Field(default=0.1, ge=0.0, le=0.5)

    styles: list[StyleBundle] = Field(default_factory=lambda: [default_style()])
    style: str | None = None

    collectibles: list[str] = Field(default_factory=lambda: ["collectible"])
    patrol_agent: str | None = "patrol_agent"
    player: str | None = "player"
    endpoint: str | None = "endpoint"

    seed: int | None = None
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    @field_validator("styles")
    @classmethod
    def validate_styles(cls, v: list[StyleBundle]) -> list[StyleBundle]:
        if not v:
            raise ValueError("at least one style bundle is required")
        names = [style.name for style in v]
        if len(set(names)) != len(names):
            raise ValueError(f"style names must be unique, got {names}")
        return v

    @model_validator(mode="after")
    def validate_selected_style(self) -> MazeGenerationConfig:
        if self.style is not None and self.style not in self.style_names:
            raise ValueError(f"style '{self.style}' is not one of {self.style_names}")
        return self

    @property
    def style_names(self) -> list[str]:
        return [style.name for style in self.styles]

    @property
    def spawn_cell(self) -> tuple[int, int]:
        return (0, 0)

    @property
    def endpoint_cell(self) -> tuple[int, int]:
        return (self.width - 1, self.height - 1)

    def select_style(self, rng: random.Random) -> StyleBundle:
        """
        Resolve the style for a run.

        A named style is returned without consuming a draw; otherwise one
        bundle is drawn uniformly from ``styles``.
        """
        if self.style is not None:
            return next(s for s in self.styles if s.name == self.style)
        return self.styles[rng.randrange(len(self.styles))]

    def to_yaml(self, path: str | Path) -> None:
        """Save configuration to a YAML file."""
        from .io import save_generation_config

        save_generation_config(self, path)

    @classmethod
    def from_yaml(cls, path: str | Path) -> MazeGenerationConfig:
        """Load and validate configuration from a YAML file."""
        from .io import load_generation_config

        return load_generation_config(path)

    def model_dump_yaml(self) -> dict:
        """Dump configuration as a dictionary suitable for YAML serialization."""
        return self.model_dump(exclude_none=True, mode="json")


def validate_generation_config(config: MazeGenerationConfig | dict[str, Any] | None = None, **overrides):
    """
    Validate generation parameters and return a fresh config.

    Accepts a config instance, a plain mapping (e.g. loaded from YAML) or
    keyword overrides. Instances are re-validated so values smuggled in with
    ``model_construct`` are caught as well.

    Raises:
        ConfigurationError: For the first invalid parameter
    """
    if config is None:
        data: dict[str, Any] = {}
    elif isinstance(config, MazeGenerationConfig):
        data = config.model_dump()
    else:
        data = dict(config)
    data.update(overrides)

    try:
        return MazeGenerationConfig.model_validate(data)
    except ValidationError as e:
        error = e.errors()[0]
        location = ".".join(str(part) for part in error["loc"]) or "config"
        raise ConfigurationError(
            parameter_name=location,
            provided_value=error.get("input"),
            reason=error["msg"],
        ) from e


# Presets


def create_default_config(width: int = 10, height: int = 10, **kwargs) -> MazeGenerationConfig:
    """Configuration with the standard spawn chances."""
    return MazeGenerationConfig(width=width, height=height, **kwargs)


def create_debug_config(seed: int = 0) -> MazeGenerationConfig:
    """Small seeded grid with DEBUG logging, for inspecting a run step by step."""
    return MazeGenerationConfig(
        width=5,
        height=5,
        seed=seed,
        logging=LoggingConfig(level="DEBUG", include_location=True),
    )


def create_dense_config(width: int = 10, height: int = 10, **kwargs) -> MazeGenerationConfig:
    """High spawn chances: crowded levels with many patrols."""
    return MazeGenerationConfig(
        width=width,
        height=height,
        collectible_spawn_chance=0.5,
        decoration_spawn_chance=0.5,
        breakable_wall_chance=0.6,
        enemy_path_spawn_chance=0.5,
        **kwargs,
    )
