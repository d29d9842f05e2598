from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("mazeforge")  # Matches the name in pyproject.toml
except PackageNotFoundError:
    # package is not installed
    __version__ = "0.0.0-dev"

from .config import (  # noqa: E402
    LoggingConfig,
    MazeGenerationConfig,
    StyleBundle,
    create_default_config,
    load_generation_config,
)
from .generate_level import LevelLayout, generate_level  # noqa: E402
from .geometry.mazes import (  # noqa: E402
    Direction,
    Grid,
    PatrolPath,
    PlacementPlan,
    carve_maze,
    verify_perfect_maze,
)
from .utils.exceptions import (  # noqa: E402
    ConfigurationError,
    InvalidCoordinateError,
    InvariantViolationError,
    MazeGenerationError,
)
from .utils.maze_logging import configure_logging, get_logger  # noqa: E402

__all__ = [
    "ConfigurationError",
    "Direction",
    "Grid",
    "InvalidCoordinateError",
    "InvariantViolationError",
    "LevelLayout",
    "LoggingConfig",
    "MazeGenerationConfig",
    "MazeGenerationError",
    "PatrolPath",
    "PlacementPlan",
    "StyleBundle",
    "__version__",
    "carve_maze",
    "configure_logging",
    "create_default_config",
    "generate_level",
    "get_logger",
    "load_generation_config",
    "verify_perfect_maze",
]
