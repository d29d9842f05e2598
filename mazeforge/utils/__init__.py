"""Shared utilities: exceptions and logging."""

from .exceptions import (
    ConfigurationError,
    InvalidCoordinateError,
    InvariantViolationError,
    MazeGenerationError,
    validate_dimension,
    validate_parameter_value,
    validate_probability,
)
from .maze_logging import configure_logging, get_logger

__all__ = [
    "ConfigurationError",
    "InvalidCoordinateError",
    "InvariantViolationError",
    "MazeGenerationError",
    "configure_logging",
    "get_logger",
    "validate_dimension",
    "validate_parameter_value",
    "validate_probability",
]
