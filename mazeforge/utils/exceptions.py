"""
Exception classes for mazeforge with helpful error messages and user guidance.

Error taxonomy:
- ConfigurationError: invalid generation parameters, raised before any
  generation work starts
- InvalidCoordinateError: out-of-bounds or non-adjacent cell references
- InvariantViolationError: an internal defect (inconsistent walls, a cell
  claimed twice, a carve result that is not a perfect maze). Never handled
  inside the pipeline.
"""

from __future__ import annotations

from typing import Any


class MazeGenerationError(Exception):
    """
    Base exception for maze generation errors with context and suggestions.

    Provides structured error information including:
    - Clear error description
    - Pipeline stage the error came from
    - Suggested actions for resolution
    - Optional diagnostic data
    """

    def __init__(
        self,
        message: str,
        stage: str | None = None,
        suggested_action: str | None = None,
        error_code: str | None = None,
        diagnostic_data: dict[str, Any] | None = None,
    ):
        self.stage = stage or "generation"
        self.suggested_action = suggested_action
        self.error_code = error_code
        self.diagnostic_data = diagnostic_data or {}

        full_message = f"[{self.stage}] {message}"

        if self.suggested_action:
            full_message += f"\nSuggestion: {self.suggested_action}"

        if self.error_code:
            full_message += f"\nError Code: {self.error_code}"

        if self.diagnostic_data:
            full_message += "\nDiagnostic Information:"
            for key, value in self.diagnostic_data.items():
                full_message += f"\n   - {key}: {value}"

        super().__init__(full_message)


class ConfigurationError(MazeGenerationError):
    """Exception raised when generation configuration is invalid."""

    def __init__(
        self,
        parameter_name: str,
        provided_value: Any,
        expected_type: type | None = None,
        valid_range: tuple | None = None,
        reason: str | None = None,
        stage: str | None = None,
    ):
        self.parameter_name = parameter_name
        self.provided_value = provided_value

        diagnostic_data = {
            "parameter": parameter_name,
            "provided_value": str(provided_value),
            "provided_type": type(provided_value).__name__,
        }

        if expected_type:
            diagnostic_data["expected_type"] = expected_type.__name__

        if valid_range:
            diagnostic_data["valid_range"] = f"[{valid_range[0]}, {valid_range[1]}]"

        if reason:
            diagnostic_data["reason"] = reason

        suggested_action = _generate_configuration_suggestions(
            parameter_name, provided_value, expected_type, valid_range
        )

        super().__init__(
            message=f"Invalid configuration for parameter '{parameter_name}'",
            stage=stage or "configuration",
            suggested_action=suggested_action,
            error_code="INVALID_CONFIGURATION",
            diagnostic_data=diagnostic_data,
        )


class InvalidCoordinateError(MazeGenerationError):
    """Exception raised when a cell reference falls outside the grid."""

    def __init__(
        self,
        coordinate: tuple[int, int] | Any,
        width: int,
        height: int,
        reason: str | None = None,
    ):
        self.coordinate = coordinate

        super().__init__(
            message=reason or f"Coordinate {coordinate} is outside the {width}x{height} grid",
            stage="grid",
            suggested_action=f"Use 0 <= x < {width} and 0 <= y < {height}",
            error_code="INVALID_COORDINATE",
            diagnostic_data={"coordinate": coordinate, "grid_size": f"{width}x{height}"},
        )


class InvariantViolationError(MazeGenerationError):
    """
    Exception raised when an internal invariant is broken.

    This signals a defect in the generator, not a recoverable runtime
    condition. Callers should not catch it to retry.
    """

    def __init__(
        self,
        invariant: str,
        details: str,
        stage: str | None = None,
        diagnostic_data: dict[str, Any] | None = None,
    ):
        self.invariant = invariant

        super().__init__(
            message=f"Invariant '{invariant}' violated: {details}",
            stage=stage,
            suggested_action="Report this as a bug together with the seed and configuration",
            error_code="INVARIANT_VIOLATION",
            diagnostic_data=diagnostic_data,
        )


def _generate_configuration_suggestions(
    param_name: str,
    value: Any,
    expected_type: type | None,
    valid_range: tuple | None,
) -> str:
    """Generate specific suggestions for configuration errors."""
    if expected_type and not isinstance(value, expected_type):
        return f"Convert {param_name} to {expected_type.__name__}"

    if valid_range and isinstance(value, (int, float)):
        min_val, max_val = valid_range
        if value < min_val:
            return f"Increase {param_name} to at least {min_val}"
        if value > max_val:
            return f"Decrease {param_name} to at most {max_val}"

    if "chance" in param_name.lower():
        return "Spawn chances are probabilities: use a value between 0.0 and 1.0"
    if param_name in ("width", "height"):
        return "Grid dimensions must be positive integers"
    if "style" in param_name.lower():
        return "Add at least one StyleBundle to 'styles' and reference it by name"

    return f"Check the documentation for valid {param_name} values"


# Validation utilities


def validate_parameter_value(
    value: Any,
    parameter_name: str,
    expected_type: type | tuple[type, ...] | None = None,
    valid_range: tuple | None = None,
):
    """Validate parameter value and type."""
    if expected_type and (isinstance(value, bool) or not isinstance(value, expected_type)):
        raise ConfigurationError(
            parameter_name=parameter_name,
            provided_value=value,
            expected_type=expected_type if isinstance(expected_type, type) else expected_type[0],
        )

    if valid_range and isinstance(value, (int, float)):
        if not (valid_range[0] <= value <= valid_range[1]):
            raise ConfigurationError(
                parameter_name=parameter_name,
                provided_value=value,
                valid_range=valid_range,
            )


def validate_probability(value: Any, parameter_name: str) -> float:
    """Validate that ``value`` is a probability in [0, 1]."""
    validate_parameter_value(value, parameter_name, expected_type=(int, float), valid_range=(0.0, 1.0))
    return float(value)


def validate_dimension(value: Any, parameter_name: str) -> int:
    """Validate that ``value`` is a positive integer grid dimension."""
    validate_parameter_value(value, parameter_name, expected_type=int)
    if value < 1:
        raise ConfigurationError(
            parameter_name=parameter_name,
            provided_value=value,
            valid_range=(1, "inf"),
        )
    return value
