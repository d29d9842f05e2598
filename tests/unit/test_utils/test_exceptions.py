#!/usr/bin/env python3
"""
Unit tests for mazeforge/utils/exceptions.py

Tests the exception hierarchy including:
- MazeGenerationError (base exception)
- ConfigurationError (invalid parameters)
- InvalidCoordinateError (cells outside the grid)
- InvariantViolationError (internal defects)
- Validation utilities
"""

import pytest

from mazeforge.utils.exceptions import (
    ConfigurationError,
    InvalidCoordinateError,
    InvariantViolationError,
    MazeGenerationError,
    validate_dimension,
    validate_parameter_value,
    validate_probability,
)

# =============================================================================
# Test MazeGenerationError (Base Exception)
# =============================================================================


@pytest.mark.unit
def test_maze_generation_error_basic():
    """Test basic MazeGenerationError creation."""
    error = MazeGenerationError("Test error message", stage="carve")

    assert str(error) == "[carve] Test error message"
    assert error.stage == "carve"


@pytest.mark.unit
def test_maze_generation_error_default_stage():
    error = MazeGenerationError("Something broke")
    assert error.stage == "generation"
    assert str(error).startswith("[generation]")


@pytest.mark.unit
def test_maze_generation_error_full_context():
    """Test MazeGenerationError with suggestion, code and diagnostics."""
    error = MazeGenerationError(
        "Error occurred",
        stage="placement",
        suggested_action="Lower the spawn chance",
        error_code="TEST_CODE",
        diagnostic_data={"cells": 12, "style": "crypt"},
    )

    error_str = str(error)
    assert "Suggestion: Lower the spawn chance" in error_str
    assert "Error Code: TEST_CODE" in error_str
    assert "Diagnostic Information:" in error_str
    assert "   - cells: 12" in error_str
    assert "   - style: crypt" in error_str


@pytest.mark.unit
def test_subclasses_share_base():
    for cls in (ConfigurationError, InvalidCoordinateError, InvariantViolationError):
        assert issubclass(cls, MazeGenerationError)


# =============================================================================
# Test ConfigurationError
# =============================================================================


@pytest.mark.unit
def test_configuration_error_range():
    error = ConfigurationError("width", 0, valid_range=(1, "inf"))

    assert error.parameter_name == "width"
    assert error.provided_value == 0
    assert error.stage == "configuration"
    assert error.error_code == "INVALID_CONFIGURATION"
    assert error.diagnostic_data["valid_range"] == "[1, inf]"
    assert "Invalid configuration for parameter 'width'" in str(error)


@pytest.mark.unit
def test_configuration_error_type_suggestion():
    error = ConfigurationError("height", "ten", expected_type=int)

    assert error.suggested_action == "Convert height to int"
    assert error.diagnostic_data["provided_type"] == "str"


@pytest.mark.unit
@pytest.mark.parametrize(
    ("value", "fragment"),
    [(-0.5, "Increase"), (1.5, "Decrease")],
)
def test_configuration_error_bound_suggestion(value, fragment):
    error = ConfigurationError("breakable_wall_chance", value, valid_range=(0.0, 1.0))
    assert fragment in error.suggested_action


@pytest.mark.unit
def test_configuration_error_reason():
    error = ConfigurationError("styles", [], reason="at least one style bundle is required")

    assert error.diagnostic_data["reason"] == "at least one style bundle is required"
    assert "StyleBundle" in error.suggested_action


# =============================================================================
# Test InvalidCoordinateError / InvariantViolationError
# =============================================================================


@pytest.mark.unit
def test_invalid_coordinate_error():
    error = InvalidCoordinateError((5, 1), 4, 3)

    assert error.coordinate == (5, 1)
    assert error.error_code == "INVALID_COORDINATE"
    assert "outside the 4x3 grid" in str(error)
    assert "0 <= x < 4" in str(error)


@pytest.mark.unit
def test_invalid_coordinate_error_reason():
    error = InvalidCoordinateError((2, 2), 4, 4, reason="Cells (0, 0) and (2, 2) are not adjacent")
    assert "not adjacent" in str(error)


@pytest.mark.unit
def test_invariant_violation_error():
    error = InvariantViolationError("wall-symmetry", "cells disagree", stage="grid")

    assert error.invariant == "wall-symmetry"
    assert error.error_code == "INVARIANT_VIOLATION"
    assert "Invariant 'wall-symmetry' violated: cells disagree" in str(error)
    assert str(error).startswith("[grid]")


# =============================================================================
# Test Validation Utilities
# =============================================================================


@pytest.mark.unit
def test_validate_parameter_value_accepts_valid():
    validate_parameter_value(0.5, "chance", expected_type=float, valid_range=(0.0, 1.0))


@pytest.mark.unit
def test_validate_parameter_value_rejects_type():
    with pytest.raises(ConfigurationError):
        validate_parameter_value("0.5", "chance", expected_type=float)


@pytest.mark.unit
def test_validate_parameter_value_rejects_range():
    with pytest.raises(ConfigurationError):
        validate_parameter_value(2.0, "chance", valid_range=(0.0, 1.0))


@pytest.mark.unit
def test_validate_probability():
    assert validate_probability(1, "chance") == 1.0
    assert validate_probability(0.25, "chance") == 0.25
    with pytest.raises(ConfigurationError):
        validate_probability(True, "chance")
    with pytest.raises(ConfigurationError):
        validate_probability(-0.1, "chance")


@pytest.mark.unit
@pytest.mark.parametrize("value", [0, -1, 1.0, "3", None, False])
def test_validate_dimension_rejects(value):
    with pytest.raises(ConfigurationError):
        validate_dimension(value, "width")


@pytest.mark.unit
def test_validate_dimension_accepts():
    assert validate_dimension(1, "width") == 1
    assert validate_dimension(40, "height") == 40
