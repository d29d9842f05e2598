"""
Pytest configuration and shared fixtures for the mazeforge test suite.

This module provides common fixtures, test configuration, and utilities
used across the entire test suite.
"""

import random

import pytest

from mazeforge.config import MazeGenerationConfig, StyleBundle
from mazeforge.geometry.mazes import GenerationContext, Grid, MazeCarver

# =============================================================================
# Test Configuration
# =============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests (full generation runs)")
    config.addinivalue_line("markers", "property: Property-based tests (hypothesis)")
    config.addinivalue_line("markers", "slow: Slow tests (may take >10 seconds)")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on test paths."""
    for item in items:
        test_path = str(item.fspath)

        if "/unit/" in test_path:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
        elif "/property_based/" in test_path:
            item.add_marker(pytest.mark.property)

        if "large" in item.name or "slow" in item.name:
            item.add_marker(pytest.mark.slow)


# =============================================================================
# Random Streams
# =============================================================================


class ScriptedRandom(random.Random):
    """
    Random stream whose ``random()`` results are scripted.

    ``random()`` pops from ``values`` (falling back to ``default`` once the
    script runs out). ``choice`` picks ``choices`` entries by index, falling
    back to the first candidate. ``randrange`` always returns 0.
    """

    def __init__(self, values=(), choices=(), default=0.99):
        super().__init__(0)
        self.values = list(values)
        self.choices = list(choices)
        self.default = default
        self.random_calls = 0
        self.choice_calls = 0

    def random(self):
        self.random_calls += 1
        if self.values:
            return self.values.pop(0)
        return self.default

    def choice(self, seq):
        self.choice_calls += 1
        if self.choices:
            return seq[self.choices.pop(0)]
        return seq[0]

    def randrange(self, *args, **kwargs):
        return 0


@pytest.fixture
def seeded_rng():
    """Deterministic random stream."""
    return random.Random(12345)


@pytest.fixture
def scripted_rng():
    """Factory for scripted random streams."""
    return ScriptedRandom


# =============================================================================
# Grids
# =============================================================================


@pytest.fixture
def carved_grid():
    """10x8 perfect maze carved from a fixed seed."""
    return MazeCarver(Grid(10, 8), random.Random(7)).carve()


@pytest.fixture
def corridor_grid():
    """4x1 grid with every interior wall removed: one straight corridor."""
    grid = Grid(4, 1)
    for x in range(3):
        grid.remove_wall((x, 0), (x + 1, 0))
    return grid


# =============================================================================
# Configurations
# =============================================================================


@pytest.fixture
def small_config():
    """Small seeded configuration with quiet logging."""
    return MazeGenerationConfig(width=6, height=5, seed=3, logging={"level": "WARNING", "use_colors": False})


@pytest.fixture
def bare_style():
    """Style with no assets in any category."""
    return StyleBundle(name="bare")


@pytest.fixture
def make_context():
    """Build a GenerationContext around an existing grid."""

    def _make(grid, rng, style=None, **overrides):
        params = {"width": grid.width, "height": grid.height, "logging": {"level": "WARNING", "use_colors": False}}
        params.update(overrides)
        config = MazeGenerationConfig(**params)
        return GenerationContext(config=config, style=style or config.styles[0], grid=grid, rng=rng)

    return _make
