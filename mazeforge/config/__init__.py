"""
Configuration management for mazeforge.

Quick Start
-----------
>>> from mazeforge.config import MazeGenerationConfig, StyleBundle
>>> config = MazeGenerationConfig(
...     width=12,
...     height=8,
...     styles=[StyleBundle(name="crypt", floor=["crypt/flagstone"])],
... )

>>> # Or load from YAML
>>> from mazeforge.config import load_generation_config
>>> config = load_generation_config("levels/crypt.yaml")
"""

from .core import (
    LoggingConfig,
    MazeGenerationConfig,
    StyleBundle,
    create_debug_config,
    create_default_config,
    create_dense_config,
    default_style,
    validate_generation_config,
)
from .io import load_generation_config, save_generation_config, validate_yaml_config

__all__ = [
    "LoggingConfig",
    "MazeGenerationConfig",
    "StyleBundle",
    "create_debug_config",
    "create_default_config",
    "create_dense_config",
    "default_style",
    "load_generation_config",
    "save_generation_config",
    "validate_generation_config",
    "validate_yaml_config",
]
