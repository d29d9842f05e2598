"""
YAML I/O for generation configurations.

YAML Format
-----------
width: 12
height: 8
collectible_spawn_chance: 0.2
enemy_path_spawn_chance: 0.15
style: forest
styles:
  - name: forest
    floor: [forest/moss, forest/dirt]
    north_wall: [forest/hedge_n]
    south_wall: [forest/hedge_s]
    east_wall: [forest/hedge_e]
    west_wall: [forest/hedge_w]
    decoration: [forest/mushroom]
logging:
  level: DEBUG
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import yaml

from mazeforge.utils.exceptions import ConfigurationError

if TYPE_CHECKING:
    from .core import MazeGenerationConfig


def load_generation_config(path: str | Path) -> MazeGenerationConfig:
    """
    Load generation configuration from a YAML file.

    Parameters
    ----------
    path : str | Path
        Path to YAML configuration file

    Returns
    -------
    MazeGenerationConfig
        Validated configuration

    Raises
    ------
    FileNotFoundError
        If configuration file doesn't exist
    ConfigurationError
        If configuration is invalid
    yaml.YAMLError
        If YAML syntax is invalid
    """
    from .core import validate_generation_config

    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"Invalid YAML syntax in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            parameter_name=str(path),
            provided_value=data,
            expected_type=dict,
            reason="top level of a configuration file must be a mapping",
        )

    return validate_generation_config(data)


def save_generation_config(config: MazeGenerationConfig, path: str | Path) -> None:
    """
    Save generation configuration to a YAML file.

    Parameters
    ----------
    config : MazeGenerationConfig
        Configuration to save
    path : str | Path
        Output file path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    config_dict = config.model_dump_yaml()

    with open(path, "w") as f:
        yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False, indent=2, allow_unicode=True)


def validate_yaml_config(path: str | Path) -> tuple[bool, str]:
    """
    Validate a YAML configuration file without keeping the result.

    Returns
    -------
    tuple[bool, str]
        (is_valid, message)
    """
    try:
        load_generation_config(path)
        return True, "Configuration is valid"
    except FileNotFoundError as e:
        return False, str(e)
    except yaml.YAMLError as e:
        return False, f"YAML syntax error: {e}"
    except ConfigurationError as e:
        return False, f"Validation error: {e}"
