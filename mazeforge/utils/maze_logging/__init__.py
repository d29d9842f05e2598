"""
Logging utilities for mazeforge.

Usage:
    >>> from mazeforge.utils.maze_logging import get_logger, configure_logging
    >>> logger = get_logger(__name__)
    >>> configure_logging(level="DEBUG")
    >>> logger.info("Carving maze...")
"""

from __future__ import annotations

from .logger import (
    LoggedOperation,
    MazeFormatter,
    MazeLogger,
    configure_development_logging,
    configure_logging,
    get_logger,
    log_degenerate_input,
    log_generation_configuration,
    log_generation_summary,
)

__all__ = [
    "LoggedOperation",
    "MazeFormatter",
    "MazeLogger",
    "configure_development_logging",
    "configure_logging",
    "get_logger",
    "log_degenerate_input",
    "log_generation_configuration",
    "log_generation_summary",
]
