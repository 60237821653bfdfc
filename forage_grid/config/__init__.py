"""Configuration layer: constants and typed config dataclasses."""

from forage_grid.config.constants import (
    COOPERATIVE_VALUE,
    FLUSH_THRESHOLD,
    GRID_COLUMNS,
    GRID_ROWS,
    MAX_BATCH_RUNS,
    MAX_PLACEMENT_ATTEMPTS,
    MAX_TURNS,
    MIN_COOPERATORS,
    NUM_AGENTS,
    NUM_RESOURCES,
    RESOURCE_VALUES,
    VISION_RADIUS,
)
from forage_grid.config.types import ForagingConfig, RunResult, SimulationStatus

__all__ = [
    "COOPERATIVE_VALUE",
    "FLUSH_THRESHOLD",
    "ForagingConfig",
    "GRID_COLUMNS",
    "GRID_ROWS",
    "MAX_BATCH_RUNS",
    "MAX_PLACEMENT_ATTEMPTS",
    "MAX_TURNS",
    "MIN_COOPERATORS",
    "NUM_AGENTS",
    "NUM_RESOURCES",
    "RESOURCE_VALUES",
    "RunResult",
    "SimulationStatus",
    "VISION_RADIUS",
]
