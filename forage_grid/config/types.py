"""Configuration dataclasses and result containers for foraging runs.

All frozen dataclasses that parameterise a single simulation or a seeded
batch of simulations live here.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from forage_grid.config.constants import (
    GRID_COLUMNS,
    GRID_ROWS,
    MAX_PLACEMENT_ATTEMPTS,
    MAX_TURNS,
    NUM_AGENTS,
    NUM_RESOURCES,
    VISION_RADIUS,
)

__all__ = [
    "ForagingConfig",
    "RunResult",
    "SimulationStatus",
]

# ---------------------------------------------------------------------------
# Result container
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RunResult:
    """Top-level result for one seeded simulation run."""

    run_id: str
    seed: int
    finished: bool
    turns: int
    scores: tuple[int, ...]
    initial_value: int
    collected_value: int
    n_collections: int
    n_cooperative: int

    @property
    def total_credited(self) -> int:
        return sum(self.scores)


# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------


class SimulationStatus(Enum):
    """Lifecycle of one simulation; FINISHED is terminal."""

    RUNNING = "running"
    FINISHED = "finished"


@dataclass(frozen=True)
class ForagingConfig:
    """Parameters fixed at simulation construction."""

    columns: int = GRID_COLUMNS
    rows: int = GRID_ROWS
    num_agents: int = NUM_AGENTS
    num_resources: int = NUM_RESOURCES
    vision_radius: int | None = VISION_RADIUS
    """Chebyshev vision radius; ``None`` lets every agent see the whole board."""
    exploration: bool = True
    """Explore toward unseen cells when no apple is visible (otherwise idle)."""
    seed: int = 0
    max_placement_attempts: int = MAX_PLACEMENT_ATTEMPTS
    max_turns: int = MAX_TURNS

    def __post_init__(self) -> None:
        if self.columns < 1 or self.rows < 1:
            raise ValueError("grid dimensions must be >= 1")
        if self.num_agents < 1:
            raise ValueError("num_agents must be >= 1")
        if self.num_resources < 0:
            raise ValueError("num_resources must be >= 0")
        if self.num_agents + self.num_resources > self.columns * self.rows:
            raise ValueError("num_agents + num_resources cannot exceed grid cells")
        if self.vision_radius is not None and self.vision_radius < 0:
            raise ValueError("vision_radius must be >= 0 or None")
        if self.max_placement_attempts < 1:
            raise ValueError("max_placement_attempts must be >= 1")
        if self.max_turns < 1:
            raise ValueError("max_turns must be >= 1")

    @property
    def cell_count(self) -> int:
        return self.columns * self.rows
