"""Centralized domain constants for foraging simulations.

All magic numbers that appear across multiple modules are defined here.
Consuming modules should import from this module rather than defining
their own inline literals.
"""

from __future__ import annotations

GRID_COLUMNS = 12
"""Default grid width in cells."""

GRID_ROWS = 8
"""Default grid height in cells."""

NUM_AGENTS = 3
"""Default number of agents per simulation."""

NUM_RESOURCES = 8
"""Default number of apples placed at simulation start."""

VISION_RADIUS = 2
"""Default Chebyshev vision radius (a 5x5 window)."""

RESOURCE_VALUES: tuple[int, ...] = (1, 2, 3)
"""Values an apple can carry; drawn uniformly at placement."""

COOPERATIVE_VALUE = 3
"""Apples worth at least this much need several adjacent agents to collect."""

MIN_COOPERATORS = 2
"""Adjacent agents required before a cooperative apple is collected."""

MAX_PLACEMENT_ATTEMPTS = 10_000
"""Random draws allowed per placed occupant before giving up."""

MAX_TURNS = 500
"""Default turn cap for batch runs; greedy agents can stall forever."""

FLUSH_THRESHOLD = 8_192
"""Flush turn log rows to Parquet once this in-memory row count is reached."""

MAX_BATCH_RUNS = 100_000
"""Safety cap on the number of simulations in one batch."""
