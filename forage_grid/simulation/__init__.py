"""Simulation layer: turn controller and Parquet log persistence."""

from forage_grid.simulation.engine import (
    AgentTurn,
    ForagingSimulation,
    GridSnapshot,
    TurnReport,
)
from forage_grid.simulation.persistence import (
    append_turn_rows,
    flush_columns,
    new_collection_columns,
    new_turn_columns,
)

__all__ = [
    "AgentTurn",
    "ForagingSimulation",
    "GridSnapshot",
    "TurnReport",
    "append_turn_rows",
    "flush_columns",
    "new_collection_columns",
    "new_turn_columns",
]
