"""Turn-based multi-agent foraging on a bounded grid."""

from forage_grid.config.types import ForagingConfig, RunResult, SimulationStatus
from forage_grid.domain.errors import ForagingError, IllegalMoveError, PlacementError
from forage_grid.simulation.engine import ForagingSimulation, GridSnapshot, TurnReport

__all__ = [
    "ForagingConfig",
    "ForagingError",
    "ForagingSimulation",
    "GridSnapshot",
    "IllegalMoveError",
    "PlacementError",
    "RunResult",
    "SimulationStatus",
    "TurnReport",
]
