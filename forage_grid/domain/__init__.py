"""Domain layer: grid world, vision, movement, collection and scoring."""

from forage_grid.domain.collection import CollectionEvent, CollectionResolver
from forage_grid.domain.errors import ForagingError, IllegalMoveError, PlacementError
from forage_grid.domain.grid_world import Agent, GridWorld, Position, Resource
from forage_grid.domain.ledger import ScoreLedger
from forage_grid.domain.movement import (
    Direction,
    MoveDecision,
    MovementPlanner,
    MoveMode,
    manhattan,
)
from forage_grid.domain.visibility import VisibilityField, chebyshev

__all__ = [
    "Agent",
    "CollectionEvent",
    "CollectionResolver",
    "Direction",
    "ForagingError",
    "GridWorld",
    "IllegalMoveError",
    "MoveDecision",
    "MoveMode",
    "MovementPlanner",
    "PlacementError",
    "Position",
    "Resource",
    "ScoreLedger",
    "VisibilityField",
    "chebyshev",
    "manhattan",
]
