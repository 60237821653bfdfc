"""Error taxonomy for the foraging engine."""

from __future__ import annotations


class ForagingError(Exception):
    """Base class for simulation errors."""


class PlacementError(ForagingError):
    """An agent or apple could not be placed on the grid.

    Raised at construction time; the simulation cannot start.
    """


class IllegalMoveError(ForagingError):
    """A move targeted an out-of-bounds or occupied cell.

    The planner checks occupancy before proposing a step, so this signals a
    planner bug rather than a recoverable condition.
    """
