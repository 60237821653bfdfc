"""Rectangular grid world holding agents and apples.

Occupancy invariant: a cell holds at most one agent and at most one apple.
Both kinds are indexed by per-cell id arrays so every lookup is O(1); the
arrays are the single source of truth for whether a cell is free.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from random import Random
from typing import TYPE_CHECKING

import numpy as np

from forage_grid.config.constants import RESOURCE_VALUES
from forage_grid.domain.errors import IllegalMoveError, PlacementError

if TYPE_CHECKING:
    from forage_grid.config.types import ForagingConfig

Position = tuple[int, int]
"""Cell coordinate as (row, col), origin top-left."""

EMPTY = -1
"""Sentinel stored in the id arrays for an unoccupied cell."""

# Codes used by occupancy_array()
CELL_EMPTY = 0
CELL_AGENT = 1
CELL_RESOURCE = 2
CELL_AGENT_AND_RESOURCE = 3


@dataclass
class Agent:
    """A forager; score lives in the ledger, not here."""

    agent_id: int
    row: int
    col: int

    @property
    def position(self) -> Position:
        return (self.row, self.col)


@dataclass(frozen=True)
class Resource:
    """An apple worth 1, 2 or 3 points."""

    resource_id: int
    row: int
    col: int
    value: int

    @property
    def position(self) -> Position:
        return (self.row, self.col)


@dataclass(eq=False)
class GridWorld:
    """Bounded (non-toroidal) grid with agent and apple occupancy."""

    columns: int
    rows: int
    agents: list[Agent] = field(default_factory=list, init=False)  # placement order == turn order
    initial_value: int = field(default=0, init=False)
    _resources: dict[int, Resource] = field(default_factory=dict, init=False, repr=False)
    _removed_ids: set[int] = field(default_factory=set, init=False, repr=False)
    _agent_index: np.ndarray = field(init=False, repr=False)
    _resource_index: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.columns < 1 or self.rows < 1:
            raise ValueError("grid dimensions must be >= 1")
        self._agent_index = np.full((self.rows, self.columns), EMPTY, dtype=np.int64)
        self._resource_index = np.full((self.rows, self.columns), EMPTY, dtype=np.int64)

    @classmethod
    def create(cls, config: ForagingConfig, rng: Random) -> GridWorld:
        """Randomly place agents, then apples, on free cells.

        Each occupant gets at most ``config.max_placement_attempts`` draws.
        """
        world = cls(columns=config.columns, rows=config.rows)
        for _ in range(config.num_agents):
            pos = world._sample_free_position(rng, config.max_placement_attempts)
            world.place_agent(pos)
        for _ in range(config.num_resources):
            pos = world._sample_free_position(rng, config.max_placement_attempts)
            world.place_resource(pos, rng.choice(RESOURCE_VALUES))
        return world

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    @property
    def cell_count(self) -> int:
        return self.columns * self.rows

    def in_bounds(self, pos: Position) -> bool:
        row, col = pos
        return 0 <= row < self.rows and 0 <= col < self.columns

    def index_of(self, pos: Position) -> int:
        """Linear cell index ``row * columns + col``."""
        return pos[0] * self.columns + pos[1]

    def position_of(self, index: int) -> Position:
        if not 0 <= index < self.cell_count:
            raise ValueError(f"cell index out of range: {index}")
        return divmod(index, self.columns)

    def orthogonal_neighbors(self, pos: Position) -> list[Position]:
        """In-bounds right, left, down, up neighbours of *pos*."""
        row, col = pos
        candidates = [(row, col + 1), (row, col - 1), (row + 1, col), (row - 1, col)]
        return [cell for cell in candidates if self.in_bounds(cell)]

    # ------------------------------------------------------------------
    # Occupancy queries
    # ------------------------------------------------------------------

    def is_occupied_by_agent(self, pos: Position) -> bool:
        return self.in_bounds(pos) and bool(self._agent_index[pos] != EMPTY)

    def is_occupied_by_resource(self, pos: Position) -> bool:
        return self.in_bounds(pos) and bool(self._resource_index[pos] != EMPTY)

    def is_free(self, pos: Position) -> bool:
        """True when *pos* is in bounds and holds neither an agent nor an apple."""
        return (
            self.in_bounds(pos)
            and not self.is_occupied_by_agent(pos)
            and not self.is_occupied_by_resource(pos)
        )

    def agent_at(self, pos: Position) -> Agent | None:
        if not self.is_occupied_by_agent(pos):
            return None
        return self.agents[int(self._agent_index[pos])]

    def resource_at(self, pos: Position) -> Resource | None:
        if not self.is_occupied_by_resource(pos):
            return None
        return self._resources[int(self._resource_index[pos])]

    def agent(self, agent_id: int) -> Agent:
        if not 0 <= agent_id < len(self.agents):
            raise KeyError(f"unknown agent: {agent_id}")
        return self.agents[agent_id]

    @property
    def resources(self) -> list[Resource]:
        """Remaining apples in row-major cell order."""
        return list(self.iter_resources())

    def iter_resources(self) -> Iterator[Resource]:
        for index in np.flatnonzero(self._resource_index.ravel() != EMPTY):
            yield self._resources[int(self._resource_index.flat[index])]

    @property
    def resource_count(self) -> int:
        return len(self._resources)

    def remaining_value(self) -> int:
        return sum(resource.value for resource in self._resources.values())

    def agents_adjacent_to(self, pos: Position) -> list[Agent]:
        """Agents orthogonally adjacent to *pos*, in placement order."""
        ids = sorted(
            int(self._agent_index[cell])
            for cell in self.orthogonal_neighbors(pos)
            if self._agent_index[cell] != EMPTY
        )
        return [self.agents[agent_id] for agent_id in ids]

    def occupancy_array(self) -> np.ndarray:
        """Return (rows, columns) int array of CELL_* codes for renderers."""
        agents = (self._agent_index != EMPTY).astype(np.int64) * CELL_AGENT
        resources = (self._resource_index != EMPTY).astype(np.int64) * CELL_RESOURCE
        return agents + resources

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def place_agent(self, pos: Position) -> Agent:
        if not self.in_bounds(pos):
            raise PlacementError(f"agent position out of bounds: {pos}")
        if self.is_occupied_by_agent(pos):
            raise PlacementError(f"cell already holds an agent: {pos}")
        agent = Agent(agent_id=len(self.agents), row=pos[0], col=pos[1])
        self.agents.append(agent)
        self._agent_index[pos] = agent.agent_id
        return agent

    def place_resource(self, pos: Position, value: int) -> Resource:
        if not self.in_bounds(pos):
            raise PlacementError(f"apple position out of bounds: {pos}")
        if self.is_occupied_by_resource(pos):
            raise PlacementError(f"cell already holds an apple: {pos}")
        if value not in RESOURCE_VALUES:
            raise PlacementError(f"apple value must be one of {RESOURCE_VALUES}, got {value}")
        # Removed ids are never reused
        resource_id = len(self._resources) + len(self._removed_ids)
        resource = Resource(resource_id=resource_id, row=pos[0], col=pos[1], value=value)
        self._resources[resource_id] = resource
        self._resource_index[pos] = resource_id
        self.initial_value += value
        return resource

    def move_agent(self, agent_id: int, new_pos: Position) -> None:
        try:
            agent = self.agent(agent_id)
        except KeyError as exc:
            raise IllegalMoveError(str(exc)) from exc
        if not self.in_bounds(new_pos):
            raise IllegalMoveError(f"agent {agent_id} cannot leave the grid: {new_pos}")
        if self.is_occupied_by_agent(new_pos) or self.is_occupied_by_resource(new_pos):
            raise IllegalMoveError(f"agent {agent_id} cannot enter occupied cell {new_pos}")
        self._agent_index[agent.position] = EMPTY
        agent.row, agent.col = new_pos
        self._agent_index[new_pos] = agent_id

    def remove_resource(self, pos: Position) -> Resource:
        resource = self.resource_at(pos)
        if resource is None:
            raise LookupError(f"no apple at {pos}")
        del self._resources[resource.resource_id]
        self._removed_ids.add(resource.resource_id)
        self._resource_index[pos] = EMPTY
        return resource

    def _sample_free_position(self, rng: Random, max_attempts: int) -> Position:
        """Rejection-sample a free cell within *max_attempts* draws."""
        for _ in range(max_attempts):
            pos = self.position_of(rng.randrange(self.cell_count))
            if self.is_free(pos):
                return pos
        raise PlacementError(f"no free cell found after {max_attempts} attempts")
