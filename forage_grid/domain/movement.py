"""Greedy single-step movement planning.

Each agent either pursues the nearest visible apple (Manhattan distance,
one greedy step, no look-ahead) or, when no apple is in view, explores by
stepping toward the most unseen cells. Planning reads live occupancy, so an
agent sees the moves already made by earlier agents in the same turn.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from random import Random

from forage_grid.domain.grid_world import Agent, GridWorld, Position, Resource
from forage_grid.domain.visibility import VisibilityField


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


MOVE_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}
"""Candidate order matters: ties in pursuit go to the earliest direction."""


class MoveMode(Enum):
    """Which branch of the planner produced a decision."""

    PURSUE = "pursue"
    EXPLORE = "explore"
    IDLE = "idle"


@dataclass(frozen=True)
class CandidateMove:
    direction: Direction
    destination: Position


@dataclass(frozen=True)
class MoveDecision:
    """Outcome of planning for one agent; ``direction=None`` means stay."""

    agent_id: int
    mode: MoveMode
    direction: Direction | None = None
    destination: Position | None = None
    target: Resource | None = None

    @property
    def moved(self) -> bool:
        return self.direction is not None


def manhattan(a: Position, b: Position) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def step(pos: Position, direction: Direction) -> Position:
    dr, dc = MOVE_DELTAS[direction]
    return (pos[0] + dr, pos[1] + dc)


class MovementPlanner:
    """Chooses at most one orthogonal step per agent per turn."""

    def __init__(
        self,
        world: GridWorld,
        visibility: VisibilityField,
        rng: Random,
        exploration: bool = True,
    ) -> None:
        self.world = world
        self.visibility = visibility
        self.rng = rng
        self.exploration = exploration

    def legal_moves(self, agent: Agent) -> list[CandidateMove]:
        """Steps landing in bounds on a cell with neither agent nor apple."""
        moves: list[CandidateMove] = []
        for direction in MOVE_DELTAS:
            destination = step(agent.position, direction)
            if self.world.is_free(destination):
                moves.append(CandidateMove(direction=direction, destination=destination))
        return moves

    def visible_resources(self, agent: Agent) -> list[Resource]:
        """Apples inside the agent's current window, in row-major order."""
        return [
            resource
            for resource in self.world.iter_resources()
            if self.visibility.is_visible_from(agent.position, resource.position)
        ]

    def select_target(self, agent: Agent, resources: list[Resource]) -> Resource | None:
        """Nearest apple by Manhattan distance; first found wins ties."""
        nearest: Resource | None = None
        best = 0
        for resource in resources:
            dist = manhattan(agent.position, resource.position)
            if nearest is None or dist < best:
                nearest = resource
                best = dist
        return nearest

    def pursue(self, agent: Agent, target: Resource) -> MoveDecision:
        """Take the first step that strictly shortens the distance to *target*.

        If no legal step improves on standing still the agent stays put; this
        can stall in local minima and that is accepted.
        """
        best_dist = manhattan(agent.position, target.position)
        best: CandidateMove | None = None
        for move in self.legal_moves(agent):
            dist = manhattan(move.destination, target.position)
            if dist < best_dist:
                best_dist = dist
                best = move
        if best is None:
            return MoveDecision(agent_id=agent.agent_id, mode=MoveMode.PURSUE, target=target)
        return MoveDecision(
            agent_id=agent.agent_id,
            mode=MoveMode.PURSUE,
            direction=best.direction,
            destination=best.destination,
            target=target,
        )

    def explore(self, agent: Agent) -> MoveDecision:
        """Step to reveal the most unseen cells; random among equal best."""
        moves = self.legal_moves(agent)
        if not moves:
            return MoveDecision(agent_id=agent.agent_id, mode=MoveMode.EXPLORE)

        current = self.visibility.compute_visible(agent)
        best_moves: list[CandidateMove] = []
        max_gain = -1
        for move in moves:
            gain = len(self.visibility.visible_cells(move.destination) - current)
            if gain > max_gain:
                max_gain = gain
                best_moves = [move]
            elif gain == max_gain:
                best_moves.append(move)

        chosen = self.rng.choice(best_moves)
        return MoveDecision(
            agent_id=agent.agent_id,
            mode=MoveMode.EXPLORE,
            direction=chosen.direction,
            destination=chosen.destination,
        )

    def decide_move(self, agent: Agent) -> MoveDecision:
        target = self.select_target(agent, self.visible_resources(agent))
        if target is not None:
            return self.pursue(agent, target)
        if self.exploration:
            return self.explore(agent)
        return MoveDecision(agent_id=agent.agent_id, mode=MoveMode.IDLE)
