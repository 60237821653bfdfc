"""Apple pickup resolution after an agent's move.

Low-value apples go to the acting agent alone. Cooperative apples are
collected only when enough agents stand orthogonally adjacent at the moment
of resolution; every one of them is credited the full value and the apple is
removed once. Adjacency is read live, so resolution order within a turn
decides contested pickups.
"""

from __future__ import annotations

from dataclasses import dataclass

from forage_grid.config.constants import COOPERATIVE_VALUE, MIN_COOPERATORS
from forage_grid.domain.grid_world import Agent, GridWorld, Position


@dataclass(frozen=True)
class CollectionEvent:
    """One apple leaving the board."""

    resource_id: int
    position: Position
    value: int
    recipients: tuple[int, ...]  # agent ids credited, placement order
    cooperative: bool


class CollectionResolver:
    """Inspects the four neighbours of an agent and collects apples."""

    def __init__(
        self,
        world: GridWorld,
        cooperative_value: int = COOPERATIVE_VALUE,
        min_cooperators: int = MIN_COOPERATORS,
    ) -> None:
        if min_cooperators < 1:
            raise ValueError("min_cooperators must be >= 1")
        self.world = world
        self.cooperative_value = cooperative_value
        self.min_cooperators = min_cooperators

    def resolve(self, agent: Agent) -> list[CollectionEvent]:
        events: list[CollectionEvent] = []
        for cell in self.world.orthogonal_neighbors(agent.position):
            resource = self.world.resource_at(cell)
            if resource is None:
                continue

            if resource.value < self.cooperative_value:
                self.world.remove_resource(cell)
                events.append(
                    CollectionEvent(
                        resource_id=resource.resource_id,
                        position=cell,
                        value=resource.value,
                        recipients=(agent.agent_id,),
                        cooperative=False,
                    )
                )
                continue

            helpers = self.world.agents_adjacent_to(cell)
            if len(helpers) < self.min_cooperators:
                continue
            self.world.remove_resource(cell)
            events.append(
                CollectionEvent(
                    resource_id=resource.resource_id,
                    position=cell,
                    value=resource.value,
                    recipients=tuple(helper.agent_id for helper in helpers),
                    cooperative=True,
                )
            )
        return events
