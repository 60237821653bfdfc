"""Turn controller: sequential per-agent move/collect and termination."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from random import Random

from forage_grid.config.constants import VISION_RADIUS
from forage_grid.config.types import ForagingConfig, RunResult, SimulationStatus
from forage_grid.domain.collection import CollectionEvent, CollectionResolver
from forage_grid.domain.grid_world import Agent, GridWorld, Position, Resource
from forage_grid.domain.ledger import ScoreLedger
from forage_grid.domain.movement import MoveDecision, MovementPlanner
from forage_grid.domain.visibility import VisibilityField

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AgentTurn:
    """What one agent did during a turn."""

    decision: MoveDecision
    position: Position  # after the move
    collections: tuple[CollectionEvent, ...]


@dataclass(frozen=True)
class TurnReport:
    turn: int
    agent_turns: tuple[AgentTurn, ...]
    status: SimulationStatus

    @property
    def collections(self) -> list[CollectionEvent]:
        return [event for agent_turn in self.agent_turns for event in agent_turn.collections]


@dataclass(frozen=True)
class GridSnapshot:
    """Read-only view of the board for a rendering collaborator."""

    turn: int
    status: SimulationStatus
    agents: tuple[tuple[int, int, int], ...]  # (agent_id, row, col)
    resources: tuple[tuple[int, int, int, int], ...]  # (resource_id, row, col, value)
    scores: tuple[int, ...]
    visible: tuple[frozenset[Position], ...]  # indexed by agent_id


class ForagingSimulation:
    """One in-memory foraging run.

    Agents act strictly in placement order. Each one plans against live
    occupancy, moves, then collects; after the last agent the vision field is
    refreshed and the run finishes once no apples remain.
    """

    def __init__(self, world: GridWorld, config: ForagingConfig, rng: Random | None = None) -> None:
        if not world.agents:
            raise ValueError("world must contain at least one agent")
        self.world = world
        self.config = config
        self.rng = rng if rng is not None else Random(config.seed)
        self.visibility = VisibilityField(world, config.vision_radius)
        self.planner = MovementPlanner(
            world, self.visibility, self.rng, exploration=config.exploration
        )
        self.resolver = CollectionResolver(world)
        self.ledger = ScoreLedger(len(world.agents))
        self.turn = 0
        self.status = (
            SimulationStatus.RUNNING if world.resource_count > 0 else SimulationStatus.FINISHED
        )
        self.visibility.recompute()

    @classmethod
    def create(cls, config: ForagingConfig | None = None) -> ForagingSimulation:
        """Place agents and apples at random using ``config.seed``.

        Raises PlacementError when the board cannot accommodate them.
        """
        config = config or ForagingConfig()
        rng = Random(config.seed)
        world = GridWorld.create(config, rng)
        return cls(world, config, rng)

    @classmethod
    def from_layout(
        cls,
        columns: int,
        rows: int,
        agents: Iterable[Position],
        resources: Iterable[tuple[Position, int]],
        *,
        vision_radius: int | None = VISION_RADIUS,
        exploration: bool = True,
        seed: int = 0,
    ) -> ForagingSimulation:
        """Build a simulation from explicit positions (agents keep list order)."""
        agent_positions = list(agents)
        resource_specs = list(resources)
        config = ForagingConfig(
            columns=columns,
            rows=rows,
            num_agents=len(agent_positions),
            num_resources=len(resource_specs),
            vision_radius=vision_radius,
            exploration=exploration,
            seed=seed,
        )
        world = GridWorld(columns=columns, rows=rows)
        for pos in agent_positions:
            world.place_agent(pos)
        for pos, value in resource_specs:
            world.place_resource(pos, value)
        return cls(world, config)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def advance_turn(self) -> TurnReport:
        """Run exactly one turn; a no-op once the run has finished."""
        if self.status is SimulationStatus.FINISHED:
            logger.debug("advance_turn ignored: simulation finished at turn %d", self.turn)
            return TurnReport(turn=self.turn, agent_turns=(), status=self.status)

        self.turn += 1
        agent_turns: list[AgentTurn] = []
        for agent in self.world.agents:
            decision = self.planner.decide_move(agent)
            if decision.destination is not None:
                # IllegalMoveError here means the planner is broken; let it propagate
                self.world.move_agent(agent.agent_id, decision.destination)
            events = self.resolver.resolve(agent)
            for event in events:
                self.ledger.record(event)
                logger.debug(
                    "turn %d: apple %d (value %d) collected by agents %s",
                    self.turn,
                    event.resource_id,
                    event.value,
                    list(event.recipients),
                )
            agent_turns.append(
                AgentTurn(decision=decision, position=agent.position, collections=tuple(events))
            )

        self.visibility.recompute()
        if self.world.resource_count == 0:
            self.status = SimulationStatus.FINISHED
            logger.info("all apples collected after %d turns; scores=%s", self.turn, self.scores)
        return TurnReport(turn=self.turn, agent_turns=tuple(agent_turns), status=self.status)

    def run(self, max_turns: int | None = None, run_id: str | None = None) -> RunResult:
        """Advance until finished or *max_turns* turns have been played."""
        limit = self.config.max_turns if max_turns is None else max_turns
        if limit < 1:
            raise ValueError("max_turns must be >= 1")
        while self.status is SimulationStatus.RUNNING and self.turn < limit:
            self.advance_turn()
        if self.status is SimulationStatus.RUNNING:
            logger.info("turn cap %d reached with %d apples left", limit, self.world.resource_count)
        return self.result(run_id=run_id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def finished(self) -> bool:
        return self.status is SimulationStatus.FINISHED

    @property
    def agents(self) -> list[Agent]:
        return list(self.world.agents)

    @property
    def resources(self) -> list[Resource]:
        return self.world.resources

    @property
    def scores(self) -> tuple[int, ...]:
        return self.ledger.scores()

    def score(self, agent_id: int) -> int:
        return self.ledger.score(agent_id)

    def visible_cells(self, agent_id: int) -> frozenset[Position]:
        return self.visibility.visible_to(agent_id)

    def scoreboard(self) -> list[str]:
        return self.ledger.scoreboard()

    def snapshot(self) -> GridSnapshot:
        return GridSnapshot(
            turn=self.turn,
            status=self.status,
            agents=tuple((a.agent_id, a.row, a.col) for a in self.world.agents),
            resources=tuple(
                (r.resource_id, r.row, r.col, r.value) for r in self.world.iter_resources()
            ),
            scores=self.scores,
            visible=tuple(self.visibility.visible_to(a.agent_id) for a in self.world.agents),
        )

    def result(self, run_id: str | None = None) -> RunResult:
        events = self.ledger.events
        return RunResult(
            run_id=run_id or f"seed{self.config.seed}",
            seed=self.config.seed,
            finished=self.finished,
            turns=self.turn,
            scores=self.scores,
            initial_value=self.world.initial_value,
            collected_value=self.ledger.collected_value,
            n_collections=len(events),
            n_cooperative=sum(1 for event in events if event.cooperative),
        )
