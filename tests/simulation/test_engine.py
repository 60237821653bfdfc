"""Tests for the turn controller (forage_grid.simulation.engine)."""

from __future__ import annotations

import dataclasses

import pytest

from forage_grid.config.types import ForagingConfig, SimulationStatus
from forage_grid.domain.errors import IllegalMoveError, PlacementError
from forage_grid.domain.movement import Direction, MoveDecision, MoveMode
from forage_grid.simulation.engine import ForagingSimulation


def _assert_board_invariants(sim: ForagingSimulation) -> None:
    agent_cells = [a.position for a in sim.world.agents]
    resource_cells = [r.position for r in sim.world.resources]
    assert len(agent_cells) == len(set(agent_cells))
    assert len(resource_cells) == len(set(resource_cells))
    for row, col in agent_cells + resource_cells:
        assert 0 <= row < sim.world.rows and 0 <= col < sim.world.columns
    assert sim.ledger.collected_value + sim.world.remaining_value() == sim.world.initial_value


class TestEndToEnd:
    def test_adjacent_apple_collected_in_one_turn(self) -> None:
        sim = ForagingSimulation.from_layout(12, 8, agents=[(0, 0)], resources=[((0, 1), 2)])
        assert sim.status is SimulationStatus.RUNNING

        report = sim.advance_turn()

        assert report.turn == 1
        assert sim.agents[0].position == (0, 0)
        assert sim.score(0) == 2
        assert sim.resources == []
        assert sim.status is SimulationStatus.FINISHED
        assert report.status is SimulationStatus.FINISHED

    def test_finished_is_terminal(self) -> None:
        sim = ForagingSimulation.from_layout(12, 8, agents=[(0, 0)], resources=[((0, 1), 2)])
        sim.advance_turn()
        before = sim.snapshot()

        report = sim.advance_turn()

        assert report.agent_turns == ()
        assert report.turn == 1
        assert sim.snapshot() == before

    def test_finishes_after_last_collection(self) -> None:
        sim = ForagingSimulation.from_layout(
            12, 8, agents=[(2, 2)], resources=[((2, 5), 1), ((2, 0), 2)]
        )
        collections = 0
        while not sim.finished:
            report = sim.advance_turn()
            collections += len(report.collections)
            if collections < 2:
                assert sim.status is SimulationStatus.RUNNING
            assert sim.turn < 20
        assert collections == 2
        assert sim.score(0) == 3

    def test_no_apples_starts_finished(self) -> None:
        sim = ForagingSimulation.from_layout(4, 4, agents=[(1, 1)], resources=[])
        assert sim.finished
        assert sim.advance_turn().agent_turns == ()


class TestCooperation:
    def test_two_flanking_agents_share_value_three(self) -> None:
        sim = ForagingSimulation.from_layout(
            12, 8, agents=[(2, 1), (2, 3)], resources=[((2, 2), 3)]
        )
        report = sim.advance_turn()
        assert sim.scores == (3, 3)
        assert len(report.collections) == 1
        assert report.collections[0].cooperative
        assert sim.ledger.collected_value == 3
        assert sim.finished

    def test_lone_agent_never_collects_value_three(self) -> None:
        sim = ForagingSimulation.from_layout(12, 8, agents=[(2, 1)], resources=[((2, 2), 3)])
        for _ in range(5):
            sim.advance_turn()
        assert sim.score(0) == 0
        assert len(sim.resources) == 1
        assert sim.status is SimulationStatus.RUNNING

    def test_earlier_move_counts_for_live_adjacency(self) -> None:
        sim = ForagingSimulation.from_layout(
            12, 8, agents=[(2, 0), (2, 3)], resources=[((2, 2), 3)]
        )
        report = sim.advance_turn()
        first = report.agent_turns[0]
        assert first.decision.direction is Direction.RIGHT
        assert first.collections[0].recipients == (0, 1)
        assert report.agent_turns[1].collections == ()
        assert sim.scores == (3, 3)

    def test_first_agent_wins_contested_low_value(self) -> None:
        sim = ForagingSimulation.from_layout(
            12, 8, agents=[(2, 1), (2, 3)], resources=[((2, 2), 1)]
        )
        sim.advance_turn()
        assert sim.scores == (1, 0)


class TestTurnMechanics:
    def test_visibility_refreshed_after_turn(self) -> None:
        sim = ForagingSimulation.from_layout(
            12, 8, agents=[(2, 2)], resources=[((2, 5), 1)], vision_radius=3
        )
        sim.advance_turn()
        assert sim.agents[0].position == (2, 3)
        assert sim.visible_cells(0) == sim.visibility.visible_cells((2, 3))

    def test_illegal_move_from_planner_propagates(self) -> None:
        sim = ForagingSimulation.from_layout(
            12, 8, agents=[(2, 2), (2, 3)], resources=[((7, 11), 1)]
        )

        def bad_plan(agent):  # type: ignore[no-untyped-def]
            return MoveDecision(
                agent_id=agent.agent_id,
                mode=MoveMode.PURSUE,
                direction=Direction.RIGHT,
                destination=(2, 3),
            )

        sim.planner.decide_move = bad_plan  # type: ignore[method-assign]
        with pytest.raises(IllegalMoveError):
            sim.advance_turn()

    def test_report_covers_agents_in_placement_order(self) -> None:
        sim = ForagingSimulation.create(ForagingConfig(seed=4))
        report = sim.advance_turn()
        assert [t.decision.agent_id for t in report.agent_turns] == [0, 1, 2]

    @pytest.mark.parametrize("seed", range(8))
    def test_invariants_hold_every_turn(self, seed: int) -> None:
        config = ForagingConfig(columns=8, rows=6, num_agents=5, num_resources=12, seed=seed)
        sim = ForagingSimulation.create(config)
        _assert_board_invariants(sim)
        previous = sim.scores
        for _ in range(60):
            sim.advance_turn()
            _assert_board_invariants(sim)
            assert all(now >= before for now, before in zip(sim.scores, previous))
            previous = sim.scores

    def test_same_seed_is_reproducible(self) -> None:
        config = ForagingConfig(seed=21)
        a = ForagingSimulation.create(config)
        b = ForagingSimulation.create(config)
        for _ in range(15):
            a.advance_turn()
            b.advance_turn()
        assert a.snapshot() == b.snapshot()

    def test_placement_failure_aborts_construction(self) -> None:
        config = ForagingConfig(
            columns=1, rows=2, num_agents=1, num_resources=1, max_placement_attempts=1
        )
        # one draw per occupant: some seed must collide on the second placement
        failures = 0
        for seed in range(20):
            try:
                ForagingSimulation.create(dataclasses.replace(config, seed=seed))
            except PlacementError:
                failures += 1
        assert failures > 0


class TestRun:
    def test_run_until_finished(self) -> None:
        sim = ForagingSimulation.from_layout(12, 8, agents=[(0, 0)], resources=[((0, 1), 2)])
        result = sim.run()
        assert result.finished
        assert result.turns == 1
        assert result.scores == (2,)
        assert result.collected_value == result.initial_value == 2
        assert result.run_id == "seed0"

    def test_run_respects_turn_cap(self) -> None:
        sim = ForagingSimulation.from_layout(12, 8, agents=[(2, 1)], resources=[((2, 2), 3)])
        result = sim.run(max_turns=7, run_id="stuck")
        assert not result.finished
        assert result.turns == 7
        assert result.run_id == "stuck"

    def test_run_rejects_non_positive_cap(self) -> None:
        sim = ForagingSimulation.from_layout(4, 4, agents=[(0, 0)], resources=[((3, 3), 1)])
        with pytest.raises(ValueError):
            sim.run(max_turns=0)


class TestQueries:
    def test_snapshot_lists_board_state(self) -> None:
        sim = ForagingSimulation.from_layout(
            12, 8, agents=[(0, 0), (7, 11)], resources=[((4, 4), 3), ((0, 5), 1)]
        )
        snap = sim.snapshot()
        assert snap.turn == 0
        assert snap.status is SimulationStatus.RUNNING
        assert snap.agents == ((0, 0, 0), (1, 7, 11))
        assert snap.resources == ((1, 0, 5, 1), (0, 4, 4, 3))
        assert snap.scores == (0, 0)
        assert len(snap.visible[0]) == 9

    def test_scoreboard(self) -> None:
        sim = ForagingSimulation.from_layout(12, 8, agents=[(0, 0)], resources=[((0, 1), 2)])
        sim.advance_turn()
        assert sim.scoreboard() == ["Agent 1: 2 points"]
