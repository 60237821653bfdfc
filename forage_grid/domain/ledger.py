"""Per-agent score accounting."""

from __future__ import annotations

from forage_grid.domain.collection import CollectionEvent


class ScoreLedger:
    """Append-only scores plus the value taken off the board.

    Cooperative pickups credit every helper the full value, so the sum of
    scores can exceed ``collected_value``; conservation holds for the latter.
    """

    def __init__(self, num_agents: int) -> None:
        if num_agents < 1:
            raise ValueError("num_agents must be >= 1")
        self._scores = [0] * num_agents
        self.collected_value = 0
        self.events: list[CollectionEvent] = []

    def credit(self, agent_id: int, amount: int) -> None:
        if amount < 0:
            raise ValueError("score increments must be >= 0")
        if not 0 <= agent_id < len(self._scores):
            raise KeyError(f"unknown agent: {agent_id}")
        self._scores[agent_id] += amount

    def record(self, event: CollectionEvent) -> None:
        for agent_id in event.recipients:
            self.credit(agent_id, event.value)
        self.collected_value += event.value
        self.events.append(event)

    def score(self, agent_id: int) -> int:
        return self._scores[agent_id]

    def scores(self) -> tuple[int, ...]:
        return tuple(self._scores)

    def total_credited(self) -> int:
        return sum(self._scores)

    def scoreboard(self) -> list[str]:
        """One line per agent, labelled from 1."""
        return [f"Agent {i + 1}: {score} points" for i, score in enumerate(self._scores)]
