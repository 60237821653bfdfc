"""Tests for forage_grid.domain.ledger module."""

from __future__ import annotations

import pytest

from forage_grid.domain.collection import CollectionEvent
from forage_grid.domain.ledger import ScoreLedger


def _event(value: int, recipients: tuple[int, ...]) -> CollectionEvent:
    return CollectionEvent(
        resource_id=0,
        position=(0, 0),
        value=value,
        recipients=recipients,
        cooperative=len(recipients) > 1,
    )


class TestScoreLedger:
    def test_starts_at_zero(self) -> None:
        ledger = ScoreLedger(3)
        assert ledger.scores() == (0, 0, 0)
        assert ledger.collected_value == 0

    def test_cooperative_event_credits_every_recipient(self) -> None:
        ledger = ScoreLedger(3)
        ledger.record(_event(3, (0, 2)))
        assert ledger.scores() == (3, 0, 3)
        assert ledger.total_credited() == 6
        assert ledger.collected_value == 3
        assert len(ledger.events) == 1

    def test_scores_never_decrease(self) -> None:
        ledger = ScoreLedger(1)
        with pytest.raises(ValueError):
            ledger.credit(0, -1)

    def test_unknown_agent(self) -> None:
        with pytest.raises(KeyError):
            ScoreLedger(2).credit(2, 1)

    def test_scoreboard_lines_are_one_based(self) -> None:
        ledger = ScoreLedger(2)
        ledger.credit(1, 5)
        assert ledger.scoreboard() == ["Agent 1: 0 points", "Agent 2: 5 points"]

    def test_needs_an_agent(self) -> None:
        with pytest.raises(ValueError):
            ScoreLedger(0)
