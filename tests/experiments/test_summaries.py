"""Tests for experiments/summaries.py."""

from __future__ import annotations

import pytest

from forage_grid.config.types import RunResult
from forage_grid.experiments.summaries import build_batch_summary


def _result(
    seed: int,
    *,
    finished: bool = True,
    turns: int = 10,
    scores: tuple[int, ...] = (2, 1),
    initial_value: int = 4,
    collected_value: int = 3,
    n_collections: int = 2,
    n_cooperative: int = 0,
) -> RunResult:
    return RunResult(
        run_id=f"seed{seed}",
        seed=seed,
        finished=finished,
        turns=turns,
        scores=scores,
        initial_value=initial_value,
        collected_value=collected_value,
        n_collections=n_collections,
        n_cooperative=n_cooperative,
    )


def test_empty_batch() -> None:
    summary = build_batch_summary([])
    assert summary["runs"] == 0
    assert summary["finish_rate"] == 0.0
    assert summary["mean_turns_to_finish"] is None
    assert summary["p50_turns_to_finish"] is None
    assert summary["cooperative_share"] == 0.0


def test_turns_only_count_finished_runs() -> None:
    results = [
        _result(0, turns=10),
        _result(1, turns=20),
        _result(2, turns=40),
        _result(3, finished=False, turns=500),
    ]
    summary = build_batch_summary(results)
    assert summary["finished"] == 3
    assert summary["finish_rate"] == pytest.approx(0.75)
    assert summary["mean_turns_to_finish"] == pytest.approx(70 / 3)
    assert summary["p50_turns_to_finish"] == pytest.approx(20.0)


def test_credit_and_cooperation_figures() -> None:
    results = [
        _result(
            0,
            scores=(3, 3),
            collected_value=3,
            initial_value=3,
            n_collections=1,
            n_cooperative=1,
        ),
        _result(1, scores=(1, 0), collected_value=1, initial_value=2, n_collections=1),
    ]
    summary = build_batch_summary(results)
    assert summary["mean_total_credited"] == pytest.approx(3.5)
    assert summary["mean_collected_fraction"] == pytest.approx(0.75)
    assert summary["cooperative_share"] == pytest.approx(0.5)
