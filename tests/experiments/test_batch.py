"""Tests for experiments/batch.py: seeded batches and their artifacts."""

from __future__ import annotations

import json
from pathlib import Path

import pyarrow.parquet as pq
import pytest

from forage_grid.config.types import ForagingConfig
from forage_grid.domain.errors import PlacementError
from forage_grid.experiments.batch import run_batch
from forage_grid.io.paths import (
    collection_log_path,
    run_payload_path,
    run_summary_path,
    turn_log_path,
)


def _small_config(**overrides: object) -> ForagingConfig:
    params: dict[str, object] = {
        "columns": 6,
        "rows": 5,
        "num_agents": 3,
        "num_resources": 4,
        "max_turns": 60,
    }
    params.update(overrides)
    return ForagingConfig(**params)  # type: ignore[arg-type]


def test_run_batch_rejects_bad_run_counts(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        run_batch(n_runs=0, out_dir=tmp_path)
    with pytest.raises(ValueError):
        run_batch(n_runs=10**9, out_dir=tmp_path)


def test_run_batch_seeds_and_artifacts(tmp_path: Path) -> None:
    results = run_batch(n_runs=3, out_dir=tmp_path, base_seed=5, config=_small_config())

    assert [r.seed for r in results] == [5, 6, 7]
    assert [r.run_id for r in results] == ["seed5", "seed6", "seed7"]
    for result in results:
        assert 1 <= result.turns <= 60
        assert result.collected_value <= result.initial_value
        payload = json.loads(run_payload_path(tmp_path, result.run_id).read_text())
        assert payload["run_id"] == result.run_id
        assert payload["scores"] == list(result.scores)
        assert payload["metadata"]["seed"] == result.seed
        assert len(payload["scoreboard"]) == 3

    summary = pq.read_table(run_summary_path(tmp_path))
    assert summary.column("run_id").to_pylist() == ["seed5", "seed6", "seed7"]

    turns = pq.read_table(turn_log_path(tmp_path))
    expected_rows = sum(r.turns for r in results) * 3
    assert turns.num_rows == expected_rows

    collections = pq.read_table(collection_log_path(tmp_path))
    assert collections.num_rows == sum(r.n_collections for r in results)


def test_run_batch_is_reproducible(tmp_path: Path) -> None:
    first = run_batch(n_runs=2, out_dir=tmp_path / "a", config=_small_config())
    second = run_batch(n_runs=2, out_dir=tmp_path / "b", config=_small_config())
    assert first == second


def test_run_batch_without_apples_writes_empty_logs(tmp_path: Path) -> None:
    results = run_batch(n_runs=2, out_dir=tmp_path, config=_small_config(num_resources=0))
    assert all(r.finished and r.turns == 0 for r in results)
    assert pq.read_table(turn_log_path(tmp_path)).num_rows == 0
    assert pq.read_table(collection_log_path(tmp_path)).num_rows == 0
    assert pq.read_table(run_summary_path(tmp_path)).num_rows == 2


def test_run_batch_propagates_placement_error(tmp_path: Path) -> None:
    config = ForagingConfig(
        columns=2, rows=1, num_agents=1, num_resources=1, max_placement_attempts=1
    )
    with pytest.raises(PlacementError):
        run_batch(n_runs=20, out_dir=tmp_path, config=config)
