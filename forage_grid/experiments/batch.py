"""Seeded batch execution with Parquet/JSON persistence."""

from __future__ import annotations

import dataclasses
import json
import logging
from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

from forage_grid.config.constants import FLUSH_THRESHOLD, MAX_BATCH_RUNS
from forage_grid.config.types import ForagingConfig, RunResult
from forage_grid.io.paths import (
    collection_log_path,
    logs_dir,
    run_payload_path,
    run_summary_path,
    runs_dir,
    turn_log_path,
)
from forage_grid.io.schemas import (
    COLLECTION_LOG_SCHEMA,
    RUN_PAYLOAD_SCHEMA_VERSION,
    RUN_SUMMARY_SCHEMA,
    TURN_LOG_SCHEMA,
)
from forage_grid.simulation.engine import ForagingSimulation
from forage_grid.simulation.persistence import (
    append_turn_rows,
    flush_columns,
    new_collection_columns,
    new_turn_columns,
)

logger = logging.getLogger(__name__)


def _deterministic_run_id(seed: int) -> str:
    """Build reproducible run ID stable across runs for identical seeds."""
    return f"seed{seed}"


def run_batch(
    n_runs: int,
    out_dir: Path,
    base_seed: int = 0,
    config: ForagingConfig | None = None,
) -> list[RunResult]:
    """Run ``n_runs`` simulations with seeds ``base_seed + i`` and persist logs.

    Writes ``logs/turn_log.parquet``, ``logs/collection_log.parquet``,
    ``logs/run_summary.parquet`` and one ``runs/<run_id>.json`` per run.
    A PlacementError from any run aborts the batch.
    """
    if n_runs < 1:
        raise ValueError("n_runs must be >= 1")
    if n_runs > MAX_BATCH_RUNS:
        raise ValueError("n_runs exceeds safety threshold; split the batch")
    base_config = config or ForagingConfig()

    out_dir = Path(out_dir)
    runs_dir(out_dir).mkdir(parents=True, exist_ok=True)
    logs_dir(out_dir).mkdir(parents=True, exist_ok=True)

    turn_writer: pq.ParquetWriter | None = None
    collection_writer: pq.ParquetWriter | None = None
    turn_columns = new_turn_columns()
    collection_columns = new_collection_columns()
    results: list[RunResult] = []

    try:
        for i in range(n_runs):
            seed = base_seed + i
            run_id = _deterministic_run_id(seed)
            run_config = dataclasses.replace(base_config, seed=seed)
            simulation = ForagingSimulation.create(run_config)

            while not simulation.finished and simulation.turn < run_config.max_turns:
                report = simulation.advance_turn()
                append_turn_rows(
                    turn_columns, collection_columns, run_id, report, simulation.scores
                )
                if len(turn_columns["run_id"]) >= FLUSH_THRESHOLD:
                    turn_writer = flush_columns(
                        turn_columns, turn_log_path(out_dir), turn_writer, TURN_LOG_SCHEMA
                    )

            turn_writer = flush_columns(
                turn_columns, turn_log_path(out_dir), turn_writer, TURN_LOG_SCHEMA
            )
            collection_writer = flush_columns(
                collection_columns,
                collection_log_path(out_dir),
                collection_writer,
                COLLECTION_LOG_SCHEMA,
            )

            result = simulation.result(run_id=run_id)
            payload = {
                "run_id": run_id,
                "finished": result.finished,
                "turns": result.turns,
                "scores": list(result.scores),
                "scoreboard": simulation.scoreboard(),
                "metadata": {
                    "seed": seed,
                    "columns": run_config.columns,
                    "rows": run_config.rows,
                    "num_agents": run_config.num_agents,
                    "num_resources": run_config.num_resources,
                    "vision_radius": run_config.vision_radius,
                    "exploration": run_config.exploration,
                    "max_turns": run_config.max_turns,
                    "initial_value": result.initial_value,
                    "collected_value": result.collected_value,
                    "schema_version": RUN_PAYLOAD_SCHEMA_VERSION,
                },
            }
            run_payload_path(out_dir, run_id).write_text(
                json.dumps(payload, ensure_ascii=False, indent=2)
            )
            logger.debug("run %s: finished=%s turns=%d", run_id, result.finished, result.turns)
            results.append(result)
    finally:
        if turn_writer is not None:
            turn_writer.close()
        if collection_writer is not None:
            collection_writer.close()

    # Keep the artifact set stable even when a batch logged no rows
    for path, schema, writer in (
        (turn_log_path(out_dir), TURN_LOG_SCHEMA, turn_writer),
        (collection_log_path(out_dir), COLLECTION_LOG_SCHEMA, collection_writer),
    ):
        if writer is None:
            pq.write_table(schema.empty_table(), path)

    summary_rows = [
        {
            "schema_version": RUN_PAYLOAD_SCHEMA_VERSION,
            "run_id": result.run_id,
            "seed": result.seed,
            "finished": result.finished,
            "turns": result.turns,
            "initial_value": result.initial_value,
            "collected_value": result.collected_value,
            "total_credited": result.total_credited,
            "n_collections": result.n_collections,
            "n_cooperative": result.n_cooperative,
        }
        for result in results
    ]
    pq.write_table(
        pa.Table.from_pylist(summary_rows, schema=RUN_SUMMARY_SCHEMA), run_summary_path(out_dir)
    )
    return results
