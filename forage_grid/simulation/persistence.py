"""Parquet persistence helpers for turn and collection log streams."""

from __future__ import annotations

from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

from forage_grid.io.schemas import COLLECTION_LOG_SCHEMA, TURN_LOG_SCHEMA
from forage_grid.simulation.engine import TurnReport


def new_turn_columns() -> dict[str, list[int | str]]:
    return {field.name: [] for field in TURN_LOG_SCHEMA}


def new_collection_columns() -> dict[str, list[int | str | bool]]:
    return {field.name: [] for field in COLLECTION_LOG_SCHEMA}


def append_turn_rows(
    turn_columns: dict[str, list[int | str]],
    collection_columns: dict[str, list[int | str | bool]],
    run_id: str,
    report: TurnReport,
    scores: tuple[int, ...],
) -> None:
    """Buffer one row per agent and one row per collected apple."""
    for agent_turn in report.agent_turns:
        decision = agent_turn.decision
        row, col = agent_turn.position
        turn_columns["run_id"].append(run_id)
        turn_columns["turn"].append(report.turn)
        turn_columns["agent_id"].append(decision.agent_id)
        turn_columns["row"].append(row)
        turn_columns["col"].append(col)
        turn_columns["action"].append(
            decision.direction.value if decision.direction is not None else "stay"
        )
        turn_columns["mode"].append(decision.mode.value)
        turn_columns["score"].append(scores[decision.agent_id])
    for event in report.collections:
        collection_columns["run_id"].append(run_id)
        collection_columns["turn"].append(report.turn)
        collection_columns["resource_id"].append(event.resource_id)
        collection_columns["row"].append(event.position[0])
        collection_columns["col"].append(event.position[1])
        collection_columns["value"].append(event.value)
        collection_columns["n_recipients"].append(len(event.recipients))
        collection_columns["cooperative"].append(event.cooperative)


def flush_columns(
    columns: dict[str, list],
    path: Path,
    writer: pq.ParquetWriter | None,
    schema: pa.Schema,
) -> pq.ParquetWriter | None:
    """Write accumulated rows to Parquet and clear in-memory buffers."""
    if not columns["run_id"]:
        return writer
    table = pa.Table.from_pydict(columns, schema=schema)
    if writer is None:
        writer = pq.ParquetWriter(path, schema)
    writer.write_table(table)
    for values in columns.values():
        values.clear()
    return writer
