"""Parquet schema definitions for batch-run artifacts.

All Arrow schemas used for persisting turn logs, collection logs and run
summaries are centralised here so that every module works against the same
column contracts.
"""

from __future__ import annotations

import pyarrow as pa

RUN_PAYLOAD_SCHEMA_VERSION = 1

TURN_LOG_SCHEMA = pa.schema(
    [
        ("run_id", pa.string()),
        ("turn", pa.int64()),
        ("agent_id", pa.int64()),
        ("row", pa.int64()),
        ("col", pa.int64()),
        ("action", pa.string()),
        ("mode", pa.string()),
        ("score", pa.int64()),
    ]
)

COLLECTION_LOG_SCHEMA = pa.schema(
    [
        ("run_id", pa.string()),
        ("turn", pa.int64()),
        ("resource_id", pa.int64()),
        ("row", pa.int64()),
        ("col", pa.int64()),
        ("value", pa.int64()),
        ("n_recipients", pa.int64()),
        ("cooperative", pa.bool_()),
    ]
)

RUN_SUMMARY_SCHEMA = pa.schema(
    [
        ("schema_version", pa.int64()),
        ("run_id", pa.string()),
        ("seed", pa.int64()),
        ("finished", pa.bool_()),
        ("turns", pa.int64()),
        ("initial_value", pa.int64()),
        ("collected_value", pa.int64()),
        ("total_credited", pa.int64()),
        ("n_collections", pa.int64()),
        ("n_cooperative", pa.int64()),
    ]
)
