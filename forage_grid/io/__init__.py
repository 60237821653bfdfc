"""I/O layer: Parquet schemas and output path conventions."""

from forage_grid.io.paths import (
    collection_log_path,
    logs_dir,
    resolve_within_base,
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

__all__ = [
    "COLLECTION_LOG_SCHEMA",
    "RUN_PAYLOAD_SCHEMA_VERSION",
    "RUN_SUMMARY_SCHEMA",
    "TURN_LOG_SCHEMA",
    "collection_log_path",
    "logs_dir",
    "resolve_within_base",
    "run_payload_path",
    "run_summary_path",
    "runs_dir",
    "turn_log_path",
]
