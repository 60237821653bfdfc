"""Path construction helpers for batch output directories."""

from __future__ import annotations

from pathlib import Path


def resolve_within_base(path: Path, base_dir: Path) -> Path:
    """Resolve *path* and ensure it stays within the trusted *base_dir*.

    Raises :exc:`ValueError` if the resolved path escapes the base directory.
    """
    candidate = path if path.is_absolute() else base_dir / path
    resolved = candidate.resolve()
    base_resolved = base_dir.resolve()
    if resolved != base_resolved and base_resolved not in resolved.parents:
        raise ValueError(f"Path escapes base_dir: {path}")
    return resolved


def runs_dir(out_dir: Path) -> Path:
    """Return path to the per-run JSON payload directory."""
    return out_dir / "runs"


def logs_dir(out_dir: Path) -> Path:
    return out_dir / "logs"


def turn_log_path(out_dir: Path) -> Path:
    return logs_dir(out_dir) / "turn_log.parquet"


def collection_log_path(out_dir: Path) -> Path:
    return logs_dir(out_dir) / "collection_log.parquet"


def run_summary_path(out_dir: Path) -> Path:
    return logs_dir(out_dir) / "run_summary.parquet"


def run_payload_path(out_dir: Path, run_id: str) -> Path:
    """Return path to one run's JSON payload, refusing ids that escape runs/."""
    base = runs_dir(out_dir)
    return resolve_within_base(Path(f"{run_id}.json"), base)
