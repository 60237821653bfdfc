"""Experiments layer: seeded batches, summaries, and the CLI."""

from forage_grid.experiments.batch import run_batch
from forage_grid.experiments.summaries import build_batch_summary

__all__ = [
    "build_batch_summary",
    "run_batch",
]
