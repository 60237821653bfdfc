"""Batch summary builders.

Functions here reduce a list of run results to the aggregate figures the
CLI prints and experiments compare across configurations.
"""

from __future__ import annotations

from forage_grid.config.types import RunResult


def _percentile_pre_sorted(sorted_values: list[float], q: float) -> float | None:
    """Compute percentile in [0, 1] with linear interpolation on pre-sorted values."""
    if not sorted_values:
        return None
    if len(sorted_values) == 1:
        return sorted_values[0]

    pos = (len(sorted_values) - 1) * q
    lo = int(pos)
    hi = min(lo + 1, len(sorted_values) - 1)
    fraction = pos - lo
    return sorted_values[lo] * (1.0 - fraction) + sorted_values[hi] * fraction


def _mean(values: list[float]) -> float | None:
    if not values:
        return None
    return sum(values) / len(values)


def build_batch_summary(results: list[RunResult]) -> dict[str, int | float | None]:
    """Aggregate finish rate, turns to finish, scoring and cooperation share."""
    runs = len(results)
    finished = [r for r in results if r.finished]
    finish_turns = sorted(float(r.turns) for r in finished)
    total_collections = sum(r.n_collections for r in results)
    total_cooperative = sum(r.n_cooperative for r in results)
    collected_fractions = [
        r.collected_value / r.initial_value for r in results if r.initial_value > 0
    ]

    return {
        "runs": runs,
        "finished": len(finished),
        "finish_rate": (len(finished) / runs) if runs else 0.0,
        "mean_turns_to_finish": _mean(finish_turns),
        "p50_turns_to_finish": _percentile_pre_sorted(finish_turns, 0.5),
        "mean_total_credited": _mean([float(r.total_credited) for r in results]),
        "mean_collected_fraction": _mean(collected_fractions),
        "cooperative_share": (total_cooperative / total_collections)
        if total_collections
        else 0.0,
    }
