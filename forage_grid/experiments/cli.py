"""CLI entrypoint for batch foraging runs.

This module owns CLI argument parsing and config resolution. All domain
logic lives elsewhere:

- ``forage_grid.config``             – configuration dataclasses
- ``forage_grid.simulation.engine``  – ``ForagingSimulation`` turn controller
- ``forage_grid.experiments.batch``  – seeded batch runner with Parquet logs
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from forage_grid.config.constants import (
    GRID_COLUMNS,
    GRID_ROWS,
    MAX_PLACEMENT_ATTEMPTS,
    MAX_TURNS,
    NUM_AGENTS,
    NUM_RESOURCES,
    VISION_RADIUS,
)
from forage_grid.config.types import ForagingConfig
from forage_grid.domain.errors import PlacementError
from forage_grid.experiments.batch import run_batch
from forage_grid.experiments.summaries import build_batch_summary

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Value coercion helpers
# ---------------------------------------------------------------------------


def _coerce_bool(raw: object, key: str) -> bool:
    """Coerce raw value to bool with strict string-check."""
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        normalized = raw.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
    raise ValueError(f"{key} must be a boolean value")


def _coerce_int(raw: object, key: str) -> int:
    """Coerce raw value to int; rejects booleans and non-integer floats."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be an integer value")
    if isinstance(raw, float):
        if raw != int(raw):
            raise ValueError(f"{key} must be an integer value, got {raw!r}")
        return int(raw)
    if isinstance(raw, (int, str)):
        return int(raw)
    raise ValueError(f"{key} must be an integer value")


def _coerce_str(raw: object, key: str) -> str:
    """Coerce raw value to str; rejects booleans."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be a string-coercible value")
    if isinstance(raw, (str, Path, int, float)):
        return str(raw)
    raise ValueError(f"{key} must be a string-coercible value")


def _get_val(cli_val: object, key: str, file_cfg: dict[str, object], default: object) -> object:
    """CLI > file > default resolution."""
    if cli_val is not None:
        return cli_val
    return file_cfg.get(key, default)


def _get_bool(cli_val: bool | None, key: str, file_cfg: dict[str, object], default: bool) -> bool:
    return _coerce_bool(_get_val(cli_val, key, file_cfg, default), key)


def _get_int(cli_val: int | None, key: str, file_cfg: dict[str, object], default: int) -> int:
    return _coerce_int(_get_val(cli_val, key, file_cfg, default), key)


def _get_str(cli_val: str | None, key: str, file_cfg: dict[str, object], default: str) -> str:
    return _coerce_str(_get_val(cli_val, key, file_cfg, default), key)


def _get_vision_radius(
    cli_radius: int | None, full_vision: bool | None, file_cfg: dict[str, object]
) -> int | None:
    """Resolve the vision radius; ``None`` (JSON null or --full-vision) is unlimited."""
    if full_vision:
        return None
    if cli_radius is not None:
        return _coerce_int(cli_radius, "vision_radius")
    if full_vision is None and file_cfg.get("full_vision") is True:
        return None
    if "vision_radius" in file_cfg:
        raw = file_cfg["vision_radius"]
        return None if raw is None else _coerce_int(raw, "vision_radius")
    return VISION_RADIUS


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(description="Run seeded multi-agent foraging simulations")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    parser.add_argument("--n-runs", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None, help="Seed of the first run")
    parser.add_argument("--columns", type=int, default=None)
    parser.add_argument("--rows", type=int, default=None)
    parser.add_argument("--agents", type=int, default=None)
    parser.add_argument("--resources", type=int, default=None)
    parser.add_argument("--vision-radius", type=int, default=None)
    parser.add_argument(
        "--full-vision",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Agents see the whole board (overrides --vision-radius)",
    )
    parser.add_argument(
        "--exploration",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Explore when no apple is visible instead of idling",
    )
    parser.add_argument("--max-turns", type=int, default=None)
    parser.add_argument("--max-placement-attempts", type=int, default=None)
    parser.add_argument("--out-dir", type=Path, default=None)
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
    )
    return parser


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for batch execution.

    Supports ``--config path/to/config.json`` for reproducibility. CLI
    arguments override config-file values; config-file values override
    built-in defaults.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    file_cfg: dict[str, object] = {}
    if args.config is not None:
        try:
            file_cfg = json.loads(Path(args.config).read_text())
        except FileNotFoundError:
            parser.error(f"Config file not found: {args.config}")
        except json.JSONDecodeError as exc:
            parser.error(f"Config file is not valid JSON: {args.config}: {exc}")
        if not isinstance(file_cfg, dict):
            parser.error(f"Config file must hold a JSON object: {args.config}")

    try:
        log_level = _get_str(args.log_level, "log_level", file_cfg, "WARNING").upper()
        n_runs = _get_int(args.n_runs, "n_runs", file_cfg, 10)
        seed = _get_int(args.seed, "seed", file_cfg, 0)
        out_dir = Path(_get_str(args.out_dir, "out_dir", file_cfg, "data"))
        config = ForagingConfig(
            columns=_get_int(args.columns, "columns", file_cfg, GRID_COLUMNS),
            rows=_get_int(args.rows, "rows", file_cfg, GRID_ROWS),
            num_agents=_get_int(args.agents, "num_agents", file_cfg, NUM_AGENTS),
            num_resources=_get_int(args.resources, "num_resources", file_cfg, NUM_RESOURCES),
            vision_radius=_get_vision_radius(args.vision_radius, args.full_vision, file_cfg),
            exploration=_get_bool(args.exploration, "exploration", file_cfg, True),
            seed=seed,
            max_placement_attempts=_get_int(
                args.max_placement_attempts,
                "max_placement_attempts",
                file_cfg,
                MAX_PLACEMENT_ATTEMPTS,
            ),
            max_turns=_get_int(args.max_turns, "max_turns", file_cfg, MAX_TURNS),
        )
    except ValueError as exc:
        parser.error(str(exc))

    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        results = run_batch(n_runs=n_runs, out_dir=out_dir, base_seed=seed, config=config)
    except PlacementError as exc:
        logger.error("placement failed: %s", exc)
        raise SystemExit(1) from exc
    except ValueError as exc:
        parser.error(str(exc))

    summary = {
        "out_dir": str(out_dir),
        "config": {
            "columns": config.columns,
            "rows": config.rows,
            "num_agents": config.num_agents,
            "num_resources": config.num_resources,
            "vision_radius": config.vision_radius,
            "exploration": config.exploration,
            "max_turns": config.max_turns,
            "base_seed": seed,
        },
        **build_batch_summary(results),
    }
    print(json.dumps(summary, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
