from __future__ import annotations

import argparse
import csv
import json
import logging
import math
from pathlib import Path
from typing import Optional

from ..sim.core.config import SimulationConfig
from ..sim.core.world import World

logger = logging.getLogger(__name__)


_BASIC_HEADER = [
    "tick",
    "population",
    "pair_checks",
    "avoidance_hits",
    "boundary_hits",
    "speed_clamps",
    "avg_speed",
    "tick_ms",
]

_DETAILED_HEADER = [
    "tick",
    "population",
    "pair_checks",
    "avoidance_hits",
    "boundary_hits",
    "speed_clamps",
    "avg_speed",
    "tick_ms",
    "center_x",
    "center_y",
    "heading_x",
    "heading_y",
    "spread",
    "polarization",
    "avoidance_hit_ratio",
    "boundary_ratio",
    "min_speed_seen",
    "max_speed_seen",
    "outside_viewport",
]


def _format_basic_row(metrics: object, tick_ms: float) -> list[object]:
    return [
        metrics.tick,
        metrics.population,
        metrics.pair_checks,
        metrics.avoidance_hits,
        metrics.boundary_hits,
        metrics.speed_clamps,
        f"{metrics.average_speed:.4f}",
        f"{tick_ms:.3f}",
    ]


def _format_detailed_row(world: World, metrics: object, tick_ms: float) -> list[object]:
    population = metrics.population
    if population <= 0:
        avoidance_hit_ratio = 0.0
        boundary_ratio = 0.0
        min_speed_seen = 0.0
        max_speed_seen = 0.0
        outside = 0
    else:
        avoidance_hit_ratio = 0.0 if metrics.pair_checks <= 0 else metrics.avoidance_hits / metrics.pair_checks
        boundary_ratio = metrics.boundary_hits / population
        viewport = world.viewport
        speeds = [math.hypot(agent.velocity.x, agent.velocity.y) for agent in world.agents]
        min_speed_seen = min(speeds)
        max_speed_seen = max(speeds)
        outside = sum(
            1
            for agent in world.agents
            if not (viewport.left <= agent.position.x <= viewport.right)
            or not (viewport.bottom <= agent.position.y <= viewport.top)
        )

    return _format_basic_row(metrics, tick_ms) + [
        f"{metrics.center_x:.4f}",
        f"{metrics.center_y:.4f}",
        f"{metrics.heading_x:.4f}",
        f"{metrics.heading_y:.4f}",
        f"{metrics.spread:.4f}",
        f"{metrics.polarization:.4f}",
        f"{avoidance_hit_ratio:.4f}",
        f"{boundary_ratio:.4f}",
        f"{min_speed_seen:.4f}",
        f"{max_speed_seen:.4f}",
        outside,
    ]


def _percentile(sorted_values: list[float], percentile: float) -> float:
    if not sorted_values:
        return 0.0
    if len(sorted_values) == 1:
        return float(sorted_values[0])
    pos = (len(sorted_values) - 1) * percentile
    low = int(math.floor(pos))
    high = int(math.ceil(pos))
    if low == high:
        return float(sorted_values[low])
    weight = pos - low
    return float(sorted_values[low] + (sorted_values[high] - sorted_values[low]) * weight)


def _summary_stats(values: list[float]) -> dict[str, float]:
    if not values:
        return {"min": 0.0, "max": 0.0, "avg": 0.0, "p50": 0.0, "p90": 0.0, "p95": 0.0, "p99": 0.0}
    sorted_values = sorted(values)
    total = sum(values)
    count = len(values)
    return {
        "min": float(sorted_values[0]),
        "max": float(sorted_values[-1]),
        "avg": float(total / count),
        "p50": _percentile(sorted_values, 0.50),
        "p90": _percentile(sorted_values, 0.90),
        "p95": _percentile(sorted_values, 0.95),
        "p99": _percentile(sorted_values, 0.99),
    }


def run_headless(
    steps: int,
    seed: Optional[int],
    log_path: Optional[Path],
    deterministic_log: bool = False,
    log_format: str = "detailed",
    summary_path: Optional[Path] = None,
    summary_window: int = 1000,
    config_path: Optional[Path] = None,
) -> World:
    log_mode = log_format.lower().strip()
    if log_mode not in {"basic", "detailed"}:
        raise ValueError(f"Unknown log format: {log_format}")

    config = SimulationConfig.from_yaml(config_path) if config_path else SimulationConfig()
    if seed is not None:
        config.seed = seed
    world = World(config)
    logger.info("Running %d headless ticks with %d fish", steps, len(world.agents))

    writer = None
    csv_file = None
    if log_path:
        csv_file = Path(log_path).open("w", newline="")
        writer = csv.writer(csv_file)
        writer.writerow(_DETAILED_HEADER if log_mode == "detailed" else _BASIC_HEADER)

    tick_ms_series: list[float] = []
    speed_series: list[float] = []
    polarization_series: list[float] = []
    spread_series: list[float] = []
    avoidance_series: list[float] = []
    max_tick_ms = (-1.0, -1)
    max_spread = (-1.0, -1)

    try:
        for tick in range(steps):
            metrics = world.step(tick)
            tick_ms = 0.0 if deterministic_log else metrics.tick_duration_ms

            if summary_path:
                tick_ms_series.append(tick_ms)
                speed_series.append(metrics.average_speed)
                polarization_series.append(metrics.polarization)
                spread_series.append(metrics.spread)
                avoidance_series.append(float(metrics.avoidance_hits))
                if tick_ms > max_tick_ms[0]:
                    max_tick_ms = (tick_ms, tick)
                if metrics.spread > max_spread[0]:
                    max_spread = (metrics.spread, tick)

            if writer:
                if log_mode == "detailed":
                    writer.writerow(_format_detailed_row(world, metrics, tick_ms))
                else:
                    writer.writerow(_format_basic_row(metrics, tick_ms))
    finally:
        if csv_file:
            csv_file.close()

    if summary_path:
        window = max(1, int(summary_window))
        tail_slice = slice(max(0, len(tick_ms_series) - window), len(tick_ms_series))
        summary = {
            "steps": steps,
            "seed": config.seed,
            "population": len(world.agents),
            "log_format": log_mode,
            "deterministic_log": deterministic_log,
            "pair_checks_per_tick": len(world.agents) * (len(world.agents) - 1) // 2,
            "tick_ms": _summary_stats(tick_ms_series),
            "average_speed": _summary_stats(speed_series),
            "polarization": _summary_stats(polarization_series),
            "spread": _summary_stats(spread_series),
            "avoidance_hits": _summary_stats(avoidance_series),
            "peaks": {
                "tick_ms": {"value": float(max_tick_ms[0]), "tick": max_tick_ms[1]},
                "spread": {"value": float(max_spread[0]), "tick": max_spread[1]},
            },
            "tail_window": {
                "window": window,
                "tick_ms": _summary_stats(tick_ms_series[tail_slice]),
                "polarization": _summary_stats(polarization_series[tail_slice]),
                "spread": _summary_stats(spread_series[tail_slice]),
            },
        }
        Path(summary_path).write_text(json.dumps(summary, indent=2))

    logger.info("Finished %d headless ticks", steps)
    return world


def main() -> None:
    parser = argparse.ArgumentParser(description="Headless flocking simulation")
    parser.add_argument("--steps", type=int, default=3000)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--config", type=Path, default=None, help="YAML simulation config")
    parser.add_argument("--log", type=Path, default=None, help="CSV file to write metrics")
    parser.add_argument(
        "--log-format",
        choices=["basic", "detailed"],
        default="detailed",
        help="CSV format to write when --log is provided.",
    )
    parser.add_argument(
        "--summary",
        type=Path,
        default=None,
        help="Optional JSON file to write summary stats for the run.",
    )
    parser.add_argument(
        "--summary-window",
        type=int,
        default=1000,
        help="Tail window size (ticks) for summary stats.",
    )
    parser.add_argument(
        "--deterministic-log",
        action="store_true",
        help="Write deterministic CSV (tick_ms is forced to 0.000 so identical seeds match).",
    )
    parser.add_argument("--log-level", default="INFO", help="Python logging level")
    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run_headless(
        args.steps,
        args.seed,
        args.log,
        deterministic_log=args.deterministic_log,
        log_format=args.log_format,
        summary_path=args.summary,
        summary_window=args.summary_window,
        config_path=args.config,
    )


if __name__ == "__main__":
    main()
