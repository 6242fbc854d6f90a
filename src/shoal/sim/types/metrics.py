from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class TickMetrics:
    tick: int
    population: int
    pair_checks: int
    avoidance_hits: int
    boundary_hits: int
    speed_clamps: int
    average_speed: float
    center_x: float
    center_y: float
    heading_x: float
    heading_y: float
    spread: float
    polarization: float
    tick_duration_ms: float = 0.0
