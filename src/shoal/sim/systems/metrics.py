from __future__ import annotations

import math
from typing import List

from ..core.agent import Agent
from ..types.flock import TickReport
from ..types.metrics import TickMetrics
from ..utils.math2d import _safe_normalize_xy


def create_metrics(tick: int, agents: List[Agent], report: TickReport, duration_ms: float) -> TickMetrics:
    population = len(agents)
    speed_sum = 0.0
    spread_sum = 0.0
    heading_x = 0.0
    heading_y = 0.0
    center_x = 0.0
    center_y = 0.0
    if population > 0:
        for agent in agents:
            center_x += agent.position.x
            center_y += agent.position.y
        center_x /= population
        center_y /= population
        for agent in agents:
            vel = agent.velocity
            speed_sum += math.hypot(vel.x, vel.y)
            unit = _safe_normalize_xy(vel.x, vel.y)
            heading_x += unit.x
            heading_y += unit.y
            spread_sum += math.hypot(agent.position.x - center_x, agent.position.y - center_y)
        heading_x /= population
        heading_y /= population

    return TickMetrics(
        tick=tick,
        population=population,
        pair_checks=report.pair_checks,
        avoidance_hits=report.avoidance_hits,
        boundary_hits=report.boundary_hits,
        speed_clamps=report.speed_clamps,
        average_speed=0.0 if population == 0 else speed_sum / population,
        center_x=center_x,
        center_y=center_y,
        heading_x=heading_x,
        heading_y=heading_y,
        spread=0.0 if population == 0 else spread_sum / population,
        polarization=math.hypot(heading_x, heading_y),
        tick_duration_ms=duration_ms,
    )
