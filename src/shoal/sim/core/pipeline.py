from __future__ import annotations

from typing import List

from .agent import Agent
from .config import FlockParameters, Viewport
from ..systems.avoidance import apply_avoidance
from ..systems.boundary import apply_boundary
from ..systems.integration import integrate
from ..systems.speed import limit_speed
from ..systems.statistics import compute_flock_statistics
from ..systems.steering import apply_alignment, apply_cohesion
from ..types.flock import TickReport


def run_tick(agents: List[Agent], params: FlockParameters, viewport: Viewport) -> TickReport:
    """Advance ``agents`` in place by one tick.

    Each stage finishes over the whole population before the next one starts.
    The flock statistics are taken once, after avoidance, and shared by
    alignment and cohesion. Speed limiting runs after every steering stage so
    the velocities integrated here always lie in ``[min_speed, max_speed]``.
    The agent list itself is never resized.
    """
    pair_checks, avoidance_hits = apply_avoidance(agents, params)
    statistics = compute_flock_statistics(agents)
    apply_alignment(agents, statistics, params.matching_factor)
    apply_cohesion(agents, statistics, params.centering_factor)
    boundary_hits = apply_boundary(agents, params, viewport)
    speed_clamps = limit_speed(agents, params.min_speed, params.max_speed)
    integrate(agents)
    return TickReport(
        statistics=statistics,
        pair_checks=pair_checks,
        avoidance_hits=avoidance_hits,
        boundary_hits=boundary_hits,
        speed_clamps=speed_clamps,
    )
