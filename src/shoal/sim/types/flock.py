from __future__ import annotations

from dataclasses import dataclass, field

from pygame.math import Vector2


@dataclass(slots=True, frozen=True)
class FlockStatistics:
    """Population means taken once per tick; every agent reads the same value."""

    avg_velocity: Vector2 = field(default_factory=Vector2)
    avg_position: Vector2 = field(default_factory=Vector2)


@dataclass(slots=True)
class TickReport:
    statistics: FlockStatistics
    pair_checks: int = 0
    avoidance_hits: int = 0
    boundary_hits: int = 0
    speed_clamps: int = 0
