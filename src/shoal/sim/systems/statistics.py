from __future__ import annotations

from typing import List

from pygame.math import Vector2

from ..core.agent import Agent
from ..types.flock import FlockStatistics


def compute_flock_statistics(agents: List[Agent]) -> FlockStatistics:
    count = len(agents)
    if count == 0:
        return FlockStatistics()

    vel_x = 0.0
    vel_y = 0.0
    pos_x = 0.0
    pos_y = 0.0
    for agent in agents:
        vel_x += agent.velocity.x
        vel_y += agent.velocity.y
        pos_x += agent.position.x
        pos_y += agent.position.y

    return FlockStatistics(
        avg_velocity=Vector2(vel_x / count, vel_y / count),
        avg_position=Vector2(pos_x / count, pos_y / count),
    )
