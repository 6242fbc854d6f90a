from __future__ import annotations

from typing import List

from ..core.agent import Agent
from ..types.flock import FlockStatistics


def apply_alignment(agents: List[Agent], statistics: FlockStatistics, matching_factor: float) -> None:
    """Steer each velocity ``matching_factor`` of the way toward the flock's mean velocity."""
    target_x = statistics.avg_velocity.x
    target_y = statistics.avg_velocity.y
    for agent in agents:
        velocity = agent.velocity
        velocity.x += (target_x - velocity.x) * matching_factor
        velocity.y += (target_y - velocity.y) * matching_factor


def apply_cohesion(agents: List[Agent], statistics: FlockStatistics, centering_factor: float) -> None:
    """Pull each velocity toward the flock's centre of mass.

    ``centering_factor`` multiplies a position offset, so it has to be orders
    of magnitude smaller than ``matching_factor`` to have a comparable effect.
    """
    center_x = statistics.avg_position.x
    center_y = statistics.avg_position.y
    for agent in agents:
        agent.velocity.x += (center_x - agent.position.x) * centering_factor
        agent.velocity.y += (center_y - agent.position.y) * centering_factor
