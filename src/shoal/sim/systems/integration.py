from __future__ import annotations

from typing import List

from ..core.agent import Agent
from ..utils.math2d import _heading_from_velocity


def integrate(agents: List[Agent]) -> None:
    for agent in agents:
        velocity = agent.velocity
        agent.position.x += velocity.x
        agent.position.y += velocity.y
        if velocity.length_squared() > 1e-12:
            agent.heading = _heading_from_velocity(velocity)
