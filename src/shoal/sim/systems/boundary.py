from __future__ import annotations

from typing import List

from ..core.agent import Agent
from ..core.config import FlockParameters, Viewport


def apply_boundary(agents: List[Agent], params: FlockParameters, viewport: Viewport) -> int:
    """Keep agents inside the centred viewport rectangle.

    ``"bounce"`` overwrites the offending velocity component so it points back
    inside; ``"turn"`` nudges it by ``turn_factor`` per tick instead. Axes are
    handled independently. Returns the number of agents touched.
    """
    margin = params.margin
    min_x = viewport.left + margin
    max_x = viewport.right - margin
    min_y = viewport.bottom + margin
    max_y = viewport.top - margin
    if params.boundary_policy == "turn":
        return _turn(agents, min_x, max_x, min_y, max_y, params.turn_factor)
    return _bounce(agents, min_x, max_x, min_y, max_y)


def _bounce(agents: List[Agent], min_x: float, max_x: float, min_y: float, max_y: float) -> int:
    hits = 0
    for agent in agents:
        pos = agent.position
        vel = agent.velocity
        touched = False
        if pos.x < min_x:
            vel.x = abs(vel.x)
            touched = True
        if pos.x > max_x:
            vel.x = -abs(vel.x)
            touched = True
        if pos.y > max_y:
            vel.y = -abs(vel.y)
            touched = True
        if pos.y < min_y:
            vel.y = abs(vel.y)
            touched = True
        if touched:
            hits += 1
    return hits


def _turn(agents: List[Agent], min_x: float, max_x: float, min_y: float, max_y: float, turn_factor: float) -> int:
    hits = 0
    for agent in agents:
        pos = agent.position
        vel = agent.velocity
        touched = False
        if pos.x < min_x:
            vel.x += turn_factor
            touched = True
        if pos.x > max_x:
            vel.x -= turn_factor
            touched = True
        if pos.y > max_y:
            vel.y -= turn_factor
            touched = True
        if pos.y < min_y:
            vel.y += turn_factor
            touched = True
        if touched:
            hits += 1
    return hits
