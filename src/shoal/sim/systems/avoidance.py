from __future__ import annotations

import math
from typing import List

from ..core.agent import Agent
from ..core.config import FlockParameters


def apply_avoidance(agents: List[Agent], params: FlockParameters) -> tuple[int, int]:
    """Push agents apart, visiting each unordered pair once.

    Only the lower-indexed agent of a pair is adjusted, and its adjusted
    velocity is what later pairs see. With the default ``"velocity"`` metric
    closeness is measured between velocities, not positions. Returns
    ``(pair_checks, hits)``.
    """
    radius = params.neighbor_radius
    factor = params.avoid_factor
    by_position = params.avoidance_metric == "position"
    count = len(agents)
    hits = 0

    for i in range(count):
        first = agents[i]
        velocity = first.velocity
        for j in range(i + 1, count):
            second = agents[j]
            if by_position:
                dx = first.position.x - second.position.x
                dy = first.position.y - second.position.y
            else:
                dx = velocity.x - second.velocity.x
                dy = velocity.y - second.velocity.y
            distance = math.hypot(dx, dy)
            if not distance < radius:
                continue
            hits += 1
            # identical vectors have no direction to push along
            if distance == 0.0:
                continue
            scale = factor / distance
            velocity.x += dx * scale
            velocity.y += dy * scale

    return count * (count - 1) // 2, hits
