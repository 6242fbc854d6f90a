from __future__ import annotations

import math
from typing import List

from ..core.agent import Agent
from ..utils.math2d import _set_length_xy


def limit_speed(agents: List[Agent], min_speed: float, max_speed: float) -> int:
    clamps = 0
    for agent in agents:
        vel = agent.velocity
        speed = math.hypot(vel.x, vel.y)
        target = None
        if speed > max_speed:
            target = max_speed
        if speed < min_speed:
            target = min_speed
        if target is None:
            continue
        vel.x, vel.y = _set_length_xy(vel.x, vel.y, target)
        clamps += 1
    return clamps
