import math

import pytest

from shoal.sim.core.config import SimulationConfig
from shoal.sim.core.world import World


@pytest.mark.long_run
def test_long_run_keeps_speed_and_population():
    config = SimulationConfig(initial_population=299)
    world = World(config)
    params = config.parameters

    for tick in range(3000):
        metrics = world.step(tick)
        assert metrics.population == 299
        for agent in world.agents:
            speed = math.hypot(agent.velocity.x, agent.velocity.y)
            assert params.min_speed - 1e-9 <= speed <= params.max_speed + 1e-9
            assert math.isfinite(agent.position.x) and math.isfinite(agent.position.y)
