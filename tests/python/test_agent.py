from __future__ import annotations

from pygame.math import Vector2

from shoal.sim.core.agent import Agent
from shoal.sim.core.config import SimulationConfig
from shoal.sim.core.world import World


def _make_agent(agent_id: int) -> Agent:
    return Agent(id=agent_id, position=Vector2(), velocity=Vector2())


def test_agent_uses_slots_and_isolates_vectors():
    agent_a = _make_agent(1)
    agent_b = _make_agent(2)

    assert not hasattr(agent_a, "__dict__")
    assert hasattr(Agent, "__slots__")

    agent_a.velocity.x = 1.5
    assert agent_b.velocity.x == 0.0


def test_world_agents_serialize_to_snapshot():
    world = World(SimulationConfig(seed=404, initial_population=2))

    assert all(not hasattr(agent, "__dict__") for agent in world.agents)
    snapshot = world.snapshot(0)

    assert snapshot.metrics.population == len(world.agents)
    assert len(snapshot.agents) == 2
    assert snapshot.agents[0]["id"] == world.agents[0].id
