from __future__ import annotations

import logging
import math
from dataclasses import replace
from time import perf_counter
from typing import Any, Dict, List, Set

from pygame.math import Vector2

from .agent import Agent
from .config import FlockParameters, SimulationConfig, Viewport
from .pipeline import run_tick
from .rng import DeterministicRng
from ..systems import metrics as metrics_system
from ..types.flock import FlockStatistics, TickReport
from ..types.metrics import TickMetrics
from ..types.snapshot import Snapshot, SnapshotMetadata, SnapshotWorld
from ..utils.math2d import _heading_from_velocity

logger = logging.getLogger(__name__)

_WEIGHT_FIELDS = ("avoid_factor", "matching_factor", "centering_factor")


class World:
    """Owns the fish population and drives it through one pipeline tick per ``step``.

    Parameters and viewport live on the config and are read fresh at the start
    of every tick, so callers may change them between ticks.
    """

    def __init__(self, config: SimulationConfig):
        config.validate()
        self._config = config
        self._rng = DeterministicRng(config.seed)
        self._agents: List[Agent] = []
        self._metrics: TickMetrics | None = None
        self._last_report: TickReport | None = None
        self._reported_invalid: Set[tuple[str, str]] = set()
        self._bootstrap_population()

    @property
    def agents(self) -> List[Agent]:
        return self._agents

    @property
    def metrics(self) -> TickMetrics | None:
        return self._metrics

    @property
    def last_report(self) -> TickReport | None:
        return self._last_report

    @property
    def parameters(self) -> FlockParameters:
        return self._config.parameters

    @property
    def viewport(self) -> Viewport:
        return self._config.viewport

    def reset(self, seed: int | None = None) -> None:
        if seed is not None:
            self._config.seed = seed
            self._rng.reseed(seed)
        else:
            self._rng.reset()
        self._agents.clear()
        self._metrics = None
        self._last_report = None
        self._bootstrap_population()

    def update_parameters(self, **changes: Any) -> FlockParameters:
        updated = replace(self._config.parameters, **changes)
        updated.validate()
        self._config.parameters = updated
        logger.info("Flock parameters updated: %s", changes)
        return updated

    def resize(self, width: float, height: float) -> Viewport:
        self._config.viewport = Viewport(width=float(width), height=float(height))
        logger.info("Viewport resized to %.1f x %.1f", width, height)
        return self._config.viewport

    def step(self, tick: int) -> TickMetrics:
        start = perf_counter()
        params = self._tick_parameters()
        viewport = self._config.viewport
        report = run_tick(self._agents, params, viewport)
        elapsed_ms = (perf_counter() - start) * 1000.0
        self._last_report = report
        self._metrics = metrics_system.create_metrics(tick, self._agents, report, elapsed_ms)
        return self._metrics

    def snapshot(self, tick: int) -> Snapshot:
        metrics = self._metrics
        if metrics is None:
            metrics = metrics_system.create_metrics(
                tick, self._agents, TickReport(statistics=FlockStatistics()), 0.0
            )
        config = self._config
        metadata = SnapshotMetadata(
            sim_dt=config.time_step,
            tick_rate=0.0 if config.time_step <= 0 else 1.0 / config.time_step,
            seed=config.seed,
            config_version=config.config_version,
        )
        return Snapshot(
            tick=tick,
            metrics=metrics,
            agents=[self._agent_snapshot(agent) for agent in self._agents],
            world=SnapshotWorld(width=config.viewport.width, height=config.viewport.height),
            metadata=metadata,
            parameters=config.parameters.as_dict(),
        )

    def _tick_parameters(self) -> FlockParameters:
        params = self._config.parameters
        invalid: Dict[str, float] = {}
        for name in _WEIGHT_FIELDS:
            value = getattr(params, name)
            if not math.isfinite(value):
                invalid[name] = 0.0
                key = (name, repr(value))
                if key not in self._reported_invalid:
                    self._reported_invalid.add(key)
                    logger.warning("Ignoring non-finite %s=%r for this tick", name, value)
        if not invalid:
            return params
        return replace(params, **invalid)

    def _bootstrap_population(self) -> None:
        extent = self._config.spawn_extent
        min_speed = self._config.parameters.min_speed
        for agent_id in range(self._config.initial_population):
            position = Vector2(
                self._rng.next_range(-extent, extent),
                self._rng.next_range(-extent, extent),
            )
            velocity = self._rng.next_unit_circle() * min_speed
            self._agents.append(
                Agent(
                    id=agent_id,
                    position=position,
                    velocity=velocity,
                    heading=_heading_from_velocity(velocity),
                )
            )
        logger.info("Spawned %d fish (seed=%d)", len(self._agents), self._config.seed)

    @staticmethod
    def _agent_snapshot(agent: Agent) -> Dict[str, Any]:
        velocity = agent.velocity
        return {
            "id": agent.id,
            "x": agent.position.x,
            "y": agent.position.y,
            "vx": velocity.x,
            "vy": velocity.y,
            "speed": velocity.length(),
            "heading": agent.heading,
        }
