from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml

BOUNDARY_POLICIES = ("bounce", "turn")
AVOIDANCE_METRICS = ("velocity", "position")

# Slider ranges of the tuning panel; only the parameter source clamps to these.
PARAMETER_RANGES: Dict[str, tuple[float, float]] = {
    "avoid_factor": (0.01, 1.0),
    "matching_factor": (0.01, 0.1),
    "centering_factor": (0.0005, 0.001),
}


@dataclass
class FlockParameters:
    avoid_factor: float = 0.05
    matching_factor: float = 0.5
    centering_factor: float = 0.0005
    neighbor_radius: float = 50.0
    min_speed: float = 2.0
    max_speed: float = 5.0
    margin: float = 100.0
    # "turn" policy only
    turn_factor: float = 0.2
    boundary_policy: str = "bounce"
    # "velocity" compares headings; "position" compares locations
    avoidance_metric: str = "velocity"

    def validate(self) -> None:
        if not self.min_speed > 0.0:
            raise ValueError(f"min_speed must be positive, got {self.min_speed}")
        if self.min_speed > self.max_speed:
            raise ValueError(f"min_speed ({self.min_speed}) exceeds max_speed ({self.max_speed})")
        if self.boundary_policy not in BOUNDARY_POLICIES:
            raise ValueError(f"Unknown boundary policy: {self.boundary_policy}")
        if self.avoidance_metric not in AVOIDANCE_METRICS:
            raise ValueError(f"Unknown avoidance metric: {self.avoidance_metric}")

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Viewport:
    width: float = 1280.0
    height: float = 720.0

    @property
    def left(self) -> float:
        return -self.width / 2.0

    @property
    def right(self) -> float:
        return self.width / 2.0

    @property
    def bottom(self) -> float:
        return -self.height / 2.0

    @property
    def top(self) -> float:
        return self.height / 2.0


@dataclass
class SimulationConfig:
    time_step: float = 1.0 / 64.0
    initial_population: int = 99
    spawn_extent: float = 100.0
    seed: int = 42
    config_version: str = "v1"
    parameters: FlockParameters = field(default_factory=FlockParameters)
    viewport: Viewport = field(default_factory=Viewport)

    def validate(self) -> None:
        if self.initial_population < 0:
            raise ValueError(f"initial_population must be >= 0, got {self.initial_population}")
        if not self.time_step > 0.0:
            raise ValueError(f"time_step must be positive, got {self.time_step}")
        self.parameters.validate()

    @staticmethod
    def from_yaml(path: Path) -> "SimulationConfig":
        data = yaml.safe_load(Path(path).read_text()) or {}
        return load_config(data)


@dataclass
class AppConfig:
    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    broadcast_interval: int = 2


def load_config(raw: dict) -> SimulationConfig:
    parameters = FlockParameters(**raw.get("parameters", {}))
    viewport = Viewport(**raw.get("viewport", {}))
    sim_values = {k: v for k, v in raw.items() if k not in {"parameters", "viewport"}}
    config = SimulationConfig(parameters=parameters, viewport=viewport, **sim_values)
    config.validate()
    return config
