from __future__ import annotations

from pathlib import Path

import pytest

from shoal.sim.core.config import (
    PARAMETER_RANGES,
    AppConfig,
    FlockParameters,
    SimulationConfig,
    Viewport,
    load_config,
)

ROOT = Path(__file__).resolve().parents[2]


def test_default_yaml_matches_dataclass_defaults():
    config = SimulationConfig.from_yaml(ROOT / "configs" / "default.yaml")

    assert config == SimulationConfig()
    assert config.time_step == pytest.approx(1.0 / 64.0)


def test_yaml_overrides_nested_values(tmp_path):
    path = tmp_path / "flock.yaml"
    path.write_text(
        "initial_population: 150\n"
        "seed: 9\n"
        "parameters:\n"
        "  boundary_policy: turn\n"
        "  avoidance_metric: position\n"
        "  neighbor_radius: 25.0\n"
        "viewport:\n"
        "  width: 800\n"
    )

    config = SimulationConfig.from_yaml(path)

    assert config.initial_population == 150
    assert config.seed == 9
    assert config.parameters.boundary_policy == "turn"
    assert config.parameters.avoidance_metric == "position"
    assert config.parameters.neighbor_radius == 25.0
    assert config.parameters.avoid_factor == FlockParameters().avoid_factor
    assert config.viewport == Viewport(width=800, height=720.0)


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")

    assert SimulationConfig.from_yaml(path) == SimulationConfig()


def test_unknown_keys_are_rejected():
    with pytest.raises(TypeError):
        load_config({"parameters": {"separation_weight": 1.0}})


@pytest.mark.parametrize(
    "parameters",
    [
        {"min_speed": 0.0},
        {"min_speed": 6.0, "max_speed": 5.0},
        {"boundary_policy": "wrap"},
        {"avoidance_metric": "heading"},
    ],
)
def test_invalid_parameters_fail_validation(parameters):
    with pytest.raises(ValueError):
        load_config({"parameters": parameters})


def test_invalid_simulation_values_fail_validation():
    with pytest.raises(ValueError):
        SimulationConfig(initial_population=-1).validate()
    with pytest.raises(ValueError):
        SimulationConfig(time_step=0.0).validate()


def test_viewport_edges_are_centred():
    viewport = Viewport(width=200.0, height=100.0)

    assert (viewport.left, viewport.right) == (-100.0, 100.0)
    assert (viewport.bottom, viewport.top) == (-50.0, 50.0)


def test_slider_ranges_cover_weight_defaults_except_matching():
    defaults = FlockParameters()
    low, high = PARAMETER_RANGES["avoid_factor"]
    assert low <= defaults.avoid_factor <= high
    low, high = PARAMETER_RANGES["centering_factor"]
    assert low <= defaults.centering_factor <= high
    # the default matching weight starts above its slider range
    assert defaults.matching_factor > PARAMETER_RANGES["matching_factor"][1]


def test_app_config_defaults():
    app_config = AppConfig()

    assert app_config.broadcast_interval == 2
    assert app_config.simulation == SimulationConfig()
