"""Configuration defaults, validation and JSON round-trips."""

import pytest

from uav_nav.config import (
    BackendConfig,
    Config,
    MapConfig,
    PlannerConfig,
    StatisticsConfig,
)


def test_defaults():
    config = Config()
    assert config.planner.algorithm == 'A*'
    assert config.planner.validate_endpoints
    assert config.statistics.adjacency_mode == 'approximate'
    assert config.statistics.adjacency_divisor == 3
    assert config.statistics.adjacency_cap == 10
    assert config.budget.max_energy == 1000.0
    assert config.backend.command is None
    assert len(config.visualization.terrain_colors) == 4


@pytest.mark.parametrize('kwargs', [
    {'width': 0},
    {'height': -2},
    {'obstacle_density': 1.0},
    {'obstacle_density': -0.1},
])
def test_map_config_validation(kwargs):
    with pytest.raises(ValueError):
        MapConfig(**kwargs)


def test_statistics_config_validation():
    with pytest.raises(ValueError):
        StatisticsConfig(adjacency_mode='nearest')
    with pytest.raises(ValueError):
        StatisticsConfig(adjacency_divisor=0)


def test_from_dict_expands_sections():
    config = Config.from_dict({
        'map': {'width': 30, 'num_hill_regions': [2, 3]},
        'statistics': {'adjacency_mode': 'exact'},
        'backend': {'command': ['./uav_optimizer', '--quiet']},
        'verbose': True,
        'unknown_key': 1,
    })
    assert config.map.width == 30
    assert config.map.height == 20
    assert config.map.num_hill_regions == (2, 3)
    assert config.statistics.adjacency_mode == 'exact'
    assert config.backend.command == ['./uav_optimizer', '--quiet']
    assert config.verbose
    assert not hasattr(config, 'unknown_key')


def test_json_round_trip(tmp_path):
    config = Config(
        planner=PlannerConfig(algorithm='Dijkstra', validate_endpoints=False),
        backend=BackendConfig(command=['planner'], timeout_seconds=5.0),
        random_seed=11,
    )
    path = tmp_path / 'conf' / 'config.json'
    config.save_json(str(path))

    loaded = Config.from_json(str(path))
    assert loaded == config
    assert loaded.to_dict() == config.to_dict()


def test_backend_output_never_collides_with_summary_log():
    config = Config()
    assert config.backend.path_filename != config.output.summary_filename
    assert config.budget.low_energy_fraction == 0.20
