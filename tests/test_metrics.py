"""Statistics collection and the result record."""

import math

import pytest

from uav_nav.config import StatisticsConfig
from uav_nav.metrics import SUMMARY_HEADER, SimulationResult, StatisticsCollector, is_contiguous
from uav_nav.planning import synthesize
from uav_nav.terrain import TerrainGrid, TerrainType, complex_map, sample_map


@pytest.fixture
def collector():
    return StatisticsCollector()


@pytest.mark.parametrize('make_grid,start,end', [
    (sample_map, (0, 0), (10, 10)),
    (sample_map, (10, 0), (0, 10)),
    (complex_map, (0, 6), (20, 6)),
    (complex_map, (1, 0), (19, 12)),
])
def test_energy_matches_independent_sum(collector, make_grid, start, end):
    grid = make_grid()
    path = synthesize(grid, start, end)
    result = collector.collect(path, grid)
    assert result.energy_used == pytest.approx(sum(grid.movement_cost(x, y) for x, y in path))


def test_wind_cell_counted_once_with_cost_two(collector, open_grid):
    open_grid.set_cell(5, 5, TerrainType.WIND)
    path = synthesize(open_grid, (0, 0), (10, 10))
    assert (5, 5) in path

    result = collector.collect(path, open_grid)
    assert result.wind_crossed == 1
    assert result.energy_used == pytest.approx(12.0)

    baseline = collector.collect(path, TerrainGrid(11, 11))
    assert result.energy_used - baseline.energy_used == pytest.approx(1.0)
    assert baseline.wind_crossed == 0


def test_path_length_counts_transitions(collector, open_grid):
    result = collector.collect(synthesize(open_grid, (0, 0), (4, 2)), open_grid)
    assert result.path_length == 4
    assert len(result.path) == 5


def test_single_cell_path(collector, open_grid):
    result = collector.collect([(3, 3)], open_grid)
    assert result.path_length == 0
    assert result.energy_used == 1.0
    assert result.success


def test_revisited_cells_are_charged_again(collector, open_grid):
    open_grid.set_cell(1, 0, TerrainType.HILL)
    result = collector.collect([(0, 0), (1, 0), (1, 0), (2, 0)], open_grid)
    assert result.energy_used == pytest.approx(8.0)
    assert result.hill_crossed == 2


def test_empty_path_is_not_success(collector, open_grid):
    result = collector.collect([], open_grid)
    assert not result.success
    assert result.path_length == 0
    assert result.start is None and result.end is None


def test_obstacle_adjacency_approximation(collector, corridor_grid):
    path = [(x, 1) for x in range(5)]
    # 4 + 6 + 6 + 6 + 4 obstacle cells around the path, // 3
    assert collector.collect(path, corridor_grid).obstacle_adjacency == 8


def test_obstacle_adjacency_counts_diagonals_and_centre(collector):
    grid = TerrainGrid(3, 3)
    grid.set_cell(1, 1, TerrainType.OBSTACLE)
    assert collector.obstacle_adjacency([(1, 1)], grid) == 0
    assert collector.obstacle_adjacency([(0, 0), (1, 0), (2, 0), (0, 1)], grid) == 1


def test_obstacle_adjacency_is_capped(collector):
    grid = TerrainGrid(20, 3)
    for x in range(20):
        grid.set_cell(x, 0, TerrainType.OBSTACLE)
        grid.set_cell(x, 2, TerrainType.OBSTACLE)
    path = [(x, 1) for x in range(20)]
    assert collector.obstacle_adjacency(path, grid) == 10

    exact = StatisticsCollector(StatisticsConfig(adjacency_mode='exact'))
    assert exact.obstacle_adjacency(path, grid) == 40


def test_exact_adjacency_counts_distinct_obstacles(corridor_grid):
    exact = StatisticsCollector(StatisticsConfig(adjacency_mode='exact'))
    path = [(x, 1) for x in range(5)]
    assert exact.collect(path, corridor_grid).obstacle_adjacency == 10


def test_custom_adjacency_normalisation(corridor_grid):
    collector = StatisticsCollector(StatisticsConfig(adjacency_divisor=1, adjacency_cap=100))
    path = [(x, 1) for x in range(5)]
    assert collector.obstacle_adjacency(path, corridor_grid) == 26


def test_out_of_bounds_cells_cost_as_obstacles(collector, open_grid):
    result = collector.collect([(-1, 0), (0, 0)], open_grid)
    assert result.energy_used == pytest.approx(1001.0)
    assert result.obstacle_crossed == 1
    assert not result.valid
    assert result.success


def test_validity_and_contiguity_flags(collector, open_grid):
    open_grid.set_cell(1, 1, TerrainType.OBSTACLE)
    path = synthesize(open_grid, (0, 0), (2, 2))
    result = collector.collect(path, open_grid)
    assert result.valid
    assert not result.contiguous


def test_total_distance_and_average_cost(collector, open_grid):
    result = collector.collect(synthesize(open_grid, (0, 0), (3, 3)), open_grid)
    assert result.total_distance == pytest.approx(3 * math.sqrt(2))
    assert result.average_cost == pytest.approx(1.0)


def test_terrain_counts_cover_every_cell(collector):
    grid = sample_map()
    path = synthesize(grid, (0, 0), (10, 10))
    result = collector.collect(path, grid)
    assert sum(result.terrain_counts.values()) == len(path)
    assert result.terrain_counts['wind'] == result.wind_crossed


def test_algorithm_label_is_normalised(collector, open_grid):
    assert collector.collect([(0, 0)], open_grid, 'greedy').algorithm == 'Greedy'
    with pytest.raises(ValueError):
        collector.collect([(0, 0)], open_grid, 'BFS')


def test_result_is_read_only(collector, open_grid):
    result = collector.collect([(0, 0), (1, 1)], open_grid)
    with pytest.raises(AttributeError):
        result.energy_used = 0.0
    assert isinstance(result.path, tuple)


def test_summary_row_and_dict(collector, open_grid):
    result = collector.collect([(0, 0), (1, 1)], open_grid, 'Dijkstra', computation_time=0.5)
    row = result.summary_row()
    assert len(row) == len(SUMMARY_HEADER)
    assert row[1:] == ['Dijkstra', 1, 0.5, 2.0, 'true']

    d = result.to_dict()
    assert d['path'] == [[0, 0], [1, 1]]
    assert d['algorithm'] == 'Dijkstra'
    assert d['success'] is True


def test_energy_remaining():
    result = SimulationResult(algorithm='A*', path=(), energy_used=900.0)
    assert result.energy_remaining(1000.0) == pytest.approx(100.0)
    assert result.energy_remaining(500.0) == 0.0


def test_is_contiguous():
    assert is_contiguous([(0, 0), (1, 1), (1, 2)])
    assert is_contiguous([(0, 0)])
    assert not is_contiguous([(0, 0), (2, 0)])
