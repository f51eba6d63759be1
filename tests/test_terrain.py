"""Terrain types, grid queries, map loading and built-in maps."""

import pytest

from uav_nav.config import MapConfig
from uav_nav.terrain import (
    Coordinate,
    MalformedMapError,
    MapGenerator,
    TerrainGrid,
    TerrainType,
    complex_map,
    demo_map,
    generate_start_end,
    sample_map,
)


def test_new_grid_is_all_normal():
    grid = TerrainGrid(4, 3)
    assert (grid.width, grid.height) == (4, 3)
    assert all(grid.cell(x, y) == TerrainType.NORMAL for x in range(4) for y in range(3))


@pytest.mark.parametrize('width,height', [(0, 5), (5, 0), (-1, 3)])
def test_grid_rejects_non_positive_size(width, height):
    with pytest.raises(ValueError):
        TerrainGrid(width, height)


@pytest.mark.parametrize('category', list(TerrainType))
def test_set_cell_then_cell(open_grid, category):
    open_grid.set_cell(3, 7, category)
    assert open_grid.cell(3, 7) == category


@pytest.mark.parametrize('x,y', [(-1, 0), (0, -1), (11, 0), (0, 11), (50, 50), (-5, -5)])
def test_out_of_bounds_is_obstacle_regardless_of_writes(open_grid, x, y):
    open_grid.set_cell(x, y, TerrainType.HILL)
    assert open_grid.cell(x, y) == TerrainType.OBSTACLE
    assert open_grid.movement_cost(x, y) == 1000.0
    assert not open_grid.is_passable(x, y)


def test_out_of_bounds_write_leaves_grid_untouched(open_grid):
    before = open_grid.to_rows()
    open_grid.set_cell(11, 3, TerrainType.WIND)
    assert open_grid.to_rows() == before


def test_movement_cost_table(open_grid):
    expected = {
        TerrainType.NORMAL: 1.0,
        TerrainType.WIND: 2.0,
        TerrainType.HILL: 3.0,
        TerrainType.OBSTACLE: 1000.0,
    }
    for category, cost in expected.items():
        open_grid.set_cell(0, 0, category)
        assert open_grid.movement_cost(0, 0) == cost
        assert category.movement_cost == cost


def test_is_passable(open_grid):
    open_grid.set_cell(2, 2, TerrainType.OBSTACLE)
    open_grid.set_cell(3, 3, TerrainType.HILL)
    assert not open_grid.is_passable(2, 2)
    assert open_grid.is_passable(3, 3)
    assert open_grid.is_passable(0, 0)


def test_load_three_by_three_map():
    grid = TerrainGrid.from_rows(["...", ".O.", "..."])
    assert (grid.width, grid.height) == (3, 3)
    assert grid.cell(1, 1) == TerrainType.OBSTACLE
    assert grid.cell(0, 0) == TerrainType.NORMAL


def test_load_all_characters():
    grid = TerrainGrid.from_rows([".O^W", "ow?x"])
    assert [grid.cell(x, 0) for x in range(4)] == [
        TerrainType.NORMAL, TerrainType.OBSTACLE, TerrainType.HILL, TerrainType.WIND
    ]
    assert grid.cell(0, 1) == TerrainType.OBSTACLE
    assert grid.cell(1, 1) == TerrainType.WIND
    # Unknown characters read as normal terrain
    assert grid.cell(2, 1) == TerrainType.NORMAL
    assert grid.cell(3, 1) == TerrainType.NORMAL


def test_short_rows_leave_trailing_cells_normal():
    grid = TerrainGrid.from_rows(["....", "O", "^^"])
    assert (grid.width, grid.height) == (4, 3)
    assert grid.cell(0, 1) == TerrainType.OBSTACLE
    assert grid.cell(1, 1) == TerrainType.NORMAL
    assert grid.cell(3, 2) == TerrainType.NORMAL


def test_long_rows_are_truncated_to_first_row_width():
    grid = TerrainGrid.from_rows(["..", "^^^^"])
    assert grid.width == 2
    assert grid.cell(1, 1) == TerrainType.HILL
    assert grid.cell(2, 1) == TerrainType.OBSTACLE  # outside the grid


def test_empty_rows_fail_and_leave_grid_untouched():
    grid = TerrainGrid.from_rows(["^^", "WW"])
    with pytest.raises(MalformedMapError):
        grid.load_from_rows([])
    assert grid.to_rows() == ["^^", "WW"]


def test_empty_first_row_is_malformed():
    with pytest.raises(MalformedMapError):
        TerrainGrid.from_rows(["", "..."])
    with pytest.raises(MalformedMapError):
        TerrainGrid.from_rows([])


def test_malformed_map_error_is_value_error():
    assert issubclass(MalformedMapError, ValueError)


def test_load_from_rows_resizes_grid(open_grid):
    open_grid.load_from_rows(["W.", ".^", ".."])
    assert (open_grid.width, open_grid.height) == (2, 3)
    assert open_grid.cell(0, 0) == TerrainType.WIND
    assert open_grid.cell(1, 1) == TerrainType.HILL


def test_save_and_load_file(tmp_path):
    grid = sample_map()
    path = tmp_path / 'maps' / 'sample.txt'
    grid.save(str(path))
    assert TerrainGrid.from_file(str(path)) == grid


def test_from_file_handles_crlf(tmp_path):
    path = tmp_path / 'crlf.txt'
    path.write_bytes(b"..O\r\n^W.\r\n")
    grid = TerrainGrid.from_file(str(path))
    assert grid.to_rows() == ["..O", "^W."]


def test_str_matches_rows():
    grid = TerrainGrid.from_rows(["O.", "^W"])
    assert str(grid) == "O.\n^W\n"


def test_copy_is_independent(open_grid):
    snapshot = open_grid.copy()
    open_grid.set_cell(1, 1, TerrainType.OBSTACLE)
    assert snapshot.cell(1, 1) == TerrainType.NORMAL
    assert snapshot != open_grid


def test_terrain_view_is_read_only(open_grid):
    with pytest.raises(ValueError):
        open_grid.terrain[0, 0] = TerrainType.HILL


def test_neighbors_skip_obstacles_and_edges(open_grid):
    open_grid.set_cell(1, 0, TerrainType.OBSTACLE)
    neighbors = open_grid.get_neighbors(0, 0)
    assert set(neighbors) == {Coordinate(0, 1), Coordinate(1, 1)}


def test_obstacle_count_around_is_clipped(corridor_grid):
    assert corridor_grid.obstacle_count_around(0, 1) == 4
    assert corridor_grid.obstacle_count_around(2, 1) == 6
    assert corridor_grid.obstacle_count_around(-1, 1) == 2
    assert corridor_grid.obstacle_count_around(-5, -5) == 0


def test_stats_follow_writes(open_grid):
    assert open_grid.get_stats()['terrain_distribution']['normal']['count'] == 121
    open_grid.set_cell(0, 0, TerrainType.WIND)
    stats = open_grid.get_stats()
    assert stats['terrain_distribution']['wind']['count'] == 1
    assert stats['total_cells'] == 121


def test_coordinate_is_value_type():
    a = Coordinate(1, 2)
    assert a == (1, 2)
    assert Coordinate(1, 2) < Coordinate(1, 3) < Coordinate(2, 0)
    assert str(a) == "(1, 2)"
    with pytest.raises(AttributeError):
        a.x = 5


def test_sample_map_layout():
    grid = sample_map()
    assert (grid.width, grid.height) == (11, 11)
    assert grid.cell(2, 1) == TerrainType.OBSTACLE
    assert grid.cell(4, 3) == TerrainType.HILL
    assert grid.cell(3, 5) == TerrainType.WIND


def test_complex_map_layout():
    grid = complex_map()
    assert (grid.width, grid.height) == (21, 13)
    assert grid.cell(2, 0) == TerrainType.OBSTACLE
    assert grid.cell(6, 5) == TerrainType.HILL
    assert grid.cell(13, 1) == TerrainType.WIND


def test_demo_map_features_match_sample_map():
    demo, sample = demo_map(11), sample_map()
    for x, y in [(2, 1), (4, 1), (6, 1), (1, 3), (7, 3), (4, 3), (3, 5), (5, 5), (7, 5)]:
        assert demo.cell(x, y) == sample.cell(x, y)


def test_small_demo_map_is_empty():
    grid = demo_map(5)
    assert grid.count(TerrainType.NORMAL) == 25


def test_generator_is_deterministic():
    config = MapConfig(width=15, height=12)
    a = MapGenerator(config, seed=7).generate()
    b = MapGenerator(config, seed=7).generate()
    assert a == b
    assert (a.width, a.height) == (15, 12)


def test_generator_respects_zero_density():
    config = MapConfig(width=10, height=10, obstacle_density=0.0)
    grid = MapGenerator(config, seed=1).generate()
    assert grid.count(TerrainType.OBSTACLE) == 0


def test_generate_start_end_on_passable_cells():
    grid = MapGenerator(MapConfig(width=12, height=12), seed=3).generate()
    start, end = generate_start_end(grid, seed=3)
    assert grid.is_passable(*start)
    assert grid.is_passable(*end)
    assert start.x < 6 and start.y < 6
    assert end.x >= 6 and end.y >= 6
