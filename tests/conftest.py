import matplotlib

matplotlib.use('Agg')

import pytest

from uav_nav.terrain import TerrainGrid, TerrainType


@pytest.fixture
def open_grid():
    """11x11 all-NORMAL grid"""
    return TerrainGrid(11, 11)


@pytest.fixture
def corridor_grid():
    """5x3 grid with obstacle rows above and below an open middle row"""
    grid = TerrainGrid(5, 3)
    for x in range(5):
        grid.set_cell(x, 0, TerrainType.OBSTACLE)
        grid.set_cell(x, 2, TerrainType.OBSTACLE)
    return grid
