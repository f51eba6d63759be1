"""
Built-in maps used by the command line and the tests.
"""

from .grid import TerrainGrid
from .types import TerrainType


SAMPLE_MAP = (
    "...........",
    "..O.O.O....",
    "...........",
    ".O..^..O...",
    "...........",
    "...W.W.W...",
    "...........",
    ".O..^..O...",
    "...........",
    "..O.O.O....",
    "...........",
)

COMPLEX_MAP = (
    "..O.......O.......O..",
    ".O..^^^^^..O.WWW.O...",
    "O....^^^....W.W.W...O",
    ".....^.^.....W.W.....",
    "..O...^...O...W...O..",
    "......^..............",
    "..OOO.^.OOO.WWW.OOO..",
    "......^..............",
    "..O...^...O...W...O..",
    ".....^.^.....W.W.....",
    "O....^^^....W.W.W...O",
    ".O..^^^^^..O.WWW.O...",
    "..O.......O.......O..",
)

# (x, y, terrain) placed on an otherwise empty grid
_DEMO_FEATURES = (
    (2, 1, TerrainType.OBSTACLE),
    (4, 1, TerrainType.OBSTACLE),
    (6, 1, TerrainType.OBSTACLE),
    (1, 3, TerrainType.OBSTACLE),
    (7, 3, TerrainType.OBSTACLE),
    (4, 3, TerrainType.HILL),
    (3, 5, TerrainType.WIND),
    (5, 5, TerrainType.WIND),
    (7, 5, TerrainType.WIND),
)

DEMO_MIN_SIZE = 11


def sample_map() -> TerrainGrid:
    """11x11 map with symmetric obstacle rows, two hills and a wind band"""
    return TerrainGrid.from_rows(SAMPLE_MAP)


def complex_map() -> TerrainGrid:
    """21x13 map with a hill ridge, wind corridors and obstacle walls"""
    return TerrainGrid.from_rows(COMPLEX_MAP)


def demo_map(size: int = DEMO_MIN_SIZE) -> TerrainGrid:
    """
    Square grid with the default demo features.

    Grids smaller than 11x11 are returned empty.
    """
    grid = TerrainGrid(size, size)
    if size >= DEMO_MIN_SIZE:
        for x, y, terrain in _DEMO_FEATURES:
            grid.set_cell(x, y, terrain)
    return grid


BUILTIN_MAPS = {
    'sample': sample_map,
    'complex': complex_map,
    'demo': demo_map,
}
