"""
Terrain Grid Module
===================

Bounded terrain map with per-cell movement cost.

Out-of-bounds queries report OBSTACLE and out-of-bounds writes are dropped,
so every read on the grid is total.
"""

import numpy as np
from pathlib import Path
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple

from .types import TerrainType, TerrainProperties


class Coordinate(NamedTuple):
    """Grid cell (x, y); x is the column, y the row"""
    x: int
    y: int

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


class MalformedMapError(ValueError):
    """Map rows cannot form a grid"""


class TerrainGrid:
    """
    Dense width x height terrain map.

    Cells are stored in a numpy array indexed ``[x, y]`` holding
    ``TerrainType`` values; every cell starts as NORMAL.

    Provides:
    - Cell queries and writes (bounds-safe)
    - Movement cost and passability
    - Text map loading and serialisation
    - Map statistics
    """

    def __init__(self, width: int, height: int):
        """
        Initialize an all-NORMAL grid.

        Args:
            width: Number of columns (> 0)
            height: Number of rows (> 0)
        """
        if width < 1 or height < 1:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        self._cells = np.full((width, height), TerrainType.NORMAL, dtype=np.int8)

        # Statistics cache
        self._stats: Optional[Dict] = None

    # ==================== Construction ====================

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> 'TerrainGrid':
        """Build a grid from text map rows"""
        if not rows or not rows[0]:
            raise MalformedMapError(cls._malformed_reason(rows))
        grid = cls(len(rows[0]), len(rows))
        grid.load_from_rows(rows)
        return grid

    @classmethod
    def from_file(cls, filepath: str) -> 'TerrainGrid':
        """Load a grid from a text map file"""
        text = Path(filepath).read_text()
        return cls.from_rows(text.splitlines())

    def load_from_rows(self, rows: Sequence[str]):
        """
        Replace the grid contents with a text map.

        Height is the number of rows and width the length of the first
        row. Later rows are read up to min(width, len(row)); a short row
        leaves its trailing cells NORMAL.

        Raises:
            MalformedMapError: rows is empty or the first row is empty.
                The grid is left unmodified.
        """
        if not rows or not rows[0]:
            raise MalformedMapError(self._malformed_reason(rows))

        width, height = len(rows[0]), len(rows)
        cells = np.full((width, height), TerrainType.NORMAL, dtype=np.int8)
        for y, row in enumerate(rows):
            for x, char in enumerate(row[:width]):
                cells[x, y] = TerrainType.from_char(char)

        self._cells = cells
        self._stats = None

    @staticmethod
    def _malformed_reason(rows: Sequence[str]) -> str:
        if not rows:
            return "Empty map data"
        return "First map row is empty"

    def copy(self) -> 'TerrainGrid':
        """Independent snapshot of this grid"""
        clone = TerrainGrid(self.width, self.height)
        clone._cells = self._cells.copy()
        return clone

    # ==================== Property Access ====================

    @property
    def width(self) -> int:
        return self._cells.shape[0]

    @property
    def height(self) -> int:
        return self._cells.shape[1]

    @property
    def terrain(self) -> np.ndarray:
        """Terrain type map indexed [x, y] (read-only view)"""
        view = self._cells.view()
        view.flags.writeable = False
        return view

    # ==================== Cell Queries ====================

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if cell is within map bounds"""
        return 0 <= x < self.width and 0 <= y < self.height

    def cell(self, x: int, y: int) -> TerrainType:
        """Get terrain type at cell; OBSTACLE outside the grid"""
        if not self.in_bounds(x, y):
            return TerrainType.OBSTACLE
        return TerrainType(int(self._cells[x, y]))

    def set_cell(self, x: int, y: int, category: TerrainType):
        """Set terrain type at cell; writes outside the grid are ignored"""
        if not self.in_bounds(x, y):
            return
        self._cells[x, y] = TerrainType(category)
        self._stats = None

    def movement_cost(self, x: int, y: int) -> float:
        """Movement cost of occupying the cell"""
        return TerrainProperties.get_movement_cost(self.cell(x, y))

    def is_passable(self, x: int, y: int) -> bool:
        """In bounds and not an obstacle. Advisory: nothing enforces it."""
        return self.cell(x, y) != TerrainType.OBSTACLE

    def get_neighbors(self, x: int, y: int) -> List[Coordinate]:
        """Passable 8-connected neighbour cells"""
        neighbors = []
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                if dx == 0 and dy == 0:
                    continue
                if self.is_passable(x + dx, y + dy):
                    neighbors.append(Coordinate(x + dx, y + dy))
        return neighbors

    def obstacle_count_around(self, x: int, y: int) -> int:
        """Obstacle cells in the 3x3 block centred on (x, y), clipped to the grid"""
        x0, x1 = max(x - 1, 0), min(x + 2, self.width)
        y0, y1 = max(y - 1, 0), min(y + 2, self.height)
        if x0 >= x1 or y0 >= y1:
            return 0
        block = self._cells[x0:x1, y0:y1]
        return int(np.count_nonzero(block == TerrainType.OBSTACLE))

    def count(self, category: TerrainType) -> int:
        """Number of cells of the given category"""
        return int(np.count_nonzero(self._cells == category))

    # ==================== Statistics ====================

    def get_stats(self) -> Dict:
        """Get map statistics (cached)"""
        if self._stats is None:
            self._stats = self._compute_stats()
        return self._stats

    def _compute_stats(self) -> Dict:
        total_cells = self.width * self.height

        terrain_counts = {}
        for t in TerrainType:
            count = self.count(t)
            terrain_counts[t.name_lower] = {
                'count': count,
                'percentage': float(count / total_cells * 100)
            }

        return {
            'width': self.width,
            'height': self.height,
            'total_cells': total_cells,
            'terrain_distribution': terrain_counts,
        }

    # ==================== Serialisation ====================

    def to_rows(self) -> List[str]:
        """Text map rows, one character per cell"""
        return [
            ''.join(TerrainType(int(self._cells[x, y])).char for x in range(self.width))
            for y in range(self.height)
        ]

    def save(self, filepath: str):
        """Write the grid as a text map"""
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text('\n'.join(self.to_rows()) + '\n')

    def __str__(self) -> str:
        return '\n'.join(self.to_rows()) + '\n'

    def __repr__(self) -> str:
        return f"TerrainGrid(width={self.width}, height={self.height})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, TerrainGrid):
            return NotImplemented
        return np.array_equal(self._cells, other._cells)

    __hash__ = None

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.width, self.height)
