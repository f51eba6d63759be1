"""
Terrain Generator Module
========================

Procedural generation of terrain grids for batch experiments.
Single Responsibility: Only generates terrain grids and endpoints.
"""

import numpy as np
from scipy.ndimage import gaussian_filter
from typing import Tuple, Optional

from .types import TerrainType
from .grid import TerrainGrid, Coordinate
from ..config import MapConfig


class MapGenerator:
    """
    Procedural map generator for UAV navigation scenarios.

    Creates terrain with:
    - Smoothed hill regions
    - Wind zones
    - Scattered obstacles
    """

    def __init__(self, config: Optional[MapConfig] = None, seed: Optional[int] = None):
        self.config = config or MapConfig()
        self.seed = seed
        self.rng = np.random.default_rng(seed)
        self.width = self.config.width
        self.height = self.config.height

    def generate(self) -> TerrainGrid:
        """Generate a complete terrain grid"""
        terrain = np.full((self.width, self.height), TerrainType.NORMAL, dtype=np.int8)

        # 1. Hills
        self._add_smoothed_regions(terrain, TerrainType.HILL, self.config.num_hill_regions)

        # 2. Wind zones
        self._add_smoothed_regions(terrain, TerrainType.WIND, self.config.num_wind_regions)

        # 3. Scattered obstacles
        self._add_scattered_obstacles(terrain)

        grid = TerrainGrid(self.width, self.height)
        for x in range(self.width):
            for y in range(self.height):
                grid.set_cell(x, y, TerrainType(int(terrain[x, y])))
        return grid

    def _add_smoothed_regions(self, terrain: np.ndarray, terrain_type: TerrainType,
                              count_range: Tuple[int, int]):
        """Blur random seed points into blobs and paint the dense part"""
        lo, hi = count_range
        num_regions = int(self.rng.integers(lo, hi + 1))
        if num_regions == 0:
            return

        field = np.zeros((self.width, self.height), dtype=np.float64)
        r_lo, r_hi = self.config.region_radius
        for _ in range(num_regions):
            cx = self.rng.integers(0, self.width)
            cy = self.rng.integers(0, self.height)
            radius = int(self.rng.integers(r_lo, r_hi + 1))
            xs = slice(max(cx - radius, 0), min(cx + radius + 1, self.width))
            ys = slice(max(cy - radius, 0), min(cy + radius + 1, self.height))
            field[xs, ys] += 1.0

        if self.config.smoothing_sigma > 0:
            field = gaussian_filter(field, sigma=self.config.smoothing_sigma)

        mask = field > 0.5 * field.max() if field.max() > 0 else np.zeros_like(field, dtype=bool)
        terrain[mask & (terrain == TerrainType.NORMAL)] = terrain_type

    def _add_scattered_obstacles(self, terrain: np.ndarray):
        """Add single-cell obstacles at the configured density"""
        mask = self.rng.random((self.width, self.height)) < self.config.obstacle_density
        terrain[mask] = TerrainType.OBSTACLE


def generate_start_end(grid: TerrainGrid,
                       seed: Optional[int] = None) -> Tuple[Coordinate, Coordinate]:
    """
    Pick start and end cells on passable terrain.

    Start is drawn from the top-left quarter, end from the bottom-right
    quarter. Falls back to the corners when a quarter has no passable cell.
    """
    rng = np.random.default_rng(seed)

    def pick(xs: range, ys: range, fallback: Coordinate) -> Coordinate:
        candidates = [Coordinate(x, y) for x in xs for y in ys if grid.is_passable(x, y)]
        if not candidates:
            return fallback
        return candidates[int(rng.integers(0, len(candidates)))]

    half_w = max(grid.width // 2, 1)
    half_h = max(grid.height // 2, 1)

    start = pick(range(0, half_w), range(0, half_h), Coordinate(0, 0))
    end = pick(range(grid.width - half_w, grid.width),
               range(grid.height - half_h, grid.height),
               Coordinate(grid.width - 1, grid.height - 1))
    return start, end
