"""
Path Metrics Module
===================

Reduction of a synthesized path into a simulation result record.
"""

import math
import time
from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional, Sequence, Tuple

from ..config import StatisticsConfig
from ..planning import Algorithm
from ..terrain import Coordinate, TerrainGrid, TerrainType


SUMMARY_HEADER = ('timestamp', 'algorithm', 'path_length',
                  'computation_time', 'energy_used', 'success')


@dataclass(frozen=True)
class SimulationResult:
    """
    Complete, read-only result of one simulation run.

    ``success`` is true whenever a non-empty path was produced; the
    synthesizer never fails, so it is effectively always true. ``valid``
    reports whether every path cell is passable.
    """
    algorithm: str
    path: Tuple[Coordinate, ...]

    # Core metrics
    path_length: int = 0          # transitions, len(path) - 1
    energy_used: float = 0.0
    wind_crossed: int = 0
    obstacle_adjacency: int = 0
    success: bool = False

    # Extended metrics
    computation_time: float = 0.0  # seconds
    total_distance: float = 0.0    # euclidean, cells
    average_cost: float = 0.0      # energy per path cell
    hill_crossed: int = 0
    obstacle_crossed: int = 0
    terrain_counts: Dict[str, int] = field(default_factory=dict)
    valid: bool = True
    contiguous: bool = True

    warnings: Tuple[str, ...] = ()
    source: str = 'internal'
    timestamp: int = field(default_factory=lambda: int(time.time()))

    @property
    def start(self) -> Optional[Coordinate]:
        return self.path[0] if self.path else None

    @property
    def end(self) -> Optional[Coordinate]:
        return self.path[-1] if self.path else None

    def energy_remaining(self, max_energy: float) -> float:
        """Energy left from a full battery of max_energy, floored at zero"""
        return max(max_energy - self.energy_used, 0.0)

    def summary_row(self) -> List:
        """Row matching SUMMARY_HEADER"""
        return [
            self.timestamp,
            self.algorithm,
            self.path_length,
            self.computation_time,
            self.energy_used,
            'true' if self.success else 'false',
        ]

    def to_dict(self) -> Dict:
        """Convert to dictionary for serialization"""
        d = asdict(self)
        d['path'] = [[p.x, p.y] for p in self.path]
        d['warnings'] = list(self.warnings)
        return d


class StatisticsCollector:
    """
    Reduces a path over a terrain grid into a SimulationResult.

    Metrics:
    - path_length: number of transitions
    - energy_used: movement cost summed over every path cell, revisits included
    - wind_crossed: path cells on WIND
    - obstacle_adjacency: see obstacle_adjacency()
    """

    def __init__(self, config: Optional[StatisticsConfig] = None):
        self.config = config or StatisticsConfig()

    def collect(self,
                path: Sequence[Tuple[int, int]],
                grid: TerrainGrid,
                algorithm='A*',
                computation_time: float = 0.0,
                source: str = 'internal') -> SimulationResult:
        """
        Compute all metrics for a path.

        Args:
            path: Ordered (x, y) cells
            grid: Terrain the path was built on
            algorithm: Algorithm tag or label
            computation_time: Seconds spent producing the path
            source: 'internal' or 'external'

        Returns:
            SimulationResult
        """
        path = tuple(Coordinate(int(p[0]), int(p[1])) for p in path)
        tag = Algorithm.from_label(algorithm).value

        counts = self.terrain_counts(path, grid)
        energy = self.energy_used(path, grid)

        return SimulationResult(
            algorithm=tag,
            path=path,
            path_length=max(len(path) - 1, 0),
            energy_used=energy,
            wind_crossed=counts[TerrainType.WIND.name_lower],
            obstacle_adjacency=self.obstacle_adjacency(path, grid),
            success=len(path) > 0,
            computation_time=computation_time,
            total_distance=self.total_distance(path),
            average_cost=energy / len(path) if path else 0.0,
            hill_crossed=counts[TerrainType.HILL.name_lower],
            obstacle_crossed=counts[TerrainType.OBSTACLE.name_lower],
            terrain_counts=counts,
            valid=all(grid.is_passable(p.x, p.y) for p in path),
            contiguous=is_contiguous(path),
            source=source,
        )

    @staticmethod
    def energy_used(path: Sequence[Coordinate], grid: TerrainGrid) -> float:
        return float(sum(grid.movement_cost(p[0], p[1]) for p in path))

    @staticmethod
    def terrain_counts(path: Sequence[Coordinate], grid: TerrainGrid) -> Dict[str, int]:
        """Path cells per terrain category (out-of-bounds cells count as obstacle)"""
        counts = {t.name_lower: 0 for t in TerrainType}
        for p in path:
            counts[grid.cell(p[0], p[1]).name_lower] += 1
        return counts

    @staticmethod
    def total_distance(path: Sequence[Coordinate]) -> float:
        """Euclidean length of the path in cells"""
        return float(sum(
            math.hypot(b[0] - a[0], b[1] - a[1]) for a, b in zip(path, path[1:])
        ))

    def obstacle_adjacency(self, path: Sequence[Coordinate], grid: TerrainGrid) -> int:
        """
        Approximate "obstacles avoided" count.

        approximate: obstacle cells in the 3x3 block around every path cell
        (clipped to the grid, the cell itself included), summed over the
        path, integer-divided by adjacency_divisor and capped at
        adjacency_cap.

        exact: number of distinct obstacle cells in those blocks.
        """
        if self.config.adjacency_mode == 'exact':
            touched = set()
            for p in path:
                for dx in (-1, 0, 1):
                    for dy in (-1, 0, 1):
                        nx, ny = p[0] + dx, p[1] + dy
                        if grid.in_bounds(nx, ny) and grid.cell(nx, ny) == TerrainType.OBSTACLE:
                            touched.add((nx, ny))
            return len(touched)

        total = sum(grid.obstacle_count_around(p[0], p[1]) for p in path)
        return min(total // self.config.adjacency_divisor, self.config.adjacency_cap)


def is_contiguous(path: Sequence[Tuple[int, int]]) -> bool:
    """Every consecutive pair differs by at most one cell on each axis"""
    return all(
        abs(b[0] - a[0]) <= 1 and abs(b[1] - a[1]) <= 1
        for a, b in zip(path, path[1:])
    )
