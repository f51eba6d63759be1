"""
Path Synthesizer Module
=======================

Straight-line path synthesis with local obstacle avoidance.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..terrain import Coordinate, TerrainGrid, TerrainType


# Displacement candidates tried, in order, when a target cell is an obstacle
AVOIDANCE_ORDER: Tuple[Tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


@dataclass
class SynthesisStats:
    """Statistics from a synthesis run"""
    steps: int = 0
    displaced: int = 0       # obstacle targets moved to a free neighbour
    obstacles_kept: int = 0  # obstacle targets with no free neighbour
    forced_end: bool = False


def interpolate(start: int, delta: int, i: int, steps: int) -> int:
    """
    Axis position at step i of steps, truncated toward zero.

    Matches integer division in the front-ends that also avoid obstacles.
    """
    offset = abs(delta * i) // steps
    return start + (offset if delta * i >= 0 else -offset)


class PathSynthesizer:
    """
    Deterministic path builder.

    Walks the straight line from start to end one cell per step along the
    major axis. A target landing on an obstacle is displaced by one cell to
    the first free neighbour in AVOIDANCE_ORDER; if none is free the
    obstacle cell is kept. The end cell is appended when the walk finishes
    elsewhere, so every path ends at ``end``.

    The routine is total: start and end are not validated and every grid
    query is bounds-safe.
    """

    def __init__(self, grid: TerrainGrid):
        """
        Initialize synthesizer.

        Args:
            grid: Terrain to walk over; must not be mutated during plan()
        """
        self.grid = grid
        self.last_stats: Optional[SynthesisStats] = None

    def plan(self, start: Tuple[int, int], end: Tuple[int, int]) -> List[Coordinate]:
        """
        Build a path from start to end.

        Args:
            start: Start position (x, y)
            end: End position (x, y)

        Returns:
            Path as list of Coordinate, never empty
        """
        start = Coordinate(int(start[0]), int(start[1]))
        end = Coordinate(int(end[0]), int(end[1]))
        stats = SynthesisStats()

        path = [start]
        if start == end:
            self.last_stats = stats
            return path

        dx = end.x - start.x
        dy = end.y - start.y
        steps = max(abs(dx), abs(dy))
        stats.steps = steps

        for i in range(1, steps + 1):
            target = Coordinate(interpolate(start.x, dx, i, steps),
                                interpolate(start.y, dy, i, steps))
            if self.grid.cell(*target) == TerrainType.OBSTACLE:
                target = self._avoid(target, stats)
            path.append(target)

        if path[-1] != end:
            path.append(end)
            stats.forced_end = True

        self.last_stats = stats
        return path

    def _avoid(self, target: Coordinate, stats: SynthesisStats) -> Coordinate:
        """Displace an obstacle target to its first free neighbour"""
        for ox, oy in AVOIDANCE_ORDER:
            candidate = Coordinate(target.x + ox, target.y + oy)
            if self.grid.is_passable(*candidate):
                stats.displaced += 1
                return candidate
        stats.obstacles_kept += 1
        return target


def synthesize(grid: TerrainGrid,
               start: Tuple[int, int],
               end: Tuple[int, int]) -> List[Coordinate]:
    """Build a path from start to end over grid"""
    return PathSynthesizer(grid).plan(start, end)
