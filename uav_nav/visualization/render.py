"""
Visualization Module
====================

Terrain and flight path rendering: matplotlib figures and a plain-text
overlay for terminals.
"""

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.colors import ListedColormap
from typing import List, Tuple, Optional, Sequence

from ..config import VisualizationConfig
from ..terrain import TerrainGrid, TerrainType


class TerrainVisualizer:
    """
    Static terrain visualization.

    Draws the grid with rows top-down, as the map file reads, and overlays
    a flight path with start/destination markers.
    """

    def __init__(self, grid: TerrainGrid, config: Optional[VisualizationConfig] = None):
        """
        Initialize visualizer.

        Args:
            grid: Terrain grid
            config: Visualization configuration
        """
        self.grid = grid
        self.config = config or VisualizationConfig()
        self.cmap = ListedColormap(self.config.terrain_colors)

    def plot_terrain(self, ax=None) -> plt.Axes:
        """
        Plot terrain map.

        Args:
            ax: Matplotlib axes (creates new if None)

        Returns:
            Matplotlib axes
        """
        if ax is None:
            fig, ax = plt.subplots(figsize=self.config.figure_size)

        ax.imshow(
            self.grid.terrain.T,
            cmap=self.cmap,
            vmin=0,
            vmax=len(TerrainType) - 1,
            origin='upper',
            interpolation='nearest'
        )

        ax.set_xticks(np.arange(-0.5, self.grid.width, 1), minor=True)
        ax.set_yticks(np.arange(-0.5, self.grid.height, 1), minor=True)
        ax.grid(which='minor', color='lightgray', linewidth=0.5)
        ax.set_xlabel('X (cells)')
        ax.set_ylabel('Y (cells)')

        return ax

    def plot_path(self, ax, path: Sequence[Tuple[int, int]],
                  color: Optional[str] = None, label: str = 'Flight path',
                  linewidth: float = 2.0, alpha: float = 0.9):
        """Plot a path with start and destination markers on existing axes"""
        if not path:
            return

        path_arr = np.array([(p[0], p[1]) for p in path])
        ax.plot(path_arr[:, 0], path_arr[:, 1],
                color=color or self.config.path_color,
                linewidth=linewidth, alpha=alpha, marker='.', label=label)
        ax.plot(path_arr[0, 0], path_arr[0, 1], 'go', markersize=12,
                markeredgecolor='white', markeredgewidth=2, label='Start')
        ax.plot(path_arr[-1, 0], path_arr[-1, 1], 'r*', markersize=15,
                markeredgecolor='white', markeredgewidth=2, label='Destination')
        ax.legend(loc='upper right')

    def create_figure(self, path: Optional[Sequence[Tuple[int, int]]] = None,
                      title: str = 'UAV Flight Path') -> plt.Figure:
        """Figure with terrain and an optional path"""
        fig, ax = plt.subplots(figsize=self.config.figure_size)
        self.plot_terrain(ax)
        if path:
            self.plot_path(ax, path)
        ax.set_title(title)
        return fig

    def save_figure(self, fig: plt.Figure, filename: str, dpi: int = None):
        """Save figure to file"""
        fig.savefig(filename, dpi=dpi or self.config.dpi,
                    bbox_inches='tight', facecolor='white')
        plt.close(fig)


def render_text(grid: TerrainGrid, path: Optional[Sequence[Tuple[int, int]]] = None) -> str:
    """
    Text map with the path overlaid.

    S marks the start, D the destination and * the cells in between; all
    other cells use their map character. Off-grid path cells are skipped.
    """
    rows: List[List[str]] = [list(r) for r in grid.to_rows()]
    path = list(path or [])
    for i, (x, y) in enumerate(path):
        if not grid.in_bounds(x, y):
            continue
        if i == 0:
            mark = 'S'
        elif i == len(path) - 1:
            mark = 'D'
        else:
            mark = '*'
        # Start and destination win over passes through the same cell
        if rows[y][x] in ('S', 'D') and mark == '*':
            continue
        rows[y][x] = mark

    header = '   ' + ''.join(f'{x % 10}' for x in range(grid.width))
    body = [f'{y:2d} ' + ''.join(r) for y, r in enumerate(rows)]
    return '\n'.join([header] + body)
