"""
UAV Flight Path Optimizer
=========================

Terrain cost model and deterministic path synthesis for drone navigation
over a bounded grid.

Key Features:
- Terrain grid with bounds-safe cost and occupancy queries
- Straight-line path synthesis with local obstacle avoidance
- Path statistics (energy, wind zones, obstacle adjacency)
- External planner backend with internal fallback
- CSV/JSON export, batch experiments and figures

Algorithm tags (A*, Dijkstra, Greedy, EnergyOptimal) are carried through
to results as labels; all of them run the same synthesizer.
"""

__version__ = "1.0.0"
__author__ = "UAV Navigation Team"

from .config import Config
from .terrain import (
    TerrainType,
    Coordinate,
    TerrainGrid,
    MalformedMapError,
    MapGenerator,
    sample_map,
    complex_map,
    demo_map,
)
from .planning import Algorithm, PathSynthesizer, synthesize
from .metrics import SimulationResult, StatisticsCollector
from .pipeline import (
    SimulationRequest,
    SimulationRunner,
    BatchRunner,
    BackendError,
    ExternalPlanner,
    SubprocessPlanner,
    InvalidRequestError,
)

__all__ = [
    'Config',
    'TerrainType', 'Coordinate', 'TerrainGrid', 'MalformedMapError',
    'MapGenerator', 'sample_map', 'complex_map', 'demo_map',
    'Algorithm', 'PathSynthesizer', 'synthesize',
    'SimulationResult', 'StatisticsCollector',
    'SimulationRequest', 'SimulationRunner', 'BatchRunner',
    'BackendError', 'ExternalPlanner', 'SubprocessPlanner', 'InvalidRequestError',
]
