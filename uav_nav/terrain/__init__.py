"""
Terrain Module
==============

Terrain types, the terrain grid, built-in maps and procedural generation.
"""

from .types import TerrainType, TerrainProperties
from .grid import Coordinate, TerrainGrid, MalformedMapError
from .samples import sample_map, complex_map, demo_map, BUILTIN_MAPS
from .generator import MapGenerator, generate_start_end

__all__ = [
    'TerrainType',
    'TerrainProperties',
    'Coordinate',
    'TerrainGrid',
    'MalformedMapError',
    'sample_map',
    'complex_map',
    'demo_map',
    'BUILTIN_MAPS',
    'MapGenerator',
    'generate_start_end',
]
