"""
Terrain Types Module
====================

Defines terrain type enumeration and utilities.
"""

from enum import IntEnum
from typing import Dict


class TerrainType(IntEnum):
    """
    Terrain type enumeration.

    Values are integers for efficient numpy array storage.
    """
    NORMAL = 0
    OBSTACLE = 1
    HILL = 2
    WIND = 3

    @classmethod
    def from_name(cls, name: str) -> 'TerrainType':
        """Get terrain type from string name"""
        return cls[name.upper()]

    @classmethod
    def from_char(cls, char: str) -> 'TerrainType':
        """Get terrain type from a map character; unknown characters are NORMAL"""
        return _CHAR_TO_TYPE.get(char, cls.NORMAL)

    @property
    def char(self) -> str:
        """Map file character"""
        return _TYPE_TO_CHAR[self]

    @property
    def name_lower(self) -> str:
        """Get lowercase name"""
        return self.name.lower()

    @property
    def movement_cost(self) -> float:
        return TerrainProperties.get_movement_cost(self)

    def is_traversable(self) -> bool:
        """Check if terrain is traversable"""
        return self != TerrainType.OBSTACLE

    @classmethod
    def traversable_types(cls) -> tuple:
        """Get all traversable terrain types"""
        return (cls.NORMAL, cls.HILL, cls.WIND)


_TYPE_TO_CHAR = {
    TerrainType.NORMAL: '.',
    TerrainType.OBSTACLE: 'O',
    TerrainType.HILL: '^',
    TerrainType.WIND: 'W',
}

_CHAR_TO_TYPE = {char: t for t, char in _TYPE_TO_CHAR.items()}
_CHAR_TO_TYPE['o'] = TerrainType.OBSTACLE
_CHAR_TO_TYPE['w'] = TerrainType.WIND


class TerrainProperties:
    """
    Static terrain properties lookup.

    Obstacles carry a large finite penalty rather than an infinite one:
    they are discouraged, not removed from the coordinate space.
    """

    MOVEMENT_COST: Dict[TerrainType, float] = {
        TerrainType.NORMAL: 1.0,
        TerrainType.WIND: 2.0,
        TerrainType.HILL: 3.0,
        TerrainType.OBSTACLE: 1000.0,
    }

    @classmethod
    def get_movement_cost(cls, terrain_type: TerrainType) -> float:
        """Get movement cost for terrain type"""
        return cls.MOVEMENT_COST.get(terrain_type, 1.0)
