"""
Simulation Request
==================

Inputs of one simulation run and their JSON form.

JSON layout (also the external planner's config file)::

    {
      "algorithm": "A*",
      "grid_size": 20,
      "start_x": 0, "start_y": 0,
      "end_x": 9, "end_y": 9,
      "map_file": "maps/sample_map.txt"
    }
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from ..planning import Algorithm
from ..terrain import Coordinate


@dataclass(frozen=True)
class SimulationRequest:
    """Algorithm tag and endpoints of one run"""
    start: Coordinate
    end: Coordinate
    algorithm: str = 'A*'
    grid_size: Optional[int] = None
    map_file: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'start', Coordinate(int(self.start[0]), int(self.start[1])))
        object.__setattr__(self, 'end', Coordinate(int(self.end[0]), int(self.end[1])))
        object.__setattr__(self, 'algorithm', Algorithm.from_label(self.algorithm).value)

    def to_dict(self) -> Dict:
        d = {
            'algorithm': self.algorithm,
            'start_x': self.start.x,
            'start_y': self.start.y,
            'end_x': self.end.x,
            'end_y': self.end.y,
        }
        if self.grid_size is not None:
            d['grid_size'] = self.grid_size
        if self.map_file is not None:
            d['map_file'] = self.map_file
        return d

    @classmethod
    def from_dict(cls, d: Dict) -> 'SimulationRequest':
        """
        Build a request from its JSON fields.

        Raises:
            KeyError: a coordinate field is missing
            ValueError: unknown algorithm or non-integer coordinate
        """
        return cls(
            start=Coordinate(int(d['start_x']), int(d['start_y'])),
            end=Coordinate(int(d['end_x']), int(d['end_y'])),
            algorithm=d.get('algorithm', 'A*'),
            grid_size=int(d['grid_size']) if d.get('grid_size') is not None else None,
            map_file=d.get('map_file'),
        )

    def save_json(self, filepath: str):
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load_json(cls, filepath: str) -> 'SimulationRequest':
        with open(filepath) as f:
            return cls.from_dict(json.load(f))
