"""
Configuration Settings Module
==============================

Dataclass-based configuration with validation and defaults.
One dataclass per concern, combined by Config.
"""

import json
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Dict, Optional, Any, Tuple, List


@dataclass
class MapConfig:
    """Map size and procedural generation parameters"""
    width: int = 20   # cells
    height: int = 20  # cells

    # Generation parameters
    obstacle_density: float = 0.08  # fraction of cells
    num_hill_regions: Tuple[int, int] = (1, 4)  # min, max
    num_wind_regions: Tuple[int, int] = (1, 4)
    region_radius: Tuple[int, int] = (1, 4)  # cells
    smoothing_sigma: float = 1.0

    def __post_init__(self):
        if self.width < 1 or self.height < 1:
            raise ValueError(
                f"Map dimensions must be positive, got {self.width}x{self.height}"
            )
        if not 0.0 <= self.obstacle_density < 1.0:
            raise ValueError(f"obstacle_density must be in [0, 1): {self.obstacle_density}")


@dataclass
class PlannerConfig:
    """Path synthesis parameters"""
    algorithm: str = 'A*'

    # Reject start/end outside the grid or on an obstacle before planning
    validate_endpoints: bool = True


@dataclass
class StatisticsConfig:
    """Statistics reduction parameters"""
    # 'approximate': summed 3x3 obstacle counts // divisor, capped
    # 'exact': distinct obstacle cells touching the path
    adjacency_mode: str = 'approximate'
    adjacency_divisor: int = 3
    adjacency_cap: int = 10

    def __post_init__(self):
        if self.adjacency_mode not in ('approximate', 'exact'):
            raise ValueError(f"Unknown adjacency_mode: {self.adjacency_mode}")
        if self.adjacency_divisor < 1:
            raise ValueError("adjacency_divisor must be >= 1")


@dataclass
class BudgetConfig:
    """Drone energy and computation budget"""
    max_energy: float = 1000.0  # energy units
    energy_warning_fraction: float = 0.85
    low_energy_fraction: float = 0.20  # remaining charge below this is "low"
    time_warning_seconds: float = 2.0


@dataclass
class BackendConfig:
    """External planner process settings"""
    command: Optional[List[str]] = None  # argv; None disables the backend
    working_dir: Optional[str] = None
    config_filename: str = 'temp_config.json'
    path_filename: str = 'flight_path.csv'
    timeout_seconds: Optional[float] = None


@dataclass
class OutputConfig:
    """Result export locations"""
    output_dir: str = 'output'
    summary_filename: str = 'path_log.csv'
    steps_filename: str = 'flight_path.csv'
    result_filename: str = 'result.json'
    figure_filename: str = 'flight_path.png'


@dataclass
class VisualizationConfig:
    """Visualization configuration"""
    enabled: bool = False
    figure_size: Tuple[int, int] = (8, 8)
    dpi: int = 100

    # Colors indexed by TerrainType value: NORMAL, OBSTACLE, HILL, WIND
    terrain_colors: tuple = ('white', 'dimgray', 'sandybrown', 'lightblue')
    path_color: str = 'green'


@dataclass
class Config:
    """
    Master configuration class combining all sub-configurations.

    Usage:
        config = Config()
        config = Config(planner=PlannerConfig(algorithm='Dijkstra'))
    """
    map: MapConfig = field(default_factory=MapConfig)
    planner: PlannerConfig = field(default_factory=PlannerConfig)
    statistics: StatisticsConfig = field(default_factory=StatisticsConfig)
    budget: BudgetConfig = field(default_factory=BudgetConfig)
    backend: BackendConfig = field(default_factory=BackendConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    visualization: VisualizationConfig = field(default_factory=VisualizationConfig)

    # Global settings
    random_seed: Optional[int] = None
    verbose: bool = False

    _SECTIONS = {
        'map': MapConfig,
        'planner': PlannerConfig,
        'statistics': StatisticsConfig,
        'budget': BudgetConfig,
        'backend': BackendConfig,
        'output': OutputConfig,
        'visualization': VisualizationConfig,
    }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Config':
        """
        Create Config from dictionary.

        Nested dictionaries are expanded into their section dataclass;
        unknown keys are ignored.
        """
        config = cls()
        for key, value in d.items():
            if not hasattr(config, key) or key.startswith('_'):
                continue
            section = cls._SECTIONS.get(key)
            if section is not None and isinstance(value, dict):
                value = section(**{
                    k: (tuple(v) if isinstance(v, list) and k != 'command' else v)
                    for k, v in value.items()
                })
            setattr(config, key, value)
        return config

    @classmethod
    def from_json(cls, filepath: str) -> 'Config':
        """Load Config from a JSON file"""
        with open(filepath) as f:
            return cls.from_dict(json.load(f))

    def to_dict(self) -> Dict[str, Any]:
        """Export config to dictionary"""
        return asdict(self)

    def save_json(self, filepath: str):
        """Write config to a JSON file"""
        Path(filepath).parent.mkdir(parents=True, exist_ok=True)
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)
