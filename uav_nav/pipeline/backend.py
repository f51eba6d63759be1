"""
External Planner Backend
========================

Narrow interface to an out-of-process planner. The runner only consults a
backend as an alternate source of a path; any failure surfaces as
BackendError and the runner falls back to the internal synthesizer.
"""

import subprocess
from pathlib import Path
from typing import List, Optional

from ..config import BackendConfig, StatisticsConfig
from ..metrics import SimulationResult, StatisticsCollector
from ..terrain import TerrainGrid
from .export import read_path_csv
from .request import SimulationRequest


class BackendError(RuntimeError):
    """External planner unavailable or produced no usable result"""


class ExternalPlanner:
    """Base class for planners that run outside this process"""

    name = 'external'

    def run(self, request: SimulationRequest, grid: TerrainGrid) -> SimulationResult:
        """
        Produce a result for request.

        Raises:
            BackendError: on any failure
        """
        raise NotImplementedError


class SubprocessPlanner(ExternalPlanner):
    """
    Planner executable driven through files.

    The request is written as JSON to ``config_filename`` in the working
    directory, the command is run there, and the path is read back from
    the steps CSV at ``path_filename`` (``step,x,y,terrain_type``).
    Statistics are recomputed locally from that path.
    """

    name = 'subprocess'

    def __init__(self,
                 command: List[str],
                 working_dir: Optional[str] = None,
                 config_filename: str = 'temp_config.json',
                 path_filename: str = 'flight_path.csv',
                 timeout_seconds: Optional[float] = None,
                 statistics: Optional[StatisticsConfig] = None):
        if not command:
            raise ValueError("command must not be empty")
        self.command = list(command)
        self.working_dir = Path(working_dir or '.')
        self.config_filename = config_filename
        self.path_filename = path_filename
        self.timeout_seconds = timeout_seconds
        self.collector = StatisticsCollector(statistics)

    @classmethod
    def from_config(cls, config: BackendConfig,
                    statistics: Optional[StatisticsConfig] = None) -> 'SubprocessPlanner':
        return cls(
            command=config.command,
            working_dir=config.working_dir,
            config_filename=config.config_filename,
            path_filename=config.path_filename,
            timeout_seconds=config.timeout_seconds,
            statistics=statistics,
        )

    def run(self, request: SimulationRequest, grid: TerrainGrid) -> SimulationResult:
        self.working_dir.mkdir(parents=True, exist_ok=True)
        request.save_json(str(self.working_dir / self.config_filename))

        # Output of an earlier run must never be read back as this one's
        path_file = self.working_dir / self.path_filename
        if path_file.exists():
            path_file.unlink()

        try:
            proc = subprocess.run(
                self.command,
                cwd=str(self.working_dir),
                capture_output=True,
                text=True,
                timeout=self.timeout_seconds,
            )
        except FileNotFoundError as e:
            raise BackendError(f"Planner executable not found: {self.command[0]}") from e
        except subprocess.TimeoutExpired as e:
            raise BackendError(f"Planner timed out after {self.timeout_seconds}s") from e
        except OSError as e:
            raise BackendError(f"Could not start planner: {e}") from e

        if proc.returncode != 0:
            raise BackendError(
                f"Planner failed with exit code: {proc.returncode}"
                + (f" ({proc.stderr.strip()})" if proc.stderr.strip() else "")
            )

        try:
            path = read_path_csv(str(path_file))
        except (OSError, ValueError, KeyError) as e:
            raise BackendError(f"Unreadable planner output {path_file}: {e}") from e

        if not path:
            raise BackendError(f"Planner wrote an empty path to {path_file}")
        if path[0] != request.start or path[-1] != request.end:
            raise BackendError(
                f"Planner path runs {path[0]} -> {path[-1]}, "
                f"expected {request.start} -> {request.end}"
            )

        return self.collector.collect(path, grid, request.algorithm, source='external')


def run_external_planner(planner: ExternalPlanner,
                         request: SimulationRequest,
                         grid: TerrainGrid) -> SimulationResult:
    """
    Run a backend, converting any unexpected failure into BackendError.
    """
    try:
        return planner.run(request, grid)
    except BackendError:
        raise
    except Exception as e:
        raise BackendError(f"{planner.name} planner failed: {e}") from e
