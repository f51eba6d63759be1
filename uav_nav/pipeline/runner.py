"""
Pipeline Runner Module
======================

Single-run and batch simulation runners.
"""

import json
import time
import dataclasses
import numpy as np
from pathlib import Path
from typing import Dict, List, Optional
from dataclasses import dataclass, field, asdict
from concurrent.futures import ProcessPoolExecutor

from ..config import Config
from ..terrain import TerrainGrid, TerrainType, MapGenerator, generate_start_end
from ..planning import Algorithm, PathSynthesizer, SynthesisStats
from ..metrics import SimulationResult, StatisticsCollector
from .backend import BackendError, ExternalPlanner, SubprocessPlanner, run_external_planner
from .export import write_path_csv, append_summary_row, save_result_json
from .request import SimulationRequest


class InvalidRequestError(ValueError):
    """Start or end cannot be flown from/to on this grid"""


class SimulationRunner:
    """
    Runs one simulation: grid + request -> SimulationResult.

    Steps:
    - Validate endpoints (optional)
    - Snapshot the grid
    - Ask the external backend, if any; fall back on BackendError
    - Synthesize and time the path
    - Collect statistics and budget warnings
    """

    def __init__(self, config: Optional[Config] = None,
                 backend: Optional[ExternalPlanner] = None):
        """
        Initialize runner.

        Args:
            config: Configuration object (uses default if None)
            backend: External planner; built from config.backend.command if None
        """
        self.config = config or Config()
        if backend is None and self.config.backend.command:
            backend = SubprocessPlanner.from_config(self.config.backend, self.config.statistics)
        self.backend = backend
        self.collector = StatisticsCollector(self.config.statistics)
        # Synthesizer counters of the last internal run; None after a backend result
        self.last_synthesis: Optional[SynthesisStats] = None

    def validate(self, grid: TerrainGrid, request: SimulationRequest):
        """
        Raises:
            InvalidRequestError: endpoint outside the grid or on an obstacle
        """
        for name, point in (('Start', request.start), ('End', request.end)):
            if not grid.in_bounds(point.x, point.y):
                raise InvalidRequestError(
                    f"{name} position {point} is outside the {grid.width}x{grid.height} grid"
                )
            if grid.cell(point.x, point.y) == TerrainType.OBSTACLE:
                raise InvalidRequestError(f"{name} position {point} is an obstacle")

    def run(self, grid: TerrainGrid, request: SimulationRequest,
            verbose: Optional[bool] = None) -> SimulationResult:
        """
        Run a simulation.

        Args:
            grid: Terrain; a private copy is used for the run
            request: Algorithm tag and endpoints
            verbose: Print progress (defaults to config.verbose)

        Returns:
            SimulationResult
        """
        verbose = self.config.verbose if verbose is None else verbose
        if self.config.planner.validate_endpoints:
            self.validate(grid, request)

        snapshot = grid.copy()
        self.last_synthesis = None
        tag = f"[{request.algorithm}]"

        result = None
        if self.backend is not None:
            t0 = time.perf_counter()
            try:
                result = run_external_planner(self.backend, request, snapshot)
                result = dataclasses.replace(
                    result, computation_time=time.perf_counter() - t0
                )
                if verbose:
                    print(f"{tag} External planner returned {len(result.path)} cells")
            except BackendError as e:
                if verbose:
                    print(f"{tag} Backend unavailable, using internal synthesizer: {e}")

        if result is None:
            if verbose:
                print(f"{tag} Synthesizing {request.start} -> {request.end} "
                      f"on {snapshot.width}x{snapshot.height} grid")
            t0 = time.perf_counter()
            synthesizer = PathSynthesizer(snapshot)
            path = synthesizer.plan(request.start, request.end)
            elapsed = time.perf_counter() - t0
            self.last_synthesis = synthesizer.last_stats
            result = self.collector.collect(
                path, snapshot, request.algorithm, computation_time=elapsed
            )

        warnings = self.budget_warnings(result)
        if warnings:
            result = dataclasses.replace(result, warnings=tuple(warnings))
            if verbose:
                for w in warnings:
                    print(f"{tag} Warning: {w}")

        if verbose:
            print(f"{tag} Path length: {result.path_length} steps, "
                  f"energy: {result.energy_used:.2f} units, "
                  f"wind zones: {result.wind_crossed}")

        return result

    def budget_warnings(self, result: SimulationResult) -> List[str]:
        """Energy and computation-time budget overruns"""
        budget = self.config.budget
        warnings = []
        if result.computation_time > budget.time_warning_seconds:
            warnings.append(
                f"Computation time exceeded {budget.time_warning_seconds:g} seconds threshold"
            )
        limit = budget.max_energy * budget.energy_warning_fraction
        if result.energy_used > limit:
            warnings.append(
                f"Energy consumption exceeded {budget.energy_warning_fraction:.0%} threshold"
            )
        remaining = result.energy_remaining(budget.max_energy)
        if remaining < budget.max_energy * budget.low_energy_fraction:
            warnings.append(
                f"Low energy level: {remaining:.1f}/{budget.max_energy:.1f} units remaining"
            )
        return warnings

    def run_and_save(self, grid: TerrainGrid, request: SimulationRequest,
                     output_dir: Optional[str] = None,
                     verbose: Optional[bool] = None) -> SimulationResult:
        """
        Run a simulation and write the steps CSV, summary row and JSON.
        """
        verbose = self.config.verbose if verbose is None else verbose
        result = self.run(grid, request, verbose=verbose)

        out = Path(output_dir or self.config.output.output_dir)
        out.mkdir(parents=True, exist_ok=True)
        names = self.config.output

        write_path_csv(result.path, grid, str(out / names.steps_filename))
        append_summary_row(result, str(out / names.summary_filename))
        save_result_json(result, str(out / names.result_filename))

        if verbose:
            print(f"Performance log saved to: {out / names.summary_filename}")

        return result


# Per-map values summarised as distributions by BatchRunner
SWEEP_METRICS = ('energy_used', 'path_length', 'obstacle_adjacency', 'wind_crossed',
                 'hill_crossed', 'displaced', 'obstacles_kept', 'computation_time')

# Per-map flags summarised as rates
SWEEP_FLAGS = ('valid', 'contiguous', 'forced_end')


@dataclass
class MapRunResult:
    """One generated map and the statistics of the flight across it"""
    seed: int
    start: tuple = ()
    end: tuple = ()
    metrics: Dict[str, float] = field(default_factory=dict)
    success: bool = False
    error: Optional[str] = None

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class BatchSummary:
    """
    Statistics of one algorithm tag over many generated maps.

    ``distributions`` maps each SWEEP_METRICS name to mean/std/min/max over
    the maps that produced it; ``rates`` maps each SWEEP_FLAGS name to the
    fraction of those maps where it held.
    """
    algorithm: str
    num_maps: int = 0
    n_success: int = 0
    seeds: List[int] = field(default_factory=list)
    distributions: Dict[str, Optional[Dict[str, float]]] = field(default_factory=dict)
    rates: Dict[str, Optional[float]] = field(default_factory=dict)

    def to_dict(self) -> Dict:
        return asdict(self)


def describe(values: List[float]) -> Optional[Dict[str, float]]:
    """mean/std/min/max of values, None when empty"""
    if not values:
        return None
    arr = np.asarray(values, dtype=float)
    return {
        'mean': float(arr.mean()),
        'std': float(arr.std()),
        'min': float(arr.min()),
        'max': float(arr.max()),
    }


class BatchRunner:
    """
    Statistics sweep of one algorithm tag over procedurally generated maps.

    Each seed yields a map and a start/end pair; the flight across it is
    reduced to SimulationResult metrics plus the synthesizer's displacement
    counters, and the sweep reports their distributions. The tag only
    labels the output: every tag synthesizes the same paths.
    """

    def __init__(self, config: Optional[Config] = None, algorithm: Optional[str] = None):
        self.config = config or Config()
        self.algorithm = Algorithm.from_label(algorithm or self.config.planner.algorithm).value

    def run_single_map(self, seed: int, output_dir: Optional[str] = None,
                       verbose: bool = False) -> MapRunResult:
        """
        Generate one map and fly across it.

        A map whose fallback endpoints land on an obstacle is recorded with
        its error instead of metrics.
        """
        result = MapRunResult(seed=seed)
        grid = MapGenerator(self.config.map, seed).generate()
        start, end = generate_start_end(grid, seed)
        result.start, result.end = tuple(start), tuple(end)

        runner = SimulationRunner(self.config)
        try:
            run = runner.run(grid, SimulationRequest(start, end, self.algorithm), verbose=False)
        except InvalidRequestError as e:
            result.error = str(e)
        else:
            result.metrics = {
                'energy_used': run.energy_used,
                'path_length': run.path_length,
                'obstacle_adjacency': run.obstacle_adjacency,
                'wind_crossed': run.wind_crossed,
                'hill_crossed': run.hill_crossed,
                'computation_time': run.computation_time,
                'valid': run.valid,
                'contiguous': run.contiguous,
            }
            stats = runner.last_synthesis
            if stats is not None:
                result.metrics.update(displaced=stats.displaced,
                                      obstacles_kept=stats.obstacles_kept,
                                      forced_end=stats.forced_end)
            result.success = run.success

        if verbose:
            if result.success:
                m = result.metrics
                print(f"[Seed {seed}] {start} -> {end}: E={m['energy_used']:.1f} "
                      f"len={m['path_length']} displaced={m.get('displaced', '-')}")
            else:
                print(f"[Seed {seed}] skipped: {result.error}")

        if output_dir:
            map_dir = Path(output_dir) / f'map_{seed:05d}'
            map_dir.mkdir(parents=True, exist_ok=True)
            grid.save(str(map_dir / 'map.txt'))
            with open(map_dir / 'logs.json', 'w') as f:
                json.dump(result.to_dict(), f, indent=2, default=str)

        return result

    def run_batch(self,
                  num_maps: int = 10,
                  seed_base: Optional[int] = None,
                  output_dir: str = 'results',
                  parallel: bool = False,
                  max_workers: int = 4,
                  verbose: bool = True) -> BatchSummary:
        """
        Sweep num_maps consecutive seeds starting at seed_base
        (default: config random_seed, else 42).

        Writes per-map ``map_NNNNN/`` folders and ``batch_summary.json``.
        """
        if seed_base is None:
            seed_base = self.config.random_seed if self.config.random_seed is not None else 42
        seeds = [seed_base + i for i in range(num_maps)]
        output_path = Path(output_dir)
        output_path.mkdir(parents=True, exist_ok=True)

        if verbose:
            print(f"Sweeping {num_maps} maps of {self.config.map.width}x{self.config.map.height} "
                  f"with tag {self.algorithm} -> {output_path}")

        if parallel and max_workers > 1:
            with ProcessPoolExecutor(max_workers=max_workers) as executor:
                results = list(executor.map(self.run_single_map, seeds,
                                            [str(output_path)] * len(seeds)))
        else:
            results = [self.run_single_map(seed, str(output_path), verbose) for seed in seeds]

        summary = self.summarize(results)
        with open(output_path / 'batch_summary.json', 'w') as f:
            json.dump(summary.to_dict(), f, indent=2)

        if verbose:
            self._print_summary(summary)

        return summary

    def summarize(self, results: List[MapRunResult]) -> BatchSummary:
        flown = [r.metrics for r in results if r.success]
        summary = BatchSummary(
            algorithm=self.algorithm,
            num_maps=len(results),
            n_success=len(flown),
            seeds=[r.seed for r in results],
        )
        for name in SWEEP_METRICS:
            summary.distributions[name] = describe([m[name] for m in flown if name in m])
        for name in SWEEP_FLAGS:
            flags = [bool(m[name]) for m in flown if name in m]
            summary.rates[name] = float(np.mean(flags)) if flags else None
        return summary

    def _print_summary(self, summary: BatchSummary):
        print()
        print(f"Tag {summary.algorithm}: {summary.n_success}/{summary.num_maps} maps flown")
        print(f"{'metric':<20}{'mean':>10}{'std':>10}{'min':>10}{'max':>10}")
        for name, d in summary.distributions.items():
            if d is None:
                print(f"{name:<20}{'n/a':>10}")
                continue
            print(f"{name:<20}{d['mean']:>10.2f}{d['std']:>10.2f}"
                  f"{d['min']:>10.2f}{d['max']:>10.2f}")
        for name, rate in summary.rates.items():
            shown = 'n/a' if rate is None else f"{rate:.0%}"
            print(f"{name + ' rate':<20}{shown:>10}")
