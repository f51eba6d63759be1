#!/usr/bin/env python3
"""
UAV Flight Path Optimizer - Main Entry Point
=============================================

Usage:
    # Fly across a map file
    uav-nav run --map maps/sample_map.txt --start 0 0 --end 9 9

    # Built-in map, different tag, save a figure
    uav-nav run --builtin complex --start 0 5 --end 20 5 --algorithm Dijkstra --plot

    # Ask an external planner first, fall back to the internal synthesizer
    uav-nav run --builtin sample --start 0 0 --end 10 10 --backend ./uav_optimizer

    # Write a procedural map
    uav-nav generate --width 30 --height 20 --seed 7 --output maps/random.txt

    # Statistics sweep over generated maps
    uav-nav batch --num_maps 20 --seed_base 42 --output results/

    # Summarise a performance log
    uav-nav aggregate --input output/path_log.csv

For notebooks:
    from uav_nav import SimulationRunner, SimulationRequest, sample_map

    result = SimulationRunner().run(sample_map(), SimulationRequest((0, 0), (9, 9)))
"""

import argparse
import sys
from pathlib import Path


def _load_grid(args):
    from uav_nav.terrain import TerrainGrid, BUILTIN_MAPS

    if args.map:
        return TerrainGrid.from_file(args.map)
    return BUILTIN_MAPS[args.builtin]()


def run_simulation(args):
    """Run a single simulation"""
    from uav_nav import Config, SimulationRunner, SimulationRequest
    from uav_nav.visualization import TerrainVisualizer, render_text

    config = Config.from_json(args.config) if args.config else Config()
    config.verbose = config.verbose or args.verbose
    if args.backend:
        config.backend.command = args.backend.split()
    if args.no_validate:
        config.planner.validate_endpoints = False

    grid = _load_grid(args)
    request = SimulationRequest(
        start=tuple(args.start),
        end=tuple(args.end),
        algorithm=args.algorithm or config.planner.algorithm,
        grid_size=grid.width,
        map_file=args.map,
    )

    print("=== UAV Flight Path Optimizer ===")
    print(f"Map loaded: {args.map or args.builtin}")
    print(f"Grid size: {grid.width}x{grid.height}")
    print(f"Start: {request.start}")
    print(f"End: {request.end}")
    print()

    runner = SimulationRunner(config)
    if args.no_save:
        result = runner.run(grid, request)
    else:
        result = runner.run_and_save(grid, request, output_dir=args.output)

    print(render_text(grid, result.path))
    print()
    print("=== Flight Summary ===")
    print(f"Algorithm:          {result.algorithm}")
    print(f"Source:             {result.source}")
    print(f"Total Distance:     {result.path_length} cells")
    print(f"Total Energy Cost:  {result.energy_used:.1f} units")
    print(f"Wind Zones Crossed: {result.wind_crossed}")
    print(f"Obstacles Avoided:  {result.obstacle_adjacency}")
    print(f"Steps Taken:        {len(result.path)}")
    print(f"Computation Time:   {result.computation_time:.4f} seconds")
    print(f"Energy Remaining:   {result.energy_remaining(config.budget.max_energy):.1f} units")
    print(f"Success:            {'Yes' if result.success else 'No'}")
    print(f"Path Valid:         {'Yes' if result.valid else 'No (crosses obstacle or leaves grid)'}")
    for w in result.warnings:
        print(f"Warning: {w}")

    if args.plot or config.visualization.enabled:
        out = Path(args.output or config.output.output_dir)
        out.mkdir(parents=True, exist_ok=True)
        visualizer = TerrainVisualizer(grid, config.visualization)
        fig = visualizer.create_figure(result.path, title=f'{result.algorithm} flight path')
        figure_path = out / config.output.figure_filename
        visualizer.save_figure(fig, str(figure_path))
        print(f"Figure saved to: {figure_path}")

    return 0 if result.success and result.valid else 1


def generate_map(args):
    """Write a procedural map"""
    from uav_nav.config import MapConfig
    from uav_nav.terrain import MapGenerator

    map_config = MapConfig(width=args.width, height=args.height,
                           obstacle_density=args.obstacle_density)
    grid = MapGenerator(map_config, seed=args.seed).generate()
    grid.save(args.output)

    print(grid)
    print(f"Map saved to: {args.output}")
    return 0


def run_batch(args):
    """Sweep one tag over generated maps"""
    from uav_nav import Config, BatchRunner

    config = Config.from_json(args.config) if args.config else Config()
    config.map.width = args.width
    config.map.height = args.height

    runner = BatchRunner(config, algorithm=args.algorithm)
    runner.run_batch(
        num_maps=args.num_maps,
        seed_base=args.seed_base,
        output_dir=args.output,
        parallel=args.parallel,
        max_workers=args.workers,
        verbose=True
    )

    print(f"\nResults saved to: {args.output}")
    return 0


def run_aggregate(args):
    """Summarise a summary CSV per algorithm"""
    import numpy as np
    from uav_nav.pipeline import read_summary_rows

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: Input path does not exist: {input_path}")
        return 1

    rows = read_summary_rows(str(input_path))
    if not rows:
        print(f"No runs found in {input_path}")
        return 1

    algorithms = sorted({r['algorithm'] for r in rows})

    print("\n" + "=" * 70)
    print("AGGREGATED SUMMARY")
    print("=" * 70)
    print(f"{'Algorithm':<16} {'Runs':>6} {'Success':>10} {'Energy':>12} {'Time(s)':>10}")
    print("-" * 70)

    for algorithm in algorithms:
        runs = [r for r in rows if r['algorithm'] == algorithm]
        rate = sum(r['success'] for r in runs) / len(runs) * 100
        energy = np.mean([r['energy_used'] for r in runs])
        elapsed = np.mean([r['computation_time'] for r in runs])
        print(f"{algorithm:<16} {len(runs):>6} {rate:>9.1f}% {energy:>12.1f} {elapsed:>10.4f}")

    print("=" * 70)
    return 0


def build_parser() -> argparse.ArgumentParser:
    from uav_nav.planning import Algorithm
    from uav_nav.terrain import BUILTIN_MAPS

    parser = argparse.ArgumentParser(
        description='UAV Flight Path Optimizer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Run command
    run_parser = subparsers.add_parser('run', help='Run a single simulation')
    source = run_parser.add_mutually_exclusive_group()
    source.add_argument('--map', type=str, help='Map text file')
    source.add_argument('--builtin', type=str, default='sample',
                        choices=sorted(BUILTIN_MAPS), help='Built-in map')
    run_parser.add_argument('--start', type=int, nargs=2, default=[0, 0],
                            metavar=('X', 'Y'), help='Start cell')
    run_parser.add_argument('--end', type=int, nargs=2, default=[9, 9],
                            metavar=('X', 'Y'), help='End cell')
    run_parser.add_argument('--algorithm', type=str, default=None,
                            choices=Algorithm.labels(), help='Algorithm tag')
    run_parser.add_argument('--config', type=str, help='Config JSON file')
    run_parser.add_argument('--backend', type=str, help='External planner command')
    run_parser.add_argument('--output', type=str, help='Output directory')
    run_parser.add_argument('--no_save', action='store_true', help='Do not write results')
    run_parser.add_argument('--no_validate', action='store_true',
                            help='Accept start/end outside the grid or on obstacles')
    run_parser.add_argument('--plot', action='store_true', help='Save a path figure')
    run_parser.add_argument('--verbose', '-v', action='store_true', help='Verbose output')

    # Generate command
    gen_parser = subparsers.add_parser('generate', help='Write a procedural map')
    gen_parser.add_argument('--width', type=int, default=20, help='Columns')
    gen_parser.add_argument('--height', type=int, default=20, help='Rows')
    gen_parser.add_argument('--obstacle_density', type=float, default=0.08)
    gen_parser.add_argument('--seed', type=int, default=42, help='Random seed')
    gen_parser.add_argument('--output', type=str, default='maps/generated_map.txt')

    # Batch command
    batch_parser = subparsers.add_parser('batch', help='Sweep one tag over generated maps')
    batch_parser.add_argument('--num_maps', type=int, default=10, help='Number of maps')
    batch_parser.add_argument('--seed_base', type=int, default=None,
                              help='Base seed (default: config random_seed or 42)')
    batch_parser.add_argument('--width', type=int, default=20, help='Columns')
    batch_parser.add_argument('--height', type=int, default=20, help='Rows')
    batch_parser.add_argument('--algorithm', type=str, help='Algorithm tag (default: config)')
    batch_parser.add_argument('--config', type=str, help='Config JSON file')
    batch_parser.add_argument('--output', type=str, default='results', help='Output directory')
    batch_parser.add_argument('--parallel', action='store_true', help='Use parallel execution')
    batch_parser.add_argument('--workers', type=int, default=4, help='Number of workers')

    # Aggregate command
    agg_parser = subparsers.add_parser('aggregate', help='Summarise a performance log')
    agg_parser.add_argument('--input', type=str, required=True, help='Summary CSV')

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        if args.command == 'run':
            return run_simulation(args)
        elif args.command == 'generate':
            return generate_map(args)
        elif args.command == 'batch':
            return run_batch(args)
        elif args.command == 'aggregate':
            return run_aggregate(args)
    except (ValueError, OSError) as e:
        # MalformedMapError and InvalidRequestError are ValueErrors
        print(f"Error: {e}")
        return 1

    parser.print_help()
    return 1


if __name__ == '__main__':
    sys.exit(main())
