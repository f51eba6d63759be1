"""
Result Export Module
====================

CSV and JSON writers/readers for paths and run summaries.

Formats:
    steps CSV:   step,x,y,terrain_type   (terrain_type is the enum name)
    summary CSV: timestamp,algorithm,path_length,computation_time,energy_used,success
"""

import csv
import json
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

from ..metrics import SimulationResult, SUMMARY_HEADER
from ..terrain import Coordinate, TerrainGrid

STEPS_HEADER = ('step', 'x', 'y', 'terrain_type')


def write_path_csv(path: Sequence[Tuple[int, int]], grid: TerrainGrid, filepath: str):
    """Write one row per path cell"""
    out = Path(filepath)
    out.parent.mkdir(parents=True, exist_ok=True)
    with open(out, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(STEPS_HEADER)
        for i, (x, y) in enumerate(path):
            writer.writerow([i, x, y, grid.cell(x, y).name])


def read_path_csv(filepath: str) -> List[Coordinate]:
    """
    Read the path back from a steps CSV, ordered by step.

    Raises:
        ValueError: missing columns or non-integer coordinates
    """
    with open(filepath, newline='') as f:
        reader = csv.DictReader(f)
        missing = {'step', 'x', 'y'} - set(reader.fieldnames or ())
        if missing:
            raise ValueError(f"{filepath}: missing columns {sorted(missing)}")
        rows = [(int(r['step']), Coordinate(int(r['x']), int(r['y']))) for r in reader]
    rows.sort(key=lambda r: r[0])
    return [c for _, c in rows]


def append_summary_row(result: SimulationResult, filepath: str):
    """Append a run summary, writing the header when the file is new"""
    out = Path(filepath)
    out.parent.mkdir(parents=True, exist_ok=True)
    new_file = not out.exists() or out.stat().st_size == 0
    with open(out, 'a', newline='') as f:
        writer = csv.writer(f)
        if new_file:
            writer.writerow(SUMMARY_HEADER)
        writer.writerow(result.summary_row())


def read_summary_rows(filepath: str) -> List[Dict]:
    """Parse a summary CSV into typed dictionaries"""
    rows = []
    with open(filepath, newline='') as f:
        for r in csv.DictReader(f):
            rows.append({
                'timestamp': int(r['timestamp']),
                'algorithm': r['algorithm'],
                'path_length': int(r['path_length']),
                'computation_time': float(r['computation_time']),
                'energy_used': float(r['energy_used']),
                'success': r['success'].strip().lower() == 'true',
            })
    return rows


def save_result_json(result: SimulationResult, filepath: str):
    out = Path(filepath)
    out.parent.mkdir(parents=True, exist_ok=True)
    with open(out, 'w') as f:
        json.dump(result.to_dict(), f, indent=2, default=str)
