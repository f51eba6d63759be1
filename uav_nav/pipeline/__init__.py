"""
Pipeline Module
===============

Simulation requests, runners, external backends and result export.
"""

from .request import SimulationRequest
from .backend import BackendError, ExternalPlanner, SubprocessPlanner, run_external_planner
from .export import (
    STEPS_HEADER,
    write_path_csv,
    read_path_csv,
    append_summary_row,
    read_summary_rows,
    save_result_json,
)
from .runner import (
    SimulationRunner,
    InvalidRequestError,
    BatchRunner,
    MapRunResult,
    BatchSummary,
    describe,
)

__all__ = [
    'SimulationRequest',
    'BackendError',
    'ExternalPlanner',
    'SubprocessPlanner',
    'run_external_planner',
    'STEPS_HEADER',
    'write_path_csv',
    'read_path_csv',
    'append_summary_row',
    'read_summary_rows',
    'save_result_json',
    'SimulationRunner',
    'InvalidRequestError',
    'BatchRunner',
    'MapRunResult',
    'BatchSummary',
    'describe',
]
