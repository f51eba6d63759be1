"""
Metrics Module
==============

Path statistics and the simulation result record.
"""

from .path_metrics import (
    SimulationResult,
    StatisticsCollector,
    SUMMARY_HEADER,
    is_contiguous,
)

__all__ = [
    'SimulationResult',
    'StatisticsCollector',
    'SUMMARY_HEADER',
    'is_contiguous',
]
