"""
Configuration Module
====================

Centralized configuration management for the UAV flight path optimizer.
"""

from .settings import (
    Config,
    MapConfig,
    PlannerConfig,
    StatisticsConfig,
    BudgetConfig,
    BackendConfig,
    OutputConfig,
    VisualizationConfig,
)

__all__ = [
    'Config',
    'MapConfig',
    'PlannerConfig',
    'StatisticsConfig',
    'BudgetConfig',
    'BackendConfig',
    'OutputConfig',
    'VisualizationConfig',
]
