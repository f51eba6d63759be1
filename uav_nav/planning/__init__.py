"""
Planning Module
===============

Algorithm tags and path synthesis.
"""

from .algorithms import Algorithm
from .synthesizer import (
    PathSynthesizer,
    SynthesisStats,
    AVOIDANCE_ORDER,
    interpolate,
    synthesize,
)

__all__ = [
    'Algorithm',
    'PathSynthesizer',
    'SynthesisStats',
    'AVOIDANCE_ORDER',
    'interpolate',
    'synthesize',
]
