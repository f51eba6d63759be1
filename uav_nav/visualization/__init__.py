"""
Visualization Module
====================

Terrain/path figures and text rendering.
"""

from .render import TerrainVisualizer, render_text

__all__ = [
    'TerrainVisualizer',
    'render_text',
]
