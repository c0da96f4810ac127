"""
pack-viz

Hierarchy index, reference graph and radial layout for record snapshots
connected by parent pointers and embedded [[type:id]] references.
"""

from .engine import PackVizEngine, EngineConfig, VIEW_IDS

__version__ = "0.1.0"

__all__ = ['PackVizEngine', 'EngineConfig', 'VIEW_IDS', '__version__']
