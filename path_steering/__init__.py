"""Smooth path following for a creature in a tile-based room."""

from .config import SimulationConfig, load_config, parse_config
from .model import (Creature, SimulationEngine, SteeringConfig,
                    SteeringController, TileGrid, Vector2, build_grid,
                    find_path)

__version__ = '0.1.0'

__all__ = [
    'SimulationConfig',
    'load_config',
    'parse_config',
    'Creature',
    'SimulationEngine',
    'SteeringConfig',
    'SteeringController',
    'TileGrid',
    'Vector2',
    'build_grid',
    'find_path',
]
