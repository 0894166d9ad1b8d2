"""Model package for path steering simulation."""

from .vector import Vector2
from .state import AgentSnapshot, SimulationState
from .grid import (LayoutError, TileClassification, TileGrid, TileSpec,
                   build_grid, default_classification)
from .pathfinding import (BreadthFirstPathFinder, NetworkXPathFinder,
                          PathConfigurationError, PathFinder, find_path)
from .agent import AgentState, Creature
from .steering import SteeringConfig, SteeringController, limit
from .engine import SimulationEngine

__all__ = [
    'Vector2',
    'AgentSnapshot',
    'SimulationState',
    'LayoutError',
    'TileClassification',
    'TileGrid',
    'TileSpec',
    'build_grid',
    'default_classification',
    'BreadthFirstPathFinder',
    'NetworkXPathFinder',
    'PathConfigurationError',
    'PathFinder',
    'find_path',
    'AgentState',
    'Creature',
    'SteeringConfig',
    'SteeringController',
    'limit',
    'SimulationEngine',
]
