"""Simulation engine for path steering."""

import logging
from typing import Dict, TYPE_CHECKING

from .grid import TileGrid, build_grid
from .agent import Creature
from .pathfinding import (BreadthFirstPathFinder, NetworkXPathFinder,
                          PathFinder, WaypointPath, cell_to_world, find_path)
from .steering import SteeringController
from .state import SimulationState, AgentSnapshot

if TYPE_CHECKING:
    from ..config import SimulationConfig

logger = logging.getLogger(__name__)


def make_finder(name: str) -> PathFinder:
    """Return the path finder registered under `name`."""
    if name == 'astar':
        return NetworkXPathFinder()
    elif name == 'bfs':
        return BreadthFirstPathFinder()
    raise ValueError(f"Unknown path finder: {name}")


class SimulationEngine:
    """
    Orchestrates the discrete-time simulation loop.

    Implements:
    1. Grid classification and path search
    2. Creature placement on the start cell
    3. Per-tick steering update
    4. State snapshot generation
    """

    def __init__(self, config: "SimulationConfig"):
        self.config = config
        self.current_step = 0

        # Grid and route; configuration errors surface here
        self.grid: TileGrid = build_grid(config.room.layout, config.tiles)
        self.start = config.route.start
        self.destination = config.route.destination
        self.path: WaypointPath = find_path(
            self.grid, self.start, self.destination,
            config.room.tile_size,
            finder=make_finder(config.route.finder),
            diagonals=config.route.diagonals
        )

        self.creature = Creature(
            position=cell_to_world(self.start, config.room.tile_size),
            path=self.path
        )
        self.controller = SteeringController(config.steering)

        # Metrics tracking
        self.distance_travelled = 0.0
        self.peak_speed = 0.0

        if not self.path:
            logger.warning("Destination %s unreachable from %s; creature will not move",
                           self.destination, self.start)
        else:
            logger.info("Path of %d waypoints from %s to %s",
                        len(self.path), self.start, self.destination)

    def step(self) -> SimulationState:
        """
        Execute one discrete time step.

        1. Tick the steering controller
        2. Update travel metrics
        3. Return current state snapshot
        """
        self.current_step += 1

        previous = self.creature.position
        self.controller.tick(self.creature)

        self.distance_travelled += previous.distance_to(self.creature.position)
        self.peak_speed = max(self.peak_speed, self.creature.velocity.length())

        logger.debug("Step %d: %r", self.current_step, self.creature)
        return self._create_state_snapshot()

    def distance_to_destination(self) -> float:
        destination = self.creature.destination()
        if destination is None:
            return 0.0
        return self.creature.position.distance_to(destination)

    def _create_state_snapshot(self) -> SimulationState:
        """Create immutable snapshot of current simulation state."""
        c = self.creature
        agent = AgentSnapshot(
            x=c.position.x,
            y=c.position.y,
            vx=c.velocity.x,
            vy=c.velocity.y,
            steering_x=c.steering.x,
            steering_y=c.steering.y,
            waypoint_index=c.current_waypoint_index,
            state=c.state.value
        )

        metrics = {
            'speed': c.velocity.length(),
            'steering': c.steering.length(),
            'distance_travelled': self.distance_travelled,
            'distance_to_destination': self.distance_to_destination(),
            'waypoints_reached': c.current_waypoint_index,
            'waypoints_total': len(self.path),
        }

        return SimulationState(step=self.current_step, agent=agent, metrics=metrics)

    def is_finished(self) -> bool:
        """Check if simulation should terminate."""
        return (self.current_step >= self.config.max_ticks or
                self.creature.has_arrived())

    def get_summary(self) -> Dict:
        """Get summary statistics for the simulation."""
        return {
            'total_steps': self.current_step,
            'arrived': self.creature.has_arrived(),
            'waypoints_total': len(self.path),
            'waypoints_reached': self.creature.current_waypoint_index,
            'distance_travelled': self.distance_travelled,
            'peak_speed': self.peak_speed,
            'distance_to_destination': self.distance_to_destination(),
        }
