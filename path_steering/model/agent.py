"""Creature entity following a precomputed waypoint path."""

from enum import Enum
from typing import Optional, Tuple

from .vector import Vector2, ZERO


class AgentState(Enum):
    """Possible states for a creature."""
    MOVING = "moving"
    ARRIVED = "arrived"


class Creature:
    """
    Mutable simulation entity moved by a SteeringController.

    `current_waypoint_index` points at the next target in `path`. It never
    decreases and stays within 0..len(path); reaching len(path) means the
    creature has arrived. An empty path counts as already arrived.
    """

    def __init__(self, position: Vector2,
                 path: Tuple[Vector2, ...],
                 velocity: Vector2 = ZERO):
        self.position = position
        self.velocity = velocity
        self.path = tuple(path)
        self.current_waypoint_index = 0
        self.steering = ZERO  # last applied (clamped) steering force
        self.ticks_taken = 0

    @property
    def state(self) -> AgentState:
        return AgentState.ARRIVED if self.has_arrived() else AgentState.MOVING

    def has_arrived(self) -> bool:
        return self.current_waypoint_index >= len(self.path)

    def current_target(self) -> Optional[Vector2]:
        """Next waypoint to steer towards, or None once arrived."""
        if self.has_arrived():
            return None
        return self.path[self.current_waypoint_index]

    def destination(self) -> Optional[Vector2]:
        if not self.path:
            return None
        return self.path[-1]

    def __repr__(self) -> str:
        return (f"Creature(pos=({self.position.x:.2f}, {self.position.y:.2f}), "
                f"waypoint={self.current_waypoint_index}/{len(self.path)}, "
                f"state={self.state.value})")
