"""Path-following steering controller with bounded acceleration and speed."""

import logging
from dataclasses import dataclass

from .agent import Creature
from .vector import Vector2, ZERO

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SteeringConfig:
    max_speed: float = 2.0          # world units per tick
    max_acceleration: float = 0.5   # world units per tick^2
    arrival_radius: float = 20.0    # world units

    def __post_init__(self):
        for name in ('max_speed', 'max_acceleration', 'arrival_radius'):
            value = getattr(self, name)
            if not value > 0:
                raise ValueError(f"{name} must be positive, got {value}")


def limit(vector: Vector2, maximum: float) -> Vector2:
    """Cap the length of `vector` at `maximum`, keeping its direction.

    Shorter vectors are returned unchanged, never scaled up.
    """
    if vector.length() > maximum:
        return vector.unit().scaled(maximum)
    return vector


class SteeringController:
    """
    Seek-style path follower.

    Each tick steers towards the current waypoint with the raw displacement
    as the desired force, clamped to `max_acceleration`, then clamps the
    resulting velocity to `max_speed` and integrates position. A waypoint
    closer than `arrival_radius` (measured from the pre-move position)
    counts as reached, and the index moves on by at most one per tick.
    """

    def __init__(self, config: SteeringConfig):
        self.config = config

    def follow_path(self, creature: Creature) -> Vector2:
        """Vector to the current target; advances the index when in range."""
        target = creature.path[creature.current_waypoint_index]
        to_target = creature.position.to(target)

        if to_target.length() < self.config.arrival_radius:
            creature.current_waypoint_index += 1
            logger.debug("Reached waypoint %d at (%.2f, %.2f)",
                         creature.current_waypoint_index - 1,
                         target.x, target.y)

        return to_target

    def tick(self, creature: Creature) -> None:
        """Advance the creature by one simulation step.

        Once the path is exhausted the tick is a no-op: position and
        velocity are held.
        """
        if creature.has_arrived():
            creature.steering = ZERO
            return

        steering = limit(self.follow_path(creature), self.config.max_acceleration)

        creature.velocity = limit(creature.velocity.add(steering),
                                  self.config.max_speed)
        creature.position = creature.position.add(creature.velocity)
        creature.steering = steering
        creature.ticks_taken += 1

    def run(self, creature: Creature, max_ticks: int) -> int:
        """Tick until the creature arrives or `max_ticks` is reached."""
        ticks = 0
        while ticks < max_ticks and not creature.has_arrived():
            self.tick(creature)
            ticks += 1
        return ticks
