"""Immutable 2D vector used for positions, velocities and forces."""

import math
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Vector2:
    """2D floating point vector. Every operation returns a new instance."""
    x: float = 0.0
    y: float = 0.0

    def add(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def sub(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x - other.x, self.y - other.y)

    def scaled(self, factor: float) -> "Vector2":
        return Vector2(self.x * factor, self.y * factor)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def unit(self) -> "Vector2":
        """Return the unit vector, or the zero vector when length is zero."""
        length = self.length()
        if length == 0:
            return Vector2()
        return Vector2(self.x / length, self.y / length)

    def to(self, other: "Vector2") -> "Vector2":
        """Displacement from this point to `other`."""
        return other.sub(self)

    def distance_to(self, other: "Vector2") -> float:
        return self.to(other).length()

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def __add__(self, other: "Vector2") -> "Vector2":
        return self.add(other)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return self.sub(other)

    def __mul__(self, factor: float) -> "Vector2":
        return self.scaled(factor)

    __rmul__ = __mul__


ZERO = Vector2()
