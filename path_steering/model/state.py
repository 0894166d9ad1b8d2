"""State snapshot dataclasses for path steering simulation."""

from dataclasses import dataclass
from typing import List, Dict


@dataclass(frozen=True)
class AgentSnapshot:
    """Immutable snapshot of the creature at a given tick."""
    x: float
    y: float
    vx: float
    vy: float
    steering_x: float
    steering_y: float
    waypoint_index: int
    state: str  # "moving", "arrived"

    @property
    def speed(self) -> float:
        return (self.vx ** 2 + self.vy ** 2) ** 0.5


@dataclass
class SimulationState:
    """Complete snapshot of simulation state at a given tick."""
    step: int
    agent: AgentSnapshot
    metrics: Dict[str, float]   # speed, distance travelled, etc.

    def to_csv_rows(self) -> List[Dict]:
        """Convert to CSV-compatible format."""
        a = self.agent
        return [
            {
                "step": self.step,
                "x": round(a.x, 4),
                "y": round(a.y, 4),
                "vx": round(a.vx, 4),
                "vy": round(a.vy, 4),
                "speed": round(a.speed, 4),
                "waypoint_index": a.waypoint_index,
                "state": a.state
            }
        ]
