"""Summary report generation for path steering simulation."""

from typing import List, Dict, Optional, TYPE_CHECKING
from pathlib import Path

OUTPUT_LABELS = ("CSV Log", "Snapshot", "Animation")

if TYPE_CHECKING:
    from ..model.state import SimulationState


class Reporter:
    """Generates summary statistics and formatted text report."""

    def __init__(self, config_path: str):
        self.config_path = config_path
        self.peak_speed = 0.0
        self.peak_steering = 0.0
        self.waypoint_events: List[int] = []  # ticks at which a waypoint was reached
        self._prev_index = 0

    def update(self, state: "SimulationState") -> None:
        """Accumulate metrics per step."""
        self.peak_speed = max(self.peak_speed, state.metrics.get('speed', 0.0))
        self.peak_steering = max(self.peak_steering,
                                 state.metrics.get('steering', 0.0))

        index = state.agent.waypoint_index
        if index > self._prev_index:
            self.waypoint_events.append(state.step)
        self._prev_index = index

    def mean_ticks_per_waypoint(self) -> float:
        if not self.waypoint_events:
            return 0.0
        return self.waypoint_events[-1] / len(self.waypoint_events)

    def generate_summary(self, final_state: Optional["SimulationState"],
                         summary: Dict,
                         outputs: Dict[str, Path]) -> str:
        """
        Returns formatted text report.

        `outputs` maps report labels ("CSV Log", "Snapshot", "Animation")
        to the files actually written; missing labels show as not written.
        """
        total = int(summary.get('waypoints_total', 0))
        reached = int(summary.get('waypoints_reached', 0))
        reached_pct = (reached / total * 100) if total > 0 else 0
        ticks = final_state.step if final_state else 0

        if total == 0:
            outcome = "UNREACHABLE (empty path)"
        elif summary.get('arrived'):
            outcome = "ARRIVED"
        else:
            outcome = "TICK LIMIT REACHED"

        lines = [
            "",
            "=" * 80,
            "                    PATH STEERING SIMULATION REPORT",
            "=" * 80,
            f"Configuration: {self.config_path}",
            f"Outcome:       {outcome}",
            "",
            "SIMULATION METRICS",
            "-" * 40,
            f"Total Ticks:             {ticks}",
            f"Waypoints Reached:       {reached} / {total} ({reached_pct:.1f}%)",
            f"Ticks per Waypoint:      {self.mean_ticks_per_waypoint():.1f}",
            f"Distance Travelled:      {summary.get('distance_travelled', 0.0):.2f} units",
            f"Distance to Destination: {summary.get('distance_to_destination', 0.0):.2f} units",
            f"Peak Speed:              {self.peak_speed:.3f} units/tick",
            f"Peak Steering Force:     {self.peak_steering:.3f} units/tick^2",
            "",
            "OUTPUT FILES",
            "-" * 40,
        ]

        for label in OUTPUT_LABELS:
            path = outputs.get(label)
            lines.append(f"{label + ':':<11} {path if path else '(not written)'}")

        lines.append("=" * 80)

        return "\n".join(lines)
