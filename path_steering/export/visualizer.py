"""Visualization and export for path steering simulation."""

import numpy as np
import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend
import matplotlib.pyplot as plt
from matplotlib.colors import to_rgb
from pathlib import Path
from typing import List, Sequence, Tuple, TYPE_CHECKING
from PIL import Image
import io

if TYPE_CHECKING:
    from ..model.grid import TileClassification, TileGrid
    from ..model.state import SimulationState
    from ..model.vector import Vector2


class Visualizer:
    """
    Generates visual outputs using matplotlib.

    Supports:
    - Single PNG snapshots
    - Animated GIF compilation
    """

    # Color scheme
    COLORS = {
        'start': '#0000FF',     # Blue
        'destination': '#FF0000',  # Red
        'creature': '#FFC0CB',  # Pink
        'path': '#F39C12',      # Orange
    }

    def __init__(self, grid: "TileGrid", tiles: "TileClassification",
                 tile_size: int,
                 start: Tuple[int, int], destination: Tuple[int, int],
                 path: Sequence["Vector2"] = ()):
        self.grid = grid
        self.tile_size = tile_size
        self.start = start
        self.destination = destination
        self.path = tuple(path)
        self.frames: List[Image.Image] = []
        self.background = self._render_room(tiles)

    def _render_room(self, tiles: "TileClassification") -> np.ndarray:
        """Colour every tile by its symbol, then mark start and destination."""
        base = np.zeros((self.grid.height, self.grid.width, 3))
        for y, row in enumerate(self.grid.rows):
            for x, symbol in enumerate(row):
                base[y, x] = to_rgb(tiles.color_of(symbol))

        sx, sy = self.start
        dx, dy = self.destination
        base[sy, sx] = to_rgb(self.COLORS['start'])
        base[dy, dx] = to_rgb(self.COLORS['destination'])
        return base

    def _create_figure(self, state: "SimulationState") -> plt.Figure:
        """Create matplotlib figure for state visualization."""
        width = self.grid.width * self.tile_size
        height = self.grid.height * self.tile_size
        aspect = width / height
        fig_height = 4
        fig, ax = plt.subplots(figsize=(max(4, fig_height * aspect), fig_height))

        ax.imshow(self.background, origin='upper', aspect='equal',
                  interpolation='nearest', extent=[0, width, height, 0])

        # Tile origins are top-left corners; draw at tile centres
        half = self.tile_size / 2
        if self.path:
            xs = [p.x + half for p in self.path]
            ys = [p.y + half for p in self.path]
            ax.plot(xs, ys, '-', color=self.COLORS['path'],
                    linewidth=1, alpha=0.6)

        ax.plot(state.agent.x + half, state.agent.y + half, 's',
                color=self.COLORS['creature'], markersize=4,
                markeredgecolor='black', markeredgewidth=0.3)

        ax.set_title(f'Tick {state.step} | Waypoint '
                     f'{state.agent.waypoint_index}/{len(self.path)} | '
                     f'Speed {state.agent.speed:.2f}', fontsize=9)
        ax.set_xlim(0, width)
        ax.set_ylim(height, 0)
        ax.set_xticks([])
        ax.set_yticks([])

        plt.tight_layout()
        return fig

    def buffer_frame(self, state: "SimulationState") -> None:
        """Store frame for GIF generation."""
        fig = self._create_figure(state)

        # Convert to PIL Image
        buf = io.BytesIO()
        fig.savefig(buf, format='png', dpi=80)
        buf.seek(0)
        img = Image.open(buf).copy()
        self.frames.append(img)
        buf.close()
        plt.close(fig)

    def save_snapshot(self, state: "SimulationState", output_path: Path) -> None:
        """Save single PNG image of current state."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig = self._create_figure(state)
        fig.savefig(output_path, dpi=150, bbox_inches='tight')
        plt.close(fig)

    def generate_gif(self, output_path: Path, fps: int = 10) -> None:
        """Compile buffered frames into animated GIF."""
        if not self.frames:
            return

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        duration = int(1000 / fps)  # milliseconds per frame

        self.frames[0].save(
            output_path,
            save_all=True,
            append_images=self.frames[1:],
            duration=duration,
            loop=0
        )

    def clear_frames(self) -> None:
        """Clear buffered frames."""
        self.frames.clear()
