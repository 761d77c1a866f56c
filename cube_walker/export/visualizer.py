"""Visualization and export for the cube walker."""

import numpy as np
import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend
import matplotlib.pyplot as plt
from matplotlib.colors import to_rgb
from pathlib import Path
from typing import List, Optional, TYPE_CHECKING
from PIL import Image
import io

from ..model.board import BoardMap
from ..model.direction import Direction

if TYPE_CHECKING:
    from ..model.state import Position, WalkState


# Marker per heading for the walker position
_HEADING_MARKERS = {
    Direction.EAST: '>',
    Direction.SOUTH: 'v',
    Direction.WEST: '<',
    Direction.NORTH: '^',
}


class Visualizer:
    """
    Generates visual outputs using matplotlib.

    Supports:
    - Single PNG snapshots of the walked path
    - Animated GIF compilation, one frame per move
    """

    # Color scheme
    COLORS = {
        'void': '#FFFFFF',      # White
        'wall': '#2C3E50',      # Dark blue-gray
        'floor': '#ECF0F1',     # Light gray
        'face': '#95A5A6',      # Gray
        'path': '#3498DB',      # Blue
        'start': '#27AE60',     # Green
        'walker': '#E74C3C',    # Red
    }

    def __init__(self, board: BoardMap, side_length: Optional[int] = None):
        self.present = board.present
        self.walls = board.walls
        self.height, self.width = board.height, board.width
        self.side_length = side_length
        self.path: List["Position"] = []
        self.frames: List[Image.Image] = []

    def record(self, state: "WalkState") -> None:
        """Extend the drawn path with the cells of one move."""
        self.path.extend(state.trail)

    def _create_figure(self, state: "WalkState",
                       start: Optional["Position"] = None) -> plt.Figure:
        """Create matplotlib figure for state visualization."""
        aspect = self.width / max(1, self.height)
        fig_height = 6
        fig_width = max(6, fig_height * aspect)
        fig, ax = plt.subplots(figsize=(fig_width, fig_height))

        # Base layer: void, floor, walls
        base = np.ones((self.height, self.width, 3))
        base[:, :] = to_rgb(self.COLORS['void'])
        base[self.present] = to_rgb(self.COLORS['floor'])
        base[self.walls] = to_rgb(self.COLORS['wall'])

        ax.imshow(base, origin='upper', aspect='equal',
                  extent=[-0.5, self.width - 0.5, self.height - 0.5, -0.5])

        # Face boundaries (cube mode)
        if self.side_length:
            for gx in range(0, self.width + 1, self.side_length):
                ax.axvline(gx - 0.5, color=self.COLORS['face'], linewidth=0.6)
            for gy in range(0, self.height + 1, self.side_length):
                ax.axhline(gy - 0.5, color=self.COLORS['face'], linewidth=0.6)

        # Walked cells
        if self.path:
            xs = [p.x for p in self.path]
            ys = [p.y for p in self.path]
            ax.plot(xs, ys, '.', color=self.COLORS['path'], markersize=4)

        if start is not None:
            ax.plot(start.x, start.y, 's', color=self.COLORS['start'],
                    markersize=7, markeredgecolor='black', markeredgewidth=0.5)

        pos = state.position
        ax.plot(pos.x, pos.y, _HEADING_MARKERS[pos.heading],
                color=self.COLORS['walker'], markersize=8,
                markeredgecolor='black', markeredgewidth=0.5)

        ax.set_title(f'Move {state.step} ({state.move}) | '
                     f'Row {pos.y + 1} Col {pos.x + 1} {pos.heading.name.title()}')
        ax.set_xlabel('Column')
        ax.set_ylabel('Row')
        ax.set_xlim(-0.5, self.width - 0.5)
        ax.set_ylim(self.height - 0.5, -0.5)

        plt.tight_layout()
        return fig

    def buffer_frame(self, state: "WalkState",
                     start: Optional["Position"] = None) -> None:
        """Store frame for GIF generation."""
        fig = self._create_figure(state, start)

        # Convert to PIL Image
        buf = io.BytesIO()
        fig.savefig(buf, format='png', dpi=80)
        buf.seek(0)
        img = Image.open(buf).copy()
        self.frames.append(img)
        buf.close()
        plt.close(fig)

    def save_snapshot(self, state: "WalkState", output_path: Path,
                      start: Optional["Position"] = None) -> None:
        """Save single PNG image of the walked path."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig = self._create_figure(state, start)
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
