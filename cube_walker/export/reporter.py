"""Summary report generation for the cube walker."""

from typing import List, Dict, Optional, TYPE_CHECKING
from pathlib import Path

if TYPE_CHECKING:
    from ..model.state import Position, WalkState


class Reporter:
    """Collects per-move metrics and renders a text report."""

    def __init__(self, map_path: str, mode: str):
        self.map_path = map_path
        self.mode = mode
        self.step_metrics: List[Dict] = []
        self.longest_stretch = 0
        self.face_crossings = 0
        self.side_length: Optional[int] = None

    def set_side_length(self, side_length: int) -> None:
        """Enable face crossing counts (cube mode)."""
        self.side_length = side_length

    def update(self, state: "WalkState",
               previous: Optional["Position"] = None) -> None:
        """Accumulate metrics per move."""
        self.step_metrics.append(state.metrics.copy())
        self.longest_stretch = max(self.longest_stretch, len(state.trail))

        if self.side_length and state.trail:
            s = self.side_length
            cells = ([previous] if previous is not None else []) + state.trail
            for a, b in zip(cells, cells[1:]):
                if (a.x // s, a.y // s) != (b.x // s, b.y // s):
                    self.face_crossings += 1

    def generate_summary(self, final_state: "WalkState",
                         output_dir: Path,
                         csv_enabled: bool,
                         snapshot_enabled: bool,
                         gif_enabled: bool) -> str:
        """Returns formatted text report."""
        metrics = final_state.metrics
        position = final_state.position

        lines = [
            "",
            "=" * 80,
            f"                    CUBE WALK REPORT ({self.mode.upper()})",
            "=" * 80,
            f"Map: {self.map_path}",
            "",
            "WALK METRICS",
            "-" * 40,
            f"Moves Executed:        {final_state.step}",
            f"Cells Walked:          {int(metrics.get('cells_walked', 0))}",
            f"Blocked Moves:         {int(metrics.get('blocked_moves', 0))}",
            f"Turns:                 {int(metrics.get('turns', 0))}",
            f"Longest Stretch:       {self.longest_stretch} cells",
        ]
        if self.side_length:
            lines.append(f"Face Crossings:        {self.face_crossings}")
        lines += [
            "",
            "FINAL POSITION",
            "-" * 40,
            f"Row / Column:          {position.y + 1} / {position.x + 1}",
            f"Heading:               {position.heading.name.title()}",
            f"Password:              {position.score()}",
            "",
            "OUTPUT FILES",
            "-" * 40,
        ]

        if csv_enabled:
            lines.append(f"CSV Log:    {output_dir / f'{self.mode}_trace.csv'}")
        else:
            lines.append("CSV Log:    (disabled)")

        if snapshot_enabled:
            lines.append(f"Snapshot:   {output_dir / f'{self.mode}_path.png'}")
        else:
            lines.append("Snapshot:   (disabled)")

        if gif_enabled:
            lines.append(f"Animation:  {output_dir / f'{self.mode}_walk.gif'}")
        else:
            lines.append("Animation:  (disabled)")

        lines.append("=" * 80)

        return "\n".join(lines)
