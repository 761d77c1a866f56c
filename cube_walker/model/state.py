"""Position and state snapshot dataclasses for the cube walker."""

from dataclasses import dataclass, field
from typing import List, Dict, Tuple

from .direction import Direction


@dataclass(frozen=True)
class Position:
    """Immutable location and heading of the walker."""
    x: int
    y: int
    heading: Direction

    @property
    def coord(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def score(self) -> int:
        """Password formula: 1000 * row + 4 * column + facing (1-based)."""
        return 1000 * (self.y + 1) + 4 * (self.x + 1) + self.heading.value


@dataclass
class WalkState:
    """Snapshot of the walk after one move of the script."""
    step: int
    move: str                        # "10", "L", "R"
    position: Position
    trail: List[Position] = field(default_factory=list)  # cells entered during this move
    metrics: Dict[str, float] = field(default_factory=dict)

    def to_csv_rows(self) -> List[Dict]:
        """Convert to CSV-compatible format, one row per visited cell."""
        visited = self.trail or [self.position]
        return [
            {
                "step": self.step,
                "move": self.move,
                "x": p.x,
                "y": p.y,
                "heading": p.heading.name.lower()
            }
            for p in visited
        ]
