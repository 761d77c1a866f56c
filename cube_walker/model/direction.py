"""Compass directions with mod-4 arithmetic."""

from enum import Enum
from typing import Tuple


Coord = Tuple[int, int]


class Direction(Enum):
    """
    Heading of the walker and adjacency direction on the face lattice.

    Values follow clockwise order starting east, which is also the
    facing value used by the password formula.
    Screen convention: x grows to the right, y grows downward.
    """
    EAST = 0
    SOUTH = 1
    WEST = 2
    NORTH = 3

    def rotated(self, quarter_turns: int) -> "Direction":
        """Rotate by quarter turns (positive = clockwise)."""
        return Direction((self.value + quarter_turns) % 4)

    @property
    def opposite(self) -> "Direction":
        return self.rotated(2)

    @property
    def delta(self) -> Coord:
        return _DELTAS[self]

    def step(self, coord: Coord, count: int = 1) -> Coord:
        """Shift a coordinate `count` units along this direction."""
        dx, dy = _DELTAS[self]
        return (coord[0] + dx * count, coord[1] + dy * count)


_DELTAS = {
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, 1),
    Direction.WEST: (-1, 0),
    Direction.NORTH: (0, -1),
}
