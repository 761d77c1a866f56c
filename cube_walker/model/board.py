"""Board map management for the cube walker."""

import numpy as np
from typing import Iterable, Optional, Tuple

from .direction import Direction
from .state import Position


VOID = 0
OPEN = 1
WALL = 2

_TILE_CODES = {' ': VOID, '.': OPEN, '#': WALL}


class BoardMap:
    """
    Sparse cell grid of the unfolded cube.

    Coordinate convention: (x, y) for API, [y, x] for array indexing.
    Cells outside the net are VOID; `get` reports them as absent.
    """

    def __init__(self, tiles: np.ndarray):
        self.tiles = tiles
        self.height, self.width = tiles.shape

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "BoardMap":
        """Parse map rows (space = absent, '.' = open, '#' = wall)."""
        rows = [line.rstrip('\n') for line in lines]
        width = max((len(r) for r in rows), default=0)
        tiles = np.zeros((len(rows), width), dtype=np.int8)
        for y, row in enumerate(rows):
            for x, char in enumerate(row):
                try:
                    tiles[y, x] = _TILE_CODES[char]
                except KeyError:
                    raise ValueError(
                        f"Unexpected map character {char!r} at ({x}, {y})"
                    ) from None
        return cls(tiles)

    def get(self, x: int, y: int) -> Optional[bool]:
        """True if open, False if wall, None if the cell is off the net."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            return None
        tile = self.tiles[y, x]
        if tile == VOID:
            return None
        return bool(tile == OPEN)

    def contains(self, x: int, y: int) -> bool:
        """Check if cell belongs to the net."""
        return self.get(x, y) is not None

    def is_open(self, x: int, y: int) -> bool:
        return self.get(x, y) is True

    @property
    def present(self) -> np.ndarray:
        """Boolean mask of cells on the net."""
        return self.tiles != VOID

    @property
    def walls(self) -> np.ndarray:
        """Boolean mask of wall cells."""
        return self.tiles == WALL

    def bounds(self) -> Tuple[int, int]:
        """(maxColumn + 1, maxRow + 1) spanned by present cells."""
        ys, xs = np.nonzero(self.present)
        if xs.size == 0:
            return (0, 0)
        return (int(xs.max()) + 1, int(ys.max()) + 1)

    def start_position(self) -> Position:
        """Leftmost open cell of the top row, facing east."""
        if self.height == 0:
            raise ValueError("Board is empty")
        open_xs = np.nonzero(self.tiles[0] == OPEN)[0]
        if open_xs.size == 0:
            raise ValueError("Top row has no open cell")
        return Position(int(open_xs[0]), 0, Direction.EAST)
