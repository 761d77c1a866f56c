"""Single-step movement over the flat map and over the folded cube."""

import logging
from typing import Tuple

from .board import BoardMap
from .direction import Direction
from .lattice import Lattice, extract_lattice
from .state import Position
from .warp import WarpTable, build_warp_table


logger = logging.getLogger(__name__)


class WarpInvariantError(RuntimeError):
    """A face crossing landed outside the net; the warp table is wrong."""


class Walker:
    """Common interface: a start position and one forward step."""

    def __init__(self, board: BoardMap):
        self.board = board

    def starting_position(self) -> Position:
        return self.board.start_position()

    def advance(self, position: Position) -> Position:
        raise NotImplementedError


class FlatWalker(Walker):
    """
    Wraps around the flat map: leaving the net re-enters at the far end of
    the same row or column.
    """

    def advance(self, position: Position) -> Position:
        nxt = position.heading.step(position.coord)
        tile = self.board.get(*nxt)

        if tile is None:
            # Scan back against the heading to the opposite edge
            back = position.heading.opposite
            nxt = position.coord
            while self.board.contains(*back.step(nxt)):
                nxt = back.step(nxt)
            tile = self.board.get(*nxt)

        if not tile:
            return position
        return Position(nxt[0], nxt[1], position.heading)


def _rotate_local(x: int, y: int, side: int,
                  quarter_turns: int) -> Tuple[int, int]:
    """Rotate a face-local cell clockwise inside a side x side block."""
    for _ in range(quarter_turns % 4):
        x, y = side - 1 - y, x
    return x, y


class CubeWalker(Walker):
    """
    Walks over the surface of the folded cube.

    The lattice and warp table are built once at construction; a net that
    does not fold into a cube raises InvalidNetError here, never in advance.
    """

    def __init__(self, board: BoardMap):
        super().__init__(board)
        self.lattice: Lattice = extract_lattice(board)
        self.warp: WarpTable = build_warp_table(self.lattice.faces)

    @property
    def side_length(self) -> int:
        return self.lattice.side_length

    def advance(self, position: Position) -> Position:
        face = self.lattice.face_of(position.x, position.y)
        nxt = position.heading.step(position.coord)

        if self.lattice.face_of(*nxt) == face:
            if self.board.is_open(*nxt):
                return Position(nxt[0], nxt[1], position.heading)
            return position

        target = self.warp[(face, position.heading)]
        side = self.side_length

        # Cell inside the virtual neighbour slot, then undo its rotation
        lx, ly = _rotate_local(nxt[0] % side, nxt[1] % side, side,
                               -target.rotation)
        ox, oy = self.lattice.origin(target.face)
        gx, gy = ox + lx, oy + ly
        heading = position.heading.rotated(-target.rotation)

        tile = self.board.get(gx, gy)
        if tile is None:
            raise WarpInvariantError(
                f"Crossing from {position} landed off the net at ({gx}, {gy})"
            )
        if not tile:
            return position
        return Position(gx, gy, heading)
