"""Face lattice extraction from a board map."""

import logging
import math
from dataclasses import dataclass
from typing import FrozenSet, Tuple

import numpy as np
from scipy.ndimage import label

from .board import BoardMap


logger = logging.getLogger(__name__)

Face = Tuple[int, int]

CUBE_FACES = 6


class InvalidNetError(ValueError):
    """The board does not describe a foldable six-face cube net."""


@dataclass(frozen=True)
class Lattice:
    side_length: int
    faces: FrozenSet[Face]

    def face_of(self, x: int, y: int) -> Face:
        """Macro cell containing a board cell."""
        return (x // self.side_length, y // self.side_length)

    def origin(self, face: Face) -> Tuple[int, int]:
        """Board coordinate of a face's top-left cell."""
        return (face[0] * self.side_length, face[1] * self.side_length)


def extract_lattice(board: BoardMap) -> Lattice:
    """
    Reduce the cell grid to a face size and the set of occupied faces.

    The side length is the gcd of the bounding box dimensions; a net whose
    width and height share a larger common divisor than the true face size
    yields a wrong side length and is rejected only if the resulting face
    count is off.
    """
    width, height = board.bounds()
    if width == 0 or height == 0:
        raise InvalidNetError("Board has no cells")

    side = math.gcd(width, height)
    cols, rows = width // side, height // side

    # A face is present when its top-left cell is on the net
    occupancy = np.zeros((rows, cols), dtype=bool)
    for fy in range(rows):
        for fx in range(cols):
            occupancy[fy, fx] = board.contains(fx * side, fy * side)

    faces = frozenset(
        (int(fx), int(fy)) for fy, fx in zip(*np.nonzero(occupancy))
    )
    if len(faces) != CUBE_FACES:
        raise InvalidNetError(
            f"Expected {CUBE_FACES} faces of side {side}, found {len(faces)}"
        )

    _, components = label(occupancy)
    if components != 1:
        raise InvalidNetError(
            f"Faces form {components} separate pieces, expected one net"
        )

    logger.debug("Lattice: side length %d, faces %s", side, sorted(faces))
    return Lattice(side_length=side, faces=faces)
