"""
Folding engine: finds the true cube neighbours of one face.

The net is treated as a virtual layout of the six faces. Starting from the
identity layout, groups of faces are cut off and swung around the analyzed
face until it has a face on each of its four sides. Every fold keeps the
layout a valid cube net, so the face that lands next to the analyzed face is
its neighbour on the folded cube and the accumulated rotation tells how that
face's frame is turned relative to the analyzed one.

Three rewrite rules are tried in priority order (D = fold direction,
P = D turned one quarter towards the chosen chirality, F = analyzed face):

    LOCAL     F+D and F+D+P present, F+P empty.
              The group at F+D+P swings a quarter turn around the corner it
              shares with F and lands on F+P.
    REMOTE    F+D and F+2D present, F+P and F+D+P empty, F+2D+P present.
              The group at F+2D+P swings a half turn around the centre of
              F+D+P and lands on F+P.
    TELEPORT  F+D, F+2D and F+3D present, F-D empty.
              The strip closes into a ring; the group at F+3D lands on F-D.
"""

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from .direction import Coord, Direction
from .lattice import Face, InvalidNetError


logger = logging.getLogger(__name__)

# Each fold gives the analyzed face one more neighbour
MAX_FOLDS = 4


class FoldKind(Enum):
    LOCAL = "local"
    REMOTE = "remote"
    TELEPORT = "teleport"


@dataclass(frozen=True)
class Placement:
    """A face and its clockwise quarter turns relative to the analyzed face."""
    face: Face
    rotation: int


def _rotate_about(coord: Coord, pivot2: Coord, quarter_turns: int) -> Coord:
    """
    Rotate a macro cell clockwise about a pivot.

    The pivot is given in doubled coordinates so that cell corners
    (half-integer points) stay integral.
    """
    vx = 2 * coord[0] - pivot2[0]
    vy = 2 * coord[1] - pivot2[1]
    for _ in range(quarter_turns % 4):
        vx, vy = -vy, vx
    return ((pivot2[0] + vx) // 2, (pivot2[1] + vy) // 2)


class VirtualLayout:
    """
    Current virtual position of each of the six faces.

    `slots` maps original face -> (virtual coord, rotation) and `index`
    maps virtual coord -> original face. Both are updated together and
    describe a bijection at all times.
    """

    def __init__(self, faces: Iterable[Face]):
        self.slots: Dict[Face, Tuple[Coord, int]] = {f: (f, 0) for f in faces}
        self.index: Dict[Coord, Face] = {f: f for f in self.slots}

    def copy(self) -> "VirtualLayout":
        clone = VirtualLayout(())
        clone.slots = dict(self.slots)
        clone.index = dict(self.index)
        return clone

    def occupied(self, coord: Coord) -> bool:
        return coord in self.index

    def at(self, coord: Coord) -> Optional[Placement]:
        """Placement at a virtual coordinate, or None if empty."""
        face = self.index.get(coord)
        if face is None:
            return None
        return Placement(face, self.slots[face][1])

    def group(self, start: Coord, barrier: Coord) -> List[Coord]:
        """Cells 4-connected to `start` without passing through `barrier`."""
        seen = {start}
        queue = deque([start])
        while queue:
            cell = queue.popleft()
            for direction in Direction:
                nxt = direction.step(cell)
                if nxt != barrier and nxt not in seen and nxt in self.index:
                    seen.add(nxt)
                    queue.append(nxt)
        return sorted(seen)

    def moved(self, cells: List[Coord], pivot2: Coord, quarter_turns: int,
              offset: Coord = (0, 0)) -> Optional["VirtualLayout"]:
        """
        Copy of the layout with `cells` rotated about `pivot2` and shifted.

        Returns None if a moved cell would land on a cell outside the group.
        """
        moving = set(cells)
        targets = {}
        for cell in cells:
            rx, ry = _rotate_about(cell, pivot2, quarter_turns)
            target = (rx + offset[0], ry + offset[1])
            if target in self.index and target not in moving:
                return None
            targets[cell] = target

        folded = self.copy()
        for cell in cells:
            del folded.index[cell]
        for cell, target in targets.items():
            face = self.index[cell]
            rotation = self.slots[face][1]
            folded.slots[face] = (target, (rotation + quarter_turns) % 4)
            folded.index[target] = face
        return folded


def _try_local(layout: VirtualLayout, anchor: Coord, heading: Direction,
               side: Direction) -> Optional[VirtualLayout]:
    near = heading.step(anchor)
    swing = side.step(near)
    if (not layout.occupied(near) or layout.occupied(side.step(anchor))
            or not layout.occupied(swing)):
        return None
    cells = layout.group(swing, barrier=near)
    if anchor in cells:
        return None
    pivot2 = (2 * anchor[0] + heading.delta[0] + side.delta[0],
              2 * anchor[1] + heading.delta[1] + side.delta[1])
    turn = 1 if side == heading.rotated(1) else -1
    return layout.moved(cells, pivot2, turn)


def _try_remote(layout: VirtualLayout, anchor: Coord, heading: Direction,
                side: Direction) -> Optional[VirtualLayout]:
    near = heading.step(anchor)
    far = heading.step(anchor, 2)
    corner = side.step(near)
    swing = side.step(far)
    if (not layout.occupied(near) or not layout.occupied(far)
            or layout.occupied(side.step(anchor)) or layout.occupied(corner)
            or not layout.occupied(swing)):
        return None
    cells = layout.group(swing, barrier=far)
    if anchor in cells:
        return None
    pivot2 = (2 * corner[0], 2 * corner[1])
    return layout.moved(cells, pivot2, 2)


def _try_teleport(layout: VirtualLayout, anchor: Coord, heading: Direction,
                  side: Direction) -> Optional[VirtualLayout]:
    # Chirality plays no part: the ring closes along the strip itself
    strip = [heading.step(anchor, n) for n in (1, 2, 3)]
    if (not all(layout.occupied(c) for c in strip)
            or layout.occupied(heading.opposite.step(anchor))):
        return None
    cells = layout.group(strip[2], barrier=strip[1])
    if anchor in cells:
        return None
    dx, dy = heading.delta
    return layout.moved(cells, (0, 0), 0, offset=(-4 * dx, -4 * dy))


_FOLDS = {
    FoldKind.LOCAL: _try_local,
    FoldKind.REMOTE: _try_remote,
    FoldKind.TELEPORT: _try_teleport,
}


def find_fold(layout: VirtualLayout,
              analyzed: Face) -> Optional[Tuple[FoldKind, VirtualLayout]]:
    """Try every fold kind, direction and chirality; first success wins."""
    anchor = layout.slots[analyzed][0]
    for kind in FoldKind:
        attempt = _FOLDS[kind]
        for heading in Direction:
            for side in (heading.rotated(1), heading.rotated(-1)):
                folded = attempt(layout, anchor, heading, side)
                if folded is not None:
                    logger.debug("%s fold for face %s towards %s/%s",
                                 kind.value, analyzed, heading.name,
                                 side.name)
                    return kind, folded
    return None


def normalize(analyzed: Face,
              faces: FrozenSet[Face]) -> Dict[Direction, Placement]:
    """
    Fold the net until `analyzed` has a face on all four sides.

    Returns the neighbour in each direction together with the number of
    clockwise quarter turns its frame was rotated to line up with the
    analyzed face.
    """
    if analyzed not in faces:
        raise InvalidNetError(f"Face {analyzed} is not part of the net")

    layout = VirtualLayout(faces)
    anchor = layout.slots[analyzed][0]
    for _ in range(MAX_FOLDS + 1):
        if all(layout.occupied(d.step(anchor)) for d in Direction):
            break
        result = find_fold(layout, analyzed)
        if result is None:
            raise InvalidNetError(
                f"No fold completes the neighbours of face {analyzed}"
            )
        layout = result[1]
    else:
        raise InvalidNetError(f"Folding face {analyzed} did not converge")

    neighbours = {d: layout.at(d.step(anchor)) for d in Direction}
    found = {p.face for p in neighbours.values()}
    if analyzed in found or len(found) != 4:
        raise InvalidNetError(
            f"Face {analyzed} folds onto an inconsistent neighbourhood"
        )
    return neighbours
