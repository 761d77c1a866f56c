"""Warp table: where each face exit leads on the folded cube."""

import logging
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Tuple

from .direction import Direction
from .folding import Placement, normalize
from .lattice import CUBE_FACES, Face, InvalidNetError


logger = logging.getLogger(__name__)

WarpTable = Mapping[Tuple[Face, Direction], Placement]


def build_warp_table(faces: FrozenSet[Face]) -> WarpTable:
    """Fold the net once per face and collect every (face, exit) edge."""
    table: Dict[Tuple[Face, Direction], Placement] = {}
    for face in sorted(faces):
        for direction, placement in normalize(face, faces).items():
            table[(face, direction)] = placement

    if len(table) != CUBE_FACES * 4:
        raise InvalidNetError(
            f"Warp table covers {len(table)} of {CUBE_FACES * 4} face exits"
        )
    logger.info("Warp table built: %d edges across %d faces",
                len(table), len(faces))
    return MappingProxyType(table)


def format_warp_table(table: WarpTable) -> str:
    """Human-readable listing, one edge per line."""
    lines = []
    for (face, direction), placement in sorted(
            table.items(), key=lambda item: (item[0][0], item[0][1].value)):
        lines.append(
            f"{face} {direction.name:<5} -> {placement.face} "
            f"rot {placement.rotation * 90:>3}"
        )
    return "\n".join(lines)
