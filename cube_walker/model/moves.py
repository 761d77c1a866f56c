"""Move script parsing and puzzle file loading."""

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Sequence, Tuple, TYPE_CHECKING

from .board import BoardMap
from .state import Position

if TYPE_CHECKING:
    from .walker import Walker


MOVE_RE = re.compile(r"\d+|L|R")


class MoveKind(Enum):
    FORWARD = "forward"
    TURN_LEFT = "L"
    TURN_RIGHT = "R"


@dataclass(frozen=True)
class Move:
    kind: MoveKind
    count: int = 0

    def __str__(self) -> str:
        if self.kind == MoveKind.FORWARD:
            return str(self.count)
        return self.kind.value


def parse_moves(source: str) -> List[Move]:
    """Tokenize a script such as '10R5L5' into moves."""
    moves = []
    for token in MOVE_RE.findall(source):
        if token == "L":
            moves.append(Move(MoveKind.TURN_LEFT))
        elif token == "R":
            moves.append(Move(MoveKind.TURN_RIGHT))
        else:
            moves.append(Move(MoveKind.FORWARD, int(token)))
    return moves


def apply_move(position: Position, move: Move,
               walker: "Walker") -> Tuple[Position, List[Position]]:
    """
    Execute one move; returns the new position and the positions entered
    along the way (empty for turns and fully blocked moves).
    """
    if move.kind == MoveKind.TURN_LEFT:
        return Position(position.x, position.y,
                        position.heading.rotated(-1)), []
    if move.kind == MoveKind.TURN_RIGHT:
        return Position(position.x, position.y,
                        position.heading.rotated(1)), []

    trail = []
    for _ in range(move.count):
        nxt = walker.advance(position)
        if nxt == position:
            break  # blocked by a wall; further steps cannot move either
        position = nxt
        trail.append(position)
    return position, trail


def parse_puzzle(lines: Sequence[str]) -> Tuple[BoardMap, List[Move]]:
    """Split puzzle text into the map (leading rows) and the move script
    (last non-empty row)."""
    rows = [line.rstrip('\n') for line in lines]
    while rows and not rows[-1].strip():
        rows.pop()
    if not rows:
        raise ValueError("Puzzle input is empty")

    moves = parse_moves(rows.pop())
    while rows and not rows[-1].strip():
        rows.pop()
    return BoardMap.from_lines(rows), moves


def load_puzzle(path: Path) -> Tuple[BoardMap, List[Move]]:
    """Read a puzzle file from disk."""
    with open(path) as f:
        return parse_puzzle(f.readlines())
