"""Model package for the cube net walker."""

from .direction import Direction
from .state import Position, WalkState
from .board import BoardMap
from .lattice import Lattice, InvalidNetError, extract_lattice
from .folding import FoldKind, Placement, normalize
from .warp import build_warp_table
from .walker import Walker, FlatWalker, CubeWalker, WarpInvariantError
from .moves import Move, MoveKind, parse_moves, load_puzzle, parse_puzzle
from .engine import WalkEngine

__all__ = [
    'Direction',
    'Position',
    'WalkState',
    'BoardMap',
    'Lattice',
    'InvalidNetError',
    'extract_lattice',
    'FoldKind',
    'Placement',
    'normalize',
    'build_warp_table',
    'Walker',
    'FlatWalker',
    'CubeWalker',
    'WarpInvariantError',
    'Move',
    'MoveKind',
    'parse_moves',
    'load_puzzle',
    'parse_puzzle',
    'WalkEngine',
]
