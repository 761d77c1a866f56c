"""
conftest.py — Shared pytest fixtures for the cube walker test suite
"""

import pytest

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from cube_walker.model.board import BoardMap
from cube_walker.model.moves import parse_puzzle


EXAMPLE_LINES = [
    "        ...#",
    "        .#..",
    "        #...",
    "        ....",
    "...#.......#",
    "........#...",
    "..#....#....",
    "..........#.",
    "        ...#....",
    "        .....#..",
    "        .#......",
    "        ......#.",
    "",
    "10R5L5R10L4R5L5",
]

# The eleven cube nets, one row of faces per string ('#' = face)
CUBE_NETS = {
    "cross":      ["_#__", "####", "_#__"],
    "t_long":     ["#___", "####", "#___"],
    "one_four_a": ["#___", "####", "_#__"],
    "one_four_b": ["#___", "####", "__#_"],
    "one_four_c": ["#___", "####", "___#"],
    "one_four_d": ["_#__", "####", "__#_"],
    "two_three_a": ["##__", "_###", "_#__"],
    "two_three_b": ["##__", "_###", "__#_"],
    "two_three_c": ["##__", "_###", "___#"],
    "stairs":     ["##__", "_##_", "__##"],
    "three_three": ["###__", "__###"],
}


def orient(rows, quarter_turns=0, mirror=False):
    """Mirror a face pattern left to right, then turn it clockwise."""
    grid = [row[::-1] for row in rows] if mirror else list(rows)
    for _ in range(quarter_turns % 4):
        grid = ["".join(col) for col in zip(*grid[::-1])]
    return grid


# Every net in all eight orientations: four turns, with and without mirroring
NET_ORIENTATIONS = [
    (name, turns, mirror)
    for name in sorted(CUBE_NETS)
    for turns in range(4)
    for mirror in (False, True)
]


def _orientation_id(param):
    name, turns, mirror = param
    return f"{name}-r{turns * 90}{'-m' if mirror else ''}"


def make_open_net(rows, side):
    """Blow a face pattern up into an all-open board with the given side."""
    lines = []
    for row in rows:
        for _ in range(side):
            line = "".join(("." if c == "#" else " ") * side for c in row)
            lines.append(line.rstrip())
    return lines


@pytest.fixture
def example_lines():
    return list(EXAMPLE_LINES)


@pytest.fixture
def example_puzzle():
    """(board, moves) for the example cross net with side length 4."""
    return parse_puzzle(EXAMPLE_LINES)


@pytest.fixture
def example_board(example_puzzle):
    return example_puzzle[0]


@pytest.fixture(params=NET_ORIENTATIONS, ids=_orientation_id)
def open_net(request):
    """All-open board, side length 3, for each cube net in each orientation."""
    name, turns, mirror = request.param
    rows = orient(CUBE_NETS[name], turns, mirror)
    return BoardMap.from_lines(make_open_net(rows, 3))
