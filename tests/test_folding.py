"""
test_folding.py — Lattice extraction, folding and warp table
=============================================================

Verifies:
  - side length and face set of the example net
  - malformed nets are rejected at build time
  - folding finds the known neighbours of the example faces
  - every cube net yields a closed, self-consistent warp table
"""

from collections import Counter

import pytest

from cube_walker.model.board import BoardMap
from cube_walker.model.direction import Direction
from cube_walker.model.folding import (
    MAX_FOLDS, FoldKind, Placement, VirtualLayout, _rotate_about, find_fold,
    normalize
)
from cube_walker.model.lattice import InvalidNetError, extract_lattice
from cube_walker.model.warp import build_warp_table, format_warp_table

from conftest import CUBE_NETS, NET_ORIENTATIONS, make_open_net, orient

E, S, W, N = Direction.EAST, Direction.SOUTH, Direction.WEST, Direction.NORTH

# Faces of the example net
TOP, BACK, LEFT, FRONT, BOTTOM, RIGHT = (2, 0), (0, 1), (1, 1), (2, 1), (2, 2), (3, 2)


class TestLattice:

    def test_example(self, example_board):
        lattice = extract_lattice(example_board)
        assert lattice.side_length == 4
        assert lattice.faces == {TOP, BACK, LEFT, FRONT, BOTTOM, RIGHT}

    def test_face_of(self, example_board):
        lattice = extract_lattice(example_board)
        assert lattice.face_of(11, 5) == FRONT
        assert lattice.face_of(12, 8) == RIGHT
        assert lattice.origin(RIGHT) == (12, 8)

    def test_too_few_faces(self):
        board = BoardMap.from_lines(make_open_net(["#___", "###_", "_#__"], 2))
        with pytest.raises(InvalidNetError, match="Expected 6 faces"):
            extract_lattice(board)

    def test_disconnected_faces(self):
        board = BoardMap.from_lines(make_open_net(["#__#", "##__", "_##_"], 2))
        with pytest.raises(InvalidNetError, match="separate pieces"):
            extract_lattice(board)

    def test_empty_board(self):
        with pytest.raises(InvalidNetError):
            extract_lattice(BoardMap.from_lines([]))


class TestRotationHelpers:

    def test_quarter_turn_about_corner(self):
        # Corner between (2,1) and (3,2), doubled
        assert _rotate_about((3, 2), (5, 3), -1) == (3, 1)
        assert _rotate_about((3, 2), (5, 3), 1) == (2, 2)

    def test_half_turn_about_centre(self):
        assert _rotate_about((3, 2), (6, 2), 2) == (3, 0)

    def test_zero_turns_is_identity(self):
        assert _rotate_about((4, -1), (0, 0), 0) == (4, -1)

    def test_moved_rejects_collision(self):
        layout = VirtualLayout([(0, 0), (1, 0)])
        assert layout.moved([(1, 0)], (1, 0), 2) is None

    def test_moved_keeps_bijection(self):
        layout = VirtualLayout([(0, 0), (1, 0), (1, 1)])
        folded = layout.moved([(1, 1)], (1, 1), 1)
        assert folded is not None
        assert set(folded.index.values()) == set(folded.slots)
        for face, (coord, _) in folded.slots.items():
            assert folded.index[coord] == face
        # Original left untouched
        assert layout.at((1, 1)) == Placement((1, 1), 0)


class TestNormalize:

    def test_front_face(self, example_board):
        faces = extract_lattice(example_board).faces
        assert normalize(FRONT, faces) == {
            N: Placement(TOP, 0),
            W: Placement(LEFT, 0),
            S: Placement(BOTTOM, 0),
            E: Placement(RIGHT, 3),
        }

    def test_top_face(self, example_board):
        faces = extract_lattice(example_board).faces
        assert normalize(TOP, faces) == {
            N: Placement(BACK, 2),
            E: Placement(RIGHT, 2),
            S: Placement(FRONT, 0),
            W: Placement(LEFT, 1),
        }

    def test_first_fold_is_local(self, example_board):
        faces = extract_lattice(example_board).faces
        kind, _ = find_fold(VirtualLayout(faces), TOP)
        assert kind == FoldKind.LOCAL

    def test_idempotent(self, example_board):
        faces = extract_lattice(example_board).faces
        for face in faces:
            assert normalize(face, faces) == normalize(face, faces)

    def test_unknown_face(self, example_board):
        faces = extract_lattice(example_board).faces
        with pytest.raises(InvalidNetError):
            normalize((5, 5), faces)

    def test_block_does_not_fold(self):
        faces = frozenset((x, y) for x in range(3) for y in range(2))
        with pytest.raises(InvalidNetError, match="No fold"):
            normalize((0, 0), faces)

    def test_strip_does_not_fold(self):
        faces = frozenset((x, 0) for x in range(6))
        with pytest.raises(InvalidNetError):
            normalize((0, 0), faces)

    def test_every_fold_kind_is_used(self):
        """Across all nets and orientations each fold kind does some work."""
        counts = Counter()
        for name, turns, mirror in NET_ORIENTATIONS:
            rows = orient(CUBE_NETS[name], turns, mirror)
            faces = frozenset((x, y) for y, row in enumerate(rows)
                              for x, c in enumerate(row) if c == "#")
            assert len(faces) == 6
            for face in faces:
                layout = VirtualLayout(faces)
                for _ in range(MAX_FOLDS):
                    if all(layout.occupied(d.step(face)) for d in Direction):
                        break
                    kind, layout = find_fold(layout, face)
                    counts[kind] += 1
                assert all(layout.occupied(d.step(face)) for d in Direction)
        assert set(counts) == set(FoldKind)


class TestWarpTable:

    def test_covers_every_exit(self, open_net):
        table = build_warp_table(extract_lattice(open_net).faces)
        assert len(table) == 24

    def test_neighbours_are_distinct(self, open_net):
        faces = extract_lattice(open_net).faces
        table = build_warp_table(faces)
        for face in faces:
            targets = {table[(face, d)].face for d in Direction}
            assert face not in targets
            assert len(targets) == 4

    def test_opposite_faces_never_adjacent(self, open_net):
        faces = extract_lattice(open_net).faces
        table = build_warp_table(faces)
        for face in faces:
            neighbours = {table[(face, d)].face for d in Direction}
            (opposite,) = faces - neighbours - {face}
            opposite_neighbours = {table[(opposite, d)].face for d in Direction}
            assert face not in opposite_neighbours

    def test_edges_pair_up(self, open_net):
        """Crossing A -> B and turning around leads back into A."""
        table = build_warp_table(extract_lattice(open_net).faces)
        for (face, direction), placement in table.items():
            arrival = direction.rotated(-placement.rotation)
            back = table[(placement.face, arrival.opposite)]
            assert back.face == face
            assert back.rotation == (-placement.rotation) % 4

    def test_read_only(self, example_board):
        table = build_warp_table(extract_lattice(example_board).faces)
        with pytest.raises(TypeError):
            table[(TOP, N)] = Placement(TOP, 0)

    def test_format(self, example_board):
        table = build_warp_table(extract_lattice(example_board).faces)
        text = format_warp_table(table)
        assert len(text.splitlines()) == 24
        assert "(2, 1) EAST  -> (3, 2) rot 270" in text

    def test_incomplete_table_is_rejected(self, example_board, monkeypatch):
        faces = extract_lattice(example_board).faces
        monkeypatch.setattr("cube_walker.model.warp.normalize",
                            lambda face, faces: {E: Placement(face, 0)})
        with pytest.raises(InvalidNetError, match="6 of 24 face exits"):
            build_warp_table(faces)


class TestOrientations:

    def test_quarter_turn(self):
        assert orient(["#_", "##"], 1) == ["##", "#_"]
        assert orient(["ab", "cd"], 1) == ["ca", "db"]

    def test_mirror(self):
        assert orient(["##_", "_##"], 0, mirror=True) == ["_##", "##_"]

    def test_full_turn_is_identity(self):
        for rows in CUBE_NETS.values():
            assert orient(rows, 4) == rows

    def test_orientations_keep_six_faces(self):
        for name, turns, mirror in NET_ORIENTATIONS:
            rows = orient(CUBE_NETS[name], turns, mirror)
            assert sum(row.count("#") for row in rows) == 6
        assert len(NET_ORIENTATIONS) == 88
