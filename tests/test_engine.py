"""
test_engine.py — Full walks of the move script
"""

import pytest

from cube_walker.model.direction import Direction
from cube_walker.model.engine import WalkEngine
from cube_walker.model.moves import Move, MoveKind, apply_move
from cube_walker.model.state import Position
from cube_walker.model.walker import CubeWalker, FlatWalker


class TestApplyMove:

    def test_turns_do_not_move(self, example_board):
        walker = FlatWalker(example_board)
        start = Position(8, 0, Direction.EAST)
        left, trail = apply_move(start, Move(MoveKind.TURN_LEFT), walker)
        assert left == Position(8, 0, Direction.NORTH)
        assert trail == []
        right, _ = apply_move(start, Move(MoveKind.TURN_RIGHT), walker)
        assert right == Position(8, 0, Direction.SOUTH)

    def test_forward_stops_at_wall(self, example_board):
        walker = FlatWalker(example_board)
        start = Position(8, 0, Direction.EAST)
        end, trail = apply_move(start, Move(MoveKind.FORWARD, 10), walker)
        assert end == Position(10, 0, Direction.EAST)
        assert [p.coord for p in trail] == [(9, 0), (10, 0)]


class TestWalkEngine:

    def test_flat_password(self, example_puzzle):
        board, moves = example_puzzle
        engine = WalkEngine(board, FlatWalker(board), moves)
        final = engine.run()
        assert final.position == Position(7, 5, Direction.EAST)
        assert final.position.score() == 6032

    def test_cube_password(self, example_puzzle):
        board, moves = example_puzzle
        engine = WalkEngine(board, CubeWalker(board), moves)
        final = engine.run()
        assert final.position == Position(6, 4, Direction.NORTH)
        assert final.position.score() == 5031

    def test_step_by_step(self, example_puzzle):
        board, moves = example_puzzle
        engine = WalkEngine(board, CubeWalker(board), moves)
        assert not engine.is_finished()

        first = engine.step()
        assert first.step == 1
        assert first.move == "10"
        assert first.position == Position(10, 0, Direction.EAST)
        assert len(first.trail) == 2
        assert first.metrics['blocked_moves'] == 1

        second = engine.step()
        assert second.move == "R"
        assert second.trail == []
        assert second.position.heading == Direction.SOUTH

    def test_finishes_after_script(self, example_puzzle):
        board, moves = example_puzzle
        engine = WalkEngine(board, FlatWalker(board), moves)
        engine.run()
        assert engine.is_finished()
        assert engine.current_step == len(moves)

    def test_summary(self, example_puzzle):
        board, moves = example_puzzle
        engine = WalkEngine(board, CubeWalker(board), moves)
        engine.run()
        summary = engine.get_summary()
        assert summary['score'] == 5031
        assert summary['turns'] == 6
        assert summary['total_steps'] == 13
        assert summary['cells_walked'] > 0

    def test_empty_script(self, example_board):
        engine = WalkEngine(example_board, FlatWalker(example_board), [])
        assert engine.is_finished()
        assert engine.run() is None

    def test_csv_rows(self, example_puzzle):
        board, moves = example_puzzle
        engine = WalkEngine(board, FlatWalker(board), moves)
        rows = engine.step().to_csv_rows()
        assert rows == [
            {"step": 1, "move": "10", "x": 9, "y": 0, "heading": "east"},
            {"step": 1, "move": "10", "x": 10, "y": 0, "heading": "east"},
        ]
