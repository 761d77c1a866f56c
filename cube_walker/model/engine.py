"""Walk engine: runs a move script over a board."""

import logging
from typing import Dict, List, Optional

from .board import BoardMap
from .moves import Move, MoveKind, apply_move
from .state import Position, WalkState
from .walker import Walker


logger = logging.getLogger(__name__)


class WalkEngine:
    """
    Orchestrates the discrete walk, one script move per step.

    Implements:
    1. Start position lookup
    2. Move execution through the walker (flat or cube)
    3. Trail and metric bookkeeping
    4. State snapshot generation
    """

    def __init__(self, board: BoardMap, walker: Walker, moves: List[Move]):
        self.board = board
        self.walker = walker
        self.moves = moves
        self.current_step = 0

        self.position: Position = walker.starting_position()
        self.start: Position = self.position

        # Metrics tracking
        self.cells_walked = 0
        self.blocked_moves = 0
        self.turns = 0

    def step(self) -> WalkState:
        """
        Execute the next move of the script.

        1. Apply the move through the walker
        2. Update counters (cells walked, wall hits, turns)
        3. Return current state snapshot
        """
        move = self.moves[self.current_step]
        self.current_step += 1

        self.position, trail = apply_move(self.position, move, self.walker)

        if move.kind == MoveKind.FORWARD:
            self.cells_walked += len(trail)
            if len(trail) < move.count:
                self.blocked_moves += 1
        else:
            self.turns += 1

        logger.debug("Step %d: %s -> (%d, %d) %s", self.current_step, move,
                     self.position.x, self.position.y,
                     self.position.heading.name)
        return self._create_state_snapshot(move, trail)

    def _create_state_snapshot(self, move: Move,
                               trail: List[Position]) -> WalkState:
        metrics = {
            'cells_walked': self.cells_walked,
            'blocked_moves': self.blocked_moves,
            'turns': self.turns,
            'score': self.position.score(),
        }
        return WalkState(
            step=self.current_step,
            move=str(move),
            position=self.position,
            trail=list(trail),
            metrics=metrics
        )

    def is_finished(self) -> bool:
        """Check if the script is exhausted."""
        return self.current_step >= len(self.moves)

    def run(self) -> Optional[WalkState]:
        """Execute all remaining moves and return the last snapshot."""
        state = None
        while not self.is_finished():
            state = self.step()
        return state

    def get_summary(self) -> Dict:
        """Get summary statistics for the walk."""
        return {
            'total_steps': self.current_step,
            'cells_walked': self.cells_walked,
            'blocked_moves': self.blocked_moves,
            'turns': self.turns,
            'final_position': self.position,
            'score': self.position.score(),
        }
