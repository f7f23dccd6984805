"""
Move Generator - Generates all legal moves from a game state.

The move generator is used by:
1. Bots to enumerate candidate moves
2. UI to show clickable edges
3. Validation (is this move in legal_moves?)

Order: boxes in row-major order, and per box top, right, bottom,
left. A shared edge is yielded once, under the first box that
reaches it. Bots rely on this order for tie-breaking.
"""

from __future__ import annotations
from dataclasses import dataclass

from .state import GameState, Direction
from .move import Move


@dataclass
class MoveGenerator:
    """
    Generates legal moves for the current game state.

    Recomputed on every call, nothing is cached.
    """

    def generate(self, state: GameState) -> list[Move]:
        """
        Generate every undrawn edge as a Move.

        Returns an empty list once the game is over.
        """
        if state.is_over:
            return []

        grid = state.grid
        seen = set()
        moves = []
        for row in range(grid.rows):
            for col in range(grid.cols):
                for direction in Direction:
                    move = Move(row, col, direction)
                    edge = move.edge
                    if edge in grid.lines or edge in seen:
                        continue
                    seen.add(edge)
                    moves.append(move)
        return moves

    def max_moves(self, state: GameState) -> int:
        """Upper bound on the number of moves: every edge of the board."""
        return state.grid.total_edges


def legal_moves(state: GameState) -> list[Move]:
    """
    Convenience function to get legal moves.

    Creates a MoveGenerator and generates moves.
    """
    return MoveGenerator().generate(state)


def is_legal(state: GameState, move: Move) -> bool:
    """Check if a specific move is legal, including shared-edge aliases."""
    if state.is_over or not isinstance(move.direction, Direction):
        return False
    if not state.grid.in_bounds(move.row, move.col):
        return False
    return move.edge not in state.grid.lines
