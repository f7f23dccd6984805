"""
Reducer - Applies moves to game state.

The reducer is the single point of state transition.
All state changes must go through apply_move().

Design principles:
- Pure function: (state, move) -> new_state
- Validates before applying
- Returns MoveResult with success/failure, never mutates the input
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterable

from .state import GameState, GamePhase, Grid, Player, Direction
from .move import Move, MoveResult
from .errors import GameAlreadyOver, IllegalMove, MoveError

logger = logging.getLogger(__name__)


@dataclass
class Reducer:
    """
    Reducer applies moves to game state.

    Stateless - all state is in GameState.

    With full_scan set, completion is detected by scanning the whole
    board for complete unowned boxes instead of checking the boxes
    touching the placed edge. Both give the same result, since every
    complete box is owned after each applied move.
    """
    full_scan: bool = False

    def apply(self, state: GameState, move: Move) -> MoveResult:
        """
        Apply a move to the game state.

        Returns MoveResult with new state or error.
        """
        error = self._validate_move(state, move)
        if error:
            logger.debug("Rejected %s: %s", move, error)
            return MoveResult.failure(error)

        mover = state.current_player
        grid = state.grid.set_edge(move.row, move.col, move.direction, drawn_by=mover)

        if self.full_scan:
            candidates = [
                (row, col)
                for row in range(grid.rows)
                for col in range(grid.cols)
            ]
        else:
            candidates = move.edge.adjacent_boxes(grid.rows, grid.cols)

        captured = []
        for row, col in candidates:
            if grid.owner(row, col) is None and grid.is_complete(row, col):
                grid = grid.with_owner(row, col, mover)
                captured.append((row, col))

        gained = len(captured)
        human_score, computer_score = state.scores
        if mover is Player.HUMAN:
            human_score += gained
        else:
            computer_score += gained

        # Capturing a box grants another move
        next_player = mover if gained > 0 else mover.opponent
        phase = GamePhase.GAME_OVER if grid.is_full else GamePhase.IN_PROGRESS

        new_state = state._copy_with(
            grid=grid,
            human_score=human_score,
            computer_score=computer_score,
            current_player=next_player,
            phase=phase,
            moves=state.moves + (move,),
        )

        changes = [f"{mover.value} drew {move.direction.value} of box ({move.row}, {move.col})"]
        for row, col in captured:
            changes.append(f"{mover.value} captured box ({row}, {col})")
        if phase == GamePhase.GAME_OVER:
            changes.append(f"Game over: {new_state.result.value}")
            logger.info(
                "Game over after %d moves, score %d-%d",
                len(new_state.moves), human_score, computer_score,
            )

        logger.debug("Applied %s by %s, captured %d", move, mover.value, gained)
        return MoveResult.success_with_state(new_state, captured=captured, changes=changes)

    def _validate_move(self, state: GameState, move: Move) -> MoveError | None:
        """
        Validate that a move is legal in the current state.

        Returns the error if invalid, None if valid.
        """
        if state.is_over:
            return GameAlreadyOver("Game is over - no moves allowed", move=move)

        if not isinstance(move.direction, Direction):
            return IllegalMove(f"Unknown direction: {move.direction!r}", move=move)

        if not state.grid.in_bounds(move.row, move.col):
            return IllegalMove(
                f"Box ({move.row}, {move.col}) is outside the {state.rows}x{state.cols} board",
                move=move,
            )

        if state.grid.has_edge(move.row, move.col, move.direction):
            return IllegalMove(
                f"The {move.direction.value} edge of box ({move.row}, {move.col}) is already drawn",
                move=move,
            )

        return None


def create_game(rows: int, cols: int, first_player: Player = Player.HUMAN) -> GameState:
    """Create a new game. Raises InvalidDimensions."""
    state = GameState(grid=Grid.create(rows, cols), current_player=first_player)
    logger.debug("Created %dx%d game, %s moves first", rows, cols, first_player.value)
    return state


def apply_move(state: GameState, move: Move) -> MoveResult:
    """
    Convenience function to apply a move.

    Creates a Reducer and applies the move.
    """
    return Reducer().apply(state, move)


def points_for(state: GameState, move: Move) -> int:
    """
    Boxes the player to move would capture with this move.

    Same count as applying the move and diffing the mover's score,
    without building the new state. Illegal moves are worth 0.
    """
    if Reducer()._validate_move(state, move):
        return 0
    grid = state.grid
    return sum(
        1
        for row, col in move.edge.adjacent_boxes(grid.rows, grid.cols)
        if grid.sides_drawn(row, col) == 3
    )


def replay(
    rows: int,
    cols: int,
    moves: Iterable[Move],
    first_player: Player = Player.HUMAN,
) -> GameState:
    """
    Rebuild a state by replaying moves from a new game.

    Raises the first MoveError encountered.
    """
    reducer = Reducer()
    state = create_game(rows, cols, first_player)
    for move in moves:
        state = reducer.apply(state, move).unwrap()
    return state
