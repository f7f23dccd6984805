"""
Engine errors.

InvalidDimensions is raised at construction time. Move errors are
returned inside a MoveResult by the reducer and raised by
MoveResult.unwrap().
"""

from __future__ import annotations


class DotsBoxesError(Exception):
    """Base class for all engine errors."""


class InvalidDimensions(DotsBoxesError, ValueError):
    """Board dimensions are not positive or exceed the configured ceiling."""

    def __init__(self, rows: int, cols: int, reason: str = ""):
        self.rows = rows
        self.cols = cols
        message = f"Invalid board dimensions {rows}x{cols}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class MoveError(DotsBoxesError):
    """A submitted move was rejected. The state is unchanged."""

    error_code = "MOVE_ERROR"

    def __init__(self, message: str, move=None):
        self.move = move
        super().__init__(message)


class IllegalMove(MoveError):
    """Edge already drawn, out of bounds, or not a valid direction."""

    error_code = "ILLEGAL_MOVE"


class GameAlreadyOver(MoveError):
    """A move was submitted after every box was completed."""

    error_code = "GAME_ALREADY_OVER"


class GameNotOver(DotsBoxesError):
    """The outcome was requested before the game ended."""


class NotYourTurn(MoveError):
    """A session received a move for the side the computer plays."""

    error_code = "NOT_YOUR_TURN"
