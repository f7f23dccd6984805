"""
Engine Core - Deterministic Dots-and-Boxes state management.

The engine is the runtime that:
1. Creates a GameState for an R x C board
2. Generates legal moves
3. Applies moves via the reducer
4. Tracks captures, scores, turns and game over
"""

from .errors import (
    DotsBoxesError,
    InvalidDimensions,
    MoveError,
    IllegalMove,
    GameAlreadyOver,
    GameNotOver,
    NotYourTurn,
)
from .state import (
    GameState,
    GamePhase,
    Grid,
    Box,
    Edge,
    Direction,
    Orientation,
    Player,
    Outcome,
    scores,
    current_player,
    is_over,
    result,
)
from .move import Move, MoveResult
from .reducer import Reducer, apply_move, create_game, points_for, replay
from .move_generator import MoveGenerator, legal_moves, is_legal

__all__ = [
    "DotsBoxesError",
    "InvalidDimensions",
    "MoveError",
    "IllegalMove",
    "GameAlreadyOver",
    "GameNotOver",
    "NotYourTurn",
    "GameState",
    "GamePhase",
    "Grid",
    "Box",
    "Edge",
    "Direction",
    "Orientation",
    "Player",
    "Outcome",
    "scores",
    "current_player",
    "is_over",
    "result",
    "Move",
    "MoveResult",
    "Reducer",
    "apply_move",
    "create_game",
    "points_for",
    "replay",
    "MoveGenerator",
    "legal_moves",
    "is_legal",
]
