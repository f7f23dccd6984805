"""
Dots-and-Boxes - Game engine with a computer opponent

A deterministic engine for Dots-and-Boxes on an R x C board.
The engine provides:
- Immutable game state snapshots
- Legal move generation
- Move application with captures, extra turns and game over
- A greedy computer opponent
"""

__version__ = "0.1.0"

from .engine_core import (
    GameState,
    Move,
    MoveResult,
    Player,
    Outcome,
    Direction,
    InvalidDimensions,
    IllegalMove,
    GameAlreadyOver,
    create_game,
    apply_move,
    legal_moves,
    scores,
    current_player,
    is_over,
    result,
)
from .bots import select_move

__all__ = [
    "GameState",
    "Move",
    "MoveResult",
    "Player",
    "Outcome",
    "Direction",
    "InvalidDimensions",
    "IllegalMove",
    "GameAlreadyOver",
    "create_game",
    "apply_move",
    "legal_moves",
    "scores",
    "current_player",
    "is_over",
    "result",
    "select_move",
]
