"""
Session Module - Manages in-memory game sessions.

A session represents one play-through of a game:
- Created when the caller starts a game
- Holds the current snapshot and the undo/redo history
- Runs the computer's turns
"""

from .manager import SessionManager, Session, SessionState
from .game_loop import GameLoop, LoopState, TurnResult

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
    "GameLoop",
    "LoopState",
    "TurnResult",
]
