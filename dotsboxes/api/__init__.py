"""
API Module - Presentation-layer interface.

Exposes the engine to a UI through pydantic models. The UI:
1. Creates a game session
2. Asks for legal moves to offer as clickable edges
3. Submits the human's moves and receives the computer's replies
4. Undoes, redoes, saves and restores games

All state is session-scoped and in memory.
"""

from .schemas import (
    # Requests
    CreateGameRequest,
    SubmitMoveRequest,
    RestoreGameRequest,
    # Responses
    GameResponse,
    MoveResponse,
    LegalMovesResponse,
    ErrorResponse,
    # Shared
    GameStateModel,
    MoveModel,
    EdgeModel,
    BoxModel,
    # Enums
    SessionStatus,
    ErrorCode,
)
from .service import GameService

__all__ = [
    # Requests
    "CreateGameRequest",
    "SubmitMoveRequest",
    "RestoreGameRequest",
    # Responses
    "GameResponse",
    "MoveResponse",
    "LegalMovesResponse",
    "ErrorResponse",
    # Shared
    "GameStateModel",
    "MoveModel",
    "EdgeModel",
    "BoxModel",
    # Enums
    "SessionStatus",
    "ErrorCode",
    # Service
    "GameService",
]
