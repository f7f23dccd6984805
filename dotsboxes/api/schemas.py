"""
Pydantic Schemas for API - Request/response models for the presentation layer.

These models define the contract between a UI (desktop, web, terminal)
and the engine. The UI sends discrete moves and reads back state for
display; it never touches engine objects directly.

Error Codes:
- ILLEGAL_MOVE: Edge already drawn or outside the board
- GAME_ALREADY_OVER: Move submitted after the last box was taken
- NOT_YOUR_TURN: Human move submitted while the computer is to move
- INVALID_DIMENSIONS: Board size not accepted
- SESSION_NOT_FOUND: Session does not exist or has ended
- VALIDATION_ERROR: Request could not be interpreted
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, model_validator

from .. import config
from ..engine_core.state import (
    Direction,
    Edge,
    GamePhase,
    GameState,
    Grid,
    Orientation,
    Outcome,
    Player,
)
from ..engine_core.move import Move


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    YOUR_TURN = "your_turn"
    COMPUTER_TURN = "computer_turn"
    GAME_OVER = "game_over"


class ErrorCode(str, Enum):
    """Structured error codes."""
    ILLEGAL_MOVE = "ILLEGAL_MOVE"
    GAME_ALREADY_OVER = "GAME_ALREADY_OVER"
    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    INVALID_DIMENSIONS = "INVALID_DIMENSIONS"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class MoveModel(BaseModel):
    """One side of one box."""
    row: int
    col: int
    direction: Direction

    @classmethod
    def from_move(cls, move: Move) -> "MoveModel":
        return cls(row=move.row, col=move.col, direction=move.direction)

    def to_move(self) -> Move:
        return Move(self.row, self.col, self.direction)


class EdgeModel(BaseModel):
    """A drawn line, in canonical form."""
    orientation: Orientation
    row: int
    col: int
    drawn_by: Optional[Player] = None


class BoxModel(BaseModel):
    """Box information for display."""
    row: int
    col: int
    top: bool = False
    right: bool = False
    bottom: bool = False
    left: bool = False
    owner: Optional[Player] = None

    model_config = {"from_attributes": True}


class GameStateModel(BaseModel):
    """
    Full snapshot of a game.

    Round-trips a GameState: dimensions, drawn edges, box owners,
    scores, turn, phase and move list.
    """
    rows: int = Field(..., ge=1)
    cols: int = Field(..., ge=1)
    human_score: int = Field(0, ge=0)
    computer_score: int = Field(0, ge=0)
    current_player: Player = Player.HUMAN
    phase: GamePhase = GamePhase.IN_PROGRESS
    edges: list[EdgeModel] = Field(default_factory=list)
    boxes: list[BoxModel] = Field(default_factory=list)
    moves: list[MoveModel] = Field(default_factory=list)
    outcome: Optional[Outcome] = None

    @model_validator(mode="after")
    def check_consistency(self) -> "GameStateModel":
        """
        Reject snapshots the engine could not have produced.

        Checks:
        - Board size within the configured maximum
        - Every edge on the board, each listed once
        - Box sides match the edges, each box listed once
        - Owners on complete boxes only, and every complete box owned
        - Scores equal the owned-box counts
        - Phase and outcome agree with the board
        """
        limit = config.DOTSBOXES_MAX_BOARD_SIZE
        if self.rows > limit or self.cols > limit:
            raise ValueError(f"Board {self.rows}x{self.cols} exceeds maximum size {limit}")

        lines = {}
        for edge_model in self.edges:
            edge = Edge(edge_model.orientation, edge_model.row, edge_model.col)
            if not edge.on_board(self.rows, self.cols):
                raise ValueError(
                    f"Edge {edge.orientation.value}({edge.row}, {edge.col}) "
                    f"is outside a {self.rows}x{self.cols} board"
                )
            if edge in lines:
                raise ValueError(f"Edge {edge.orientation.value}({edge.row}, {edge.col}) listed twice")
            lines[edge] = edge_model.drawn_by
        grid = Grid(rows=self.rows, cols=self.cols, lines=lines)

        owners = {}
        seen = set()
        for box_model in self.boxes:
            key = (box_model.row, box_model.col)
            if not grid.in_bounds(*key):
                raise ValueError(f"Box {key} is outside a {self.rows}x{self.cols} board")
            if key in seen:
                raise ValueError(f"Box {key} listed twice")
            seen.add(key)

            box = grid.box(*key)
            sides = (box_model.top, box_model.right, box_model.bottom, box_model.left)
            if sides != (box.top, box.right, box.bottom, box.left):
                raise ValueError(f"Box {key} sides do not match the drawn edges")
            if box_model.owner is not None:
                if not box.is_complete:
                    raise ValueError(f"Box {key} is owned but not complete")
                owners[key] = box_model.owner

        for key in grid.complete_boxes():
            if key not in owners:
                raise ValueError(f"Box {key} is complete but has no owner")

        human = sum(1 for player in owners.values() if player is Player.HUMAN)
        computer = len(owners) - human
        if (self.human_score, self.computer_score) != (human, computer):
            raise ValueError(
                f"Scores {self.human_score}-{self.computer_score} do not match "
                f"owned boxes {human}-{computer}"
            )

        if (self.phase == GamePhase.GAME_OVER) != grid.is_full:
            raise ValueError(f"Phase {self.phase.value} does not match the board")

        if self.outcome is not None:
            if self.phase != GamePhase.GAME_OVER:
                raise ValueError("Outcome given for a game in progress")
            expected = GameState(
                grid=grid,
                human_score=human,
                computer_score=computer,
                phase=self.phase,
            ).result
            if self.outcome != expected:
                raise ValueError(f"Outcome {self.outcome.value} does not match the scores")

        return self

    @classmethod
    def from_state(cls, state: GameState) -> "GameStateModel":
        grid = state.grid
        edges = [
            EdgeModel(
                orientation=edge.orientation,
                row=edge.row,
                col=edge.col,
                drawn_by=player,
            )
            for edge, player in sorted(
                grid.lines.items(),
                key=lambda item: (item[0].orientation.value, item[0].row, item[0].col),
            )
        ]
        return cls(
            rows=state.rows,
            cols=state.cols,
            human_score=state.human_score,
            computer_score=state.computer_score,
            current_player=state.current_player,
            phase=state.phase,
            edges=edges,
            boxes=[BoxModel.model_validate(box) for box in grid.boxes()],
            moves=[MoveModel.from_move(move) for move in state.moves],
            outcome=state.result if state.is_over else None,
        )

    def to_state(self) -> GameState:
        """Rebuild the engine snapshot. Box flags are derived from edges."""
        lines = {
            Edge(edge.orientation, edge.row, edge.col): edge.drawn_by
            for edge in self.edges
        }
        owners = {
            (box.row, box.col): box.owner
            for box in self.boxes
            if box.owner is not None
        }
        return GameState(
            grid=Grid(rows=self.rows, cols=self.cols, lines=lines, owners=owners),
            human_score=self.human_score,
            computer_score=self.computer_score,
            current_player=self.current_player,
            phase=self.phase,
            moves=tuple(move.to_move() for move in self.moves),
        )


# =============================================================================
# Request Models
# =============================================================================

class CreateGameRequest(BaseModel):
    """Request to start a game."""
    rows: int = Field(config.DOTSBOXES_DEFAULT_ROWS, description="Box rows")
    cols: int = Field(config.DOTSBOXES_DEFAULT_COLS, description="Box columns")
    first_player: Player = Field(Player.HUMAN, description="Side that moves first")
    policy: str = Field("greedy", description="greedy, first or random")
    vs_computer: bool = Field(True, description="False for two humans on one board")


class SubmitMoveRequest(BaseModel):
    """Request to play a human move."""
    session_id: str
    move: MoveModel
    auto_reply: bool = Field(True, description="Run the computer's reply right away")


class RestoreGameRequest(BaseModel):
    """Request to continue a game from a saved snapshot."""
    state: GameStateModel
    policy: str = "greedy"
    vs_computer: bool = True


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Structured error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")


class GameResponse(BaseModel):
    """Current state of a session."""
    session_id: str
    status: SessionStatus
    state: GameStateModel
    can_undo: bool = False
    can_redo: bool = False


class MoveResponse(BaseModel):
    """Result of a human move or a computer turn."""
    session_id: str
    success: bool
    status: SessionStatus
    captured: list[tuple[int, int]] = Field(default_factory=list)
    computer_moves: list[MoveModel] = Field(default_factory=list)
    changes: list[str] = Field(default_factory=list)
    state: GameStateModel
    outcome: Optional[Outcome] = None


class LegalMovesResponse(BaseModel):
    """Edges the UI may offer as clickable targets."""
    session_id: str
    moves: list[MoveModel] = Field(default_factory=list)
    suggested: Optional[MoveModel] = Field(None, description="Greedy hint for the player to move")
