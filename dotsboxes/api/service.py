"""
API Service - Business logic layer between a UI and the engine.

The service:
1. Translates requests to engine calls
2. Manages sessions
3. Runs the computer's turns
4. Formats responses for the UI

This layer is framework-agnostic (can be wrapped by any HTTP or
desktop toolkit).
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from pydantic import ValidationError

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
    # Enums
    SessionStatus,
    ErrorCode,
)
from ..engine_core.errors import InvalidDimensions, MoveError
from ..engine_core.state import Player
from ..engine_core.move_generator import legal_moves
from ..bots import POLICIES, select_move
from ..session import SessionManager, Session, GameLoop, LoopState, TurnResult

logger = logging.getLogger(__name__)


@dataclass
class GameService:
    """
    Main service for a Dots-and-Boxes UI.

    Usage:
        service = GameService()

        game = service.create_game(CreateGameRequest(rows=3, cols=3))
        moves = service.legal_moves(game.session_id)
        result = service.submit_move(
            SubmitMoveRequest(session_id=game.session_id, move=moves.moves[0])
        )
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    # Game loops per session
    _game_loops: dict[str, GameLoop] = field(default_factory=dict)

    def create_game(self, request: CreateGameRequest) -> GameResponse | ErrorResponse:
        """
        Create a new game session.
        """
        if request.policy not in POLICIES:
            return ErrorResponse(
                error=f"Unknown policy: {request.policy}",
                error_code=ErrorCode.VALIDATION_ERROR,
            )

        try:
            session = self.session_manager.create_session(
                rows=request.rows,
                cols=request.cols,
                first_player=request.first_player,
                policy=request.policy,
                vs_computer=request.vs_computer,
            )
        except InvalidDimensions as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.INVALID_DIMENSIONS)

        self._game_loops[session.session_id] = GameLoop(session)
        return self._session_to_response(session)

    def restore_game(self, request: RestoreGameRequest) -> GameResponse | ErrorResponse:
        """
        Create a session that continues from a saved snapshot.

        The snapshot is checked again here, since a model can be built
        with model_construct or edited after validation. Snapshots the
        engine could not have produced are refused with VALIDATION_ERROR.
        """
        try:
            state = GameStateModel.model_validate(request.state.model_dump())
        except ValidationError as e:
            logger.info("Refused saved game: %s", e)
            return ErrorResponse(
                error=f"Invalid saved game: {e}",
                error_code=ErrorCode.VALIDATION_ERROR,
            )

        response = self.create_game(
            CreateGameRequest(
                rows=state.rows,
                cols=state.cols,
                first_player=state.current_player,
                policy=request.policy,
                vs_computer=request.vs_computer,
            )
        )
        if isinstance(response, ErrorResponse):
            return response

        session = self.session_manager.get_session(response.session_id)
        session.load(state.to_state())
        return self._session_to_response(session)

    def new_game(
        self,
        session_id: str,
        rows: int | None = None,
        cols: int | None = None,
        first_player: Player | None = None,
    ) -> GameResponse | ErrorResponse:
        """
        Restart a session, optionally with a different board size.

        The side that moved first keeps moving first unless first_player
        is given.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._session_not_found(session_id)

        try:
            session.restart(
                rows if rows is not None else session.game_state.rows,
                cols if cols is not None else session.game_state.cols,
                first_player,
            )
        except InvalidDimensions as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.INVALID_DIMENSIONS)
        return self._session_to_response(session)

    def get_game(self, session_id: str) -> GameResponse | ErrorResponse:
        """
        Get session status and state.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._session_not_found(session_id)
        return self._session_to_response(session)

    def legal_moves(
        self,
        session_id: str,
        include_suggestion: bool = False,
    ) -> LegalMovesResponse | ErrorResponse:
        """
        Get the legal moves, optionally with a greedy hint.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._session_not_found(session_id)

        game_state = session.game_state
        suggested = None
        if include_suggestion:
            move = select_move(game_state)
            suggested = MoveModel.from_move(move) if move else None

        return LegalMovesResponse(
            session_id=session_id,
            moves=[MoveModel.from_move(m) for m in legal_moves(game_state)],
            suggested=suggested,
        )

    def submit_move(self, request: SubmitMoveRequest) -> MoveResponse | ErrorResponse:
        """
        Play a human move, then the computer's reply unless auto_reply is off.
        """
        session = self.session_manager.get_session(request.session_id)
        if not session:
            return self._session_not_found(request.session_id)

        game_loop = self._game_loops[request.session_id]
        move = request.move.to_move()
        if request.auto_reply:
            result = game_loop.play_turn(move)
        else:
            move_result = game_loop.submit_move(move)
            result = TurnResult(
                success=move_result.success,
                loop_state=game_loop.state,
                move_result=move_result,
                changes=move_result.changes,
                outcome=session.game_state.result if session.game_state.is_over else None,
            )

        if not result.success:
            return self._move_error(result.move_result.error)

        return self._turn_result_to_response(session, result)

    def computer_turn(self, session_id: str) -> MoveResponse | ErrorResponse:
        """
        Run the computer's moves if it is to move. No-op otherwise.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._session_not_found(session_id)

        result = self._game_loops[session_id].run_computer_turn()
        return self._turn_result_to_response(session, result)

    def undo(self, session_id: str) -> GameResponse | ErrorResponse:
        """
        Take back moves until the human is to move again.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._session_not_found(session_id)

        game_loop = self._game_loops[session_id]
        if session.vs_computer:
            game_loop.undo_turn()
        else:
            session.undo()
        return self._session_to_response(session)

    def redo(self, session_id: str) -> GameResponse | ErrorResponse:
        """
        Replay one undone snapshot.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._session_not_found(session_id)

        session.redo()
        return self._session_to_response(session)

    def end_game(self, session_id: str) -> GameResponse | ErrorResponse:
        """
        End a session. The final state is returned once more.
        """
        session = self.session_manager.end_session(session_id)
        if not session:
            return self._session_not_found(session_id)

        self._game_loops.pop(session_id, None)
        return self._session_to_response(session)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _session_to_response(self, session: Session) -> GameResponse:
        return GameResponse(
            session_id=session.session_id,
            status=self._status(session),
            state=GameStateModel.from_state(session.game_state),
            can_undo=session.can_undo,
            can_redo=session.can_redo,
        )

    def _turn_result_to_response(self, session: Session, result: TurnResult) -> MoveResponse:
        captured = result.move_result.captured if result.move_result else []
        return MoveResponse(
            session_id=session.session_id,
            success=result.success,
            status=self._loop_state_to_status(result.loop_state),
            captured=captured,
            computer_moves=[MoveModel.from_move(d.move) for d in result.computer_moves],
            changes=result.changes,
            state=GameStateModel.from_state(session.game_state),
            outcome=result.outcome,
        )

    def _status(self, session: Session) -> SessionStatus:
        game_loop = self._game_loops.get(session.session_id) or GameLoop(session)
        return self._loop_state_to_status(game_loop.state)

    def _loop_state_to_status(self, loop_state: LoopState) -> SessionStatus:
        mapping = {
            LoopState.WAITING_HUMAN: SessionStatus.YOUR_TURN,
            LoopState.COMPUTER_TURN: SessionStatus.COMPUTER_TURN,
            LoopState.GAME_OVER: SessionStatus.GAME_OVER,
        }
        return mapping[loop_state]

    def _move_error(self, error: MoveError) -> ErrorResponse:
        logger.debug("Move rejected: %s", error)
        return ErrorResponse(error=str(error), error_code=ErrorCode(error.error_code))

    def _session_not_found(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Session not found: {session_id}",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )
