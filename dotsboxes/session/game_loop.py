"""
Game Loop - Drives turns for one session.

The loop:
1. Human submits a move
2. Engine validates and applies it
3. If the turn passed to the computer, the bot moves until the
   turn comes back (every capture grants it another move)
4. Caller reads the new state and renders it
5. Repeat until game over
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import TYPE_CHECKING

from ..engine_core.state import Outcome, Player
from ..engine_core.move import Move, MoveResult
from ..engine_core.reducer import Reducer
from ..engine_core.move_generator import legal_moves
from ..engine_core.errors import NotYourTurn

if TYPE_CHECKING:
    from .manager import Session
    from ..bots import BotDecision

logger = logging.getLogger(__name__)


class LoopState(Enum):
    """State of the game loop."""
    WAITING_HUMAN = "waiting_human"
    COMPUTER_TURN = "computer_turn"
    GAME_OVER = "game_over"


@dataclass
class TurnResult:
    """
    Result of processing a turn.

    Contains the human move outcome and any computer replies.
    """
    success: bool
    loop_state: LoopState

    # Result of the submitted move, if any
    move_result: MoveResult | None = None

    # Computer moves played in reply
    computer_moves: list[BotDecision] = field(default_factory=list)

    changes: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    # Game over info
    outcome: Outcome | None = None


class GameLoop:
    """
    The main game loop driver.

    Usage:
        loop = GameLoop(session)

        result = loop.play_turn(move)
        if not result.success:
            # Re-prompt, state is unchanged
            show_errors(result.errors)

        render(session.game_state)
    """

    def __init__(self, session: Session, reducer: Reducer | None = None):
        self.session = session
        self.reducer = reducer or Reducer()

    @property
    def state(self) -> LoopState:
        game_state = self.session.game_state
        if game_state.is_over:
            return LoopState.GAME_OVER
        if self.session.vs_computer and game_state.current_player is Player.COMPUTER:
            return LoopState.COMPUTER_TURN
        return LoopState.WAITING_HUMAN

    def submit_move(self, move: Move) -> MoveResult:
        """
        Apply a human move.

        In a game against the computer, moves are refused with
        NotYourTurn while the computer is to move.
        """
        game_state = self.session.game_state
        if self.state == LoopState.COMPUTER_TURN:
            return MoveResult.failure(NotYourTurn("It is the computer's turn", move=move))

        result = self.reducer.apply(game_state, move)
        if result.success:
            self.session.push(result.new_state)
        return result

    def run_computer_turn(self) -> TurnResult:
        """
        Let the computer move until the turn passes back or the game ends.
        """
        decisions = []
        changes = []

        while self.state == LoopState.COMPUTER_TURN:
            game_state = self.session.game_state
            decision = self.session.policy.select_move(game_state, legal_moves(game_state))
            result = self.reducer.apply(game_state, decision.move)
            if not result.success:
                # Policies choose from legal moves, so this is a policy bug
                raise result.error

            self.session.push(result.new_state)
            decisions.append(decision)
            changes.extend(result.changes)
            logger.debug("Computer played %s (%s)", decision.move, decision.explanation)

        return TurnResult(
            success=True,
            loop_state=self.state,
            computer_moves=decisions,
            changes=changes,
            outcome=self._outcome(),
        )

    def play_turn(self, move: Move) -> TurnResult:
        """
        Submit a human move, then run the computer's reply if it is due.
        """
        move_result = self.submit_move(move)
        if not move_result.success:
            return TurnResult(
                success=False,
                loop_state=self.state,
                move_result=move_result,
                errors=[str(move_result.error)],
            )

        reply = self.run_computer_turn()
        return TurnResult(
            success=True,
            loop_state=reply.loop_state,
            move_result=move_result,
            computer_moves=reply.computer_moves,
            changes=move_result.changes + reply.changes,
            outcome=reply.outcome,
        )

    def undo_turn(self) -> int:
        """
        Undo back to the last position where the human was to move.

        Returns the number of snapshots undone.
        """
        undone = self.session.undo()
        while undone and self.state == LoopState.COMPUTER_TURN and self.session.can_undo:
            undone += self.session.undo()
        return undone

    def _outcome(self) -> Outcome | None:
        game_state = self.session.game_state
        return game_state.result if game_state.is_over else None
