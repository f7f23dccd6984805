"""
Greedy Evaluator - Scores candidate moves for bot decision-making.

Each candidate is scored one ply deep:
- Immediate value: boxes the move captures, times capture_value
- Opportunity penalty: boxes the player to move next could capture
  with any single move afterwards, summed and floor-divided by
  opportunity_divisor

There is no deeper search. A search policy can replace this one
behind the same BotPolicy interface.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..engine_core.reducer import Reducer, points_for
from ..engine_core.move_generator import legal_moves

if TYPE_CHECKING:
    from ..engine_core.state import GameState
    from ..engine_core.move import Move

logger = logging.getLogger(__name__)


@dataclass
class EvaluationWeights:
    """
    Weights for the greedy evaluator.

    The defaults score 10 per captured box, minus half (rounded
    down) of the follow-up opportunities.
    """
    capture_value: int = 10
    opportunity_divisor: int = 2


@dataclass
class MoveEvaluation:
    """
    Result of evaluating one candidate move.
    """
    move: Move
    gained: int
    opportunities: int
    penalty: int
    score: int
    next_state: GameState


class GreedyEvaluator:
    """
    Evaluates moves using the one-ply greedy heuristic.

    Used by GreedyPolicy:
    1. Generate legal moves
    2. Apply each move once to get the next state
    3. Score it from the captures and the follow-up opportunities
    4. Select the first move with the highest score
    """

    def __init__(self, weights: EvaluationWeights | None = None):
        self.weights = weights or EvaluationWeights()
        self.reducer = Reducer()

    def evaluate_move(self, state: GameState, move: Move) -> MoveEvaluation:
        """
        Evaluate a move by applying it and counting what it leaves behind.

        Raises the MoveError if the move is not legal in state.
        """
        mover = state.current_player
        next_state = self.reducer.apply(state, move).unwrap()
        gained = next_state.score_of(mover) - state.score_of(mover)

        opportunities = sum(
            points_for(next_state, reply) for reply in legal_moves(next_state)
        )
        penalty = opportunities // self.weights.opportunity_divisor
        score = gained * self.weights.capture_value - penalty

        return MoveEvaluation(
            move=move,
            gained=gained,
            opportunities=opportunities,
            penalty=penalty,
            score=score,
            next_state=next_state,
        )

    def evaluate_moves(
        self,
        state: GameState,
        moves: list[Move] | None = None,
    ) -> list[MoveEvaluation]:
        """Evaluate every candidate, in the order given (legal_moves order by default)."""
        if moves is None:
            moves = legal_moves(state)
        return [self.evaluate_move(state, move) for move in moves]

    def best(
        self,
        state: GameState,
        moves: list[Move] | None = None,
    ) -> MoveEvaluation | None:
        """
        First candidate with the strictly highest score.

        Returns None when there is nothing to evaluate.
        """
        best: MoveEvaluation | None = None
        for evaluation in self.evaluate_moves(state, moves):
            if best is None or evaluation.score > best.score:
                best = evaluation

        if best is not None:
            logger.debug(
                "Best move %s: gained=%d penalty=%d score=%d",
                best.move, best.gained, best.penalty, best.score,
            )
        return best
