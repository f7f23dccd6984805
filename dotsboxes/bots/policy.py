"""
Bot Policy - Interface for bot decision-making.

A BotPolicy takes a game state and the legal moves and returns a
decision. Implementations range from trivial baselines to the
greedy evaluator used by the computer opponent.
"""

from __future__ import annotations
import logging
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ..engine_core.move_generator import legal_moves as generate_legal_moves
from .evaluator import GreedyEvaluator, EvaluationWeights

if TYPE_CHECKING:
    from ..engine_core.state import GameState
    from ..engine_core.move import Move

logger = logging.getLogger(__name__)


@dataclass
class BotDecision:
    """
    A decision made by a bot.

    Contains:
    - The move to play
    - Explanation (for UI/debugging)
    - Evaluation details (for debugging)
    """
    move: Move
    explanation: str = ""
    confidence: float = 1.0

    evaluated_moves: int = 0
    best_score: float = 0.0
    evaluation_details: dict[str, Any] = field(default_factory=dict)


class BotPolicy(ABC):
    """
    Abstract base class for bot policies.

    A policy defines how a bot selects moves. Deeper search policies
    plug in here without changing callers.
    """

    @abstractmethod
    def select_move(
        self,
        state: GameState,
        legal_moves: list[Move],
    ) -> BotDecision:
        """
        Select a move from the legal moves.

        Args:
            state: Current game state
            legal_moves: Legal moves in generator order

        Returns:
            BotDecision with the selected move
        """
        pass

    def get_name(self) -> str:
        """Get the bot's name/identifier."""
        return self.__class__.__name__


class RandomPolicy(BotPolicy):
    """
    Random policy - selects moves uniformly at random.

    Used for:
    - Testing
    - Baseline comparison
    """

    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)

    def select_move(
        self,
        state: GameState,
        legal_moves: list[Move],
    ) -> BotDecision:
        if not legal_moves:
            raise ValueError("No legal moves available")

        move = self.rng.choice(legal_moves)
        return BotDecision(
            move=move,
            explanation="Selected randomly",
            confidence=1.0 / len(legal_moves),
            evaluated_moves=len(legal_moves),
        )


class FirstLegalPolicy(BotPolicy):
    """
    First-legal policy - always selects the first legal move.

    Used for:
    - Deterministic testing
    - Baseline comparison
    """

    def select_move(
        self,
        state: GameState,
        legal_moves: list[Move],
    ) -> BotDecision:
        if not legal_moves:
            raise ValueError("No legal moves available")

        return BotDecision(
            move=legal_moves[0],
            explanation="Selected first legal move",
            evaluated_moves=1,
        )


class GreedyPolicy(BotPolicy):
    """
    Greedy policy - the computer opponent.

    Takes the first move with the best one-ply score from
    GreedyEvaluator. Deterministic for a given state.
    """

    def __init__(self, weights: EvaluationWeights | None = None):
        self.evaluator = GreedyEvaluator(weights)

    def select_move(
        self,
        state: GameState,
        legal_moves: list[Move],
    ) -> BotDecision:
        if not legal_moves:
            raise ValueError("No legal moves available")

        best = self.evaluator.best(state, legal_moves)
        if best.gained:
            explanation = f"Captures {best.gained} box(es)"
        elif best.penalty:
            explanation = f"Concedes the fewest follow-up boxes ({best.opportunities})"
        else:
            explanation = "Safe move"

        return BotDecision(
            move=best.move,
            explanation=explanation,
            evaluated_moves=len(legal_moves),
            best_score=best.score,
            evaluation_details={
                "gained": best.gained,
                "opportunities": best.opportunities,
                "penalty": best.penalty,
            },
        )


POLICIES = {
    "greedy": GreedyPolicy,
    "first": FirstLegalPolicy,
    "random": RandomPolicy,
}


def select_move(state: GameState, policy: BotPolicy | None = None) -> Move | None:
    """
    Pick the computer's move.

    Returns None only when there is no legal move (the game is over).
    Uses GreedyPolicy unless another policy is given.
    """
    moves = generate_legal_moves(state)
    if not moves:
        return None

    policy = policy or GreedyPolicy()
    decision = policy.select_move(state, moves)
    logger.debug("%s selected %s: %s", policy.get_name(), decision.move, decision.explanation)
    return decision.move
