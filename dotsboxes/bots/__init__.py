"""
Bots module - Computer opponent implementations.

Provides:
- BotPolicy: Interface for bot decision-making
- GreedyEvaluator: One-ply move scoring
- GreedyPolicy: The computer opponent
- select_move: Pick the computer's move for a state
"""

from .policy import (
    BotPolicy,
    BotDecision,
    RandomPolicy,
    FirstLegalPolicy,
    GreedyPolicy,
    POLICIES,
    select_move,
)
from .evaluator import GreedyEvaluator, EvaluationWeights, MoveEvaluation

__all__ = [
    "BotPolicy",
    "BotDecision",
    "RandomPolicy",
    "FirstLegalPolicy",
    "GreedyPolicy",
    "POLICIES",
    "select_move",
    "GreedyEvaluator",
    "EvaluationWeights",
    "MoveEvaluation",
]
