"""
Tests for bot move selection.

Tests:
- Greedy scoring (captures minus follow-up opportunities)
- Tie-breaking by legal move order
- Baseline policies select legal moves
- select_move on finished games
"""

import pytest

from ..bots import (
    BotPolicy,
    EvaluationWeights,
    FirstLegalPolicy,
    GreedyEvaluator,
    GreedyPolicy,
    RandomPolicy,
    POLICIES,
    select_move,
)
from ..engine_core.move import Move
from ..engine_core.move_generator import legal_moves
from ..engine_core.reducer import apply_move, create_game
from .conftest import play


class TestGreedyEvaluator:
    """Tests for per-move scores."""

    def test_capture_scores_ten(self, capture_available):
        evaluation = GreedyEvaluator().evaluate_move(capture_available, Move.right(0, 0))
        assert evaluation.gained == 1
        assert evaluation.opportunities == 0
        assert evaluation.score == 10

    def test_opening_two_boxes_penalized(self, open_pair):
        """Two follow-up captures cost 2 // 2 = 1."""
        evaluation = GreedyEvaluator().evaluate_move(open_pair, Move.right(0, 0))
        assert evaluation.gained == 0
        assert evaluation.opportunities == 2
        assert evaluation.penalty == 1
        assert evaluation.score == -1

    def test_single_opportunity_rounds_down(self, open_pair):
        """One follow-up capture costs 1 // 2 = 0."""
        evaluation = GreedyEvaluator().evaluate_move(open_pair, Move.left(0, 0))
        assert evaluation.opportunities == 1
        assert evaluation.penalty == 0
        assert evaluation.score == 0

    def test_double_capture_scores_twenty(self, two_by_two):
        state = play(
            two_by_two,
            Move.top(0, 0), Move.bottom(0, 0), Move.left(0, 0),
            Move.top(0, 1), Move.right(0, 1), Move.bottom(0, 1),
        )
        evaluation = GreedyEvaluator().evaluate_move(state, Move.right(0, 0))
        assert evaluation.gained == 2
        assert evaluation.opportunities == 0
        assert evaluation.score == 20

    def test_next_state_matches_reducer(self, open_pair):
        evaluation = GreedyEvaluator().evaluate_move(open_pair, Move.right(0, 1))
        assert evaluation.next_state == apply_move(open_pair, Move.right(0, 1)).new_state

    def test_custom_weights(self, open_pair):
        weights = EvaluationWeights(capture_value=1, opportunity_divisor=1)
        evaluation = GreedyEvaluator(weights).evaluate_move(open_pair, Move.right(0, 0))
        assert evaluation.score == -2

    def test_evaluate_moves_in_order(self, open_pair):
        evaluations = GreedyEvaluator().evaluate_moves(open_pair)
        assert [e.move for e in evaluations] == legal_moves(open_pair)
        assert [e.score for e in evaluations] == [-1, 0, 0]

    def test_best_none_without_moves(self, single_box):
        assert GreedyEvaluator().best(single_box, []) is None


class TestSelectMove:
    """Tests for select_move."""

    def test_takes_capture(self, capture_available):
        assert select_move(capture_available) == Move.right(0, 0)

    def test_avoids_opening_two_boxes(self, open_pair):
        """First move with the top score wins the tie."""
        assert select_move(open_pair) == Move.left(0, 0)

    def test_fresh_board_takes_first_move(self, single_box):
        assert select_move(single_box) == Move.top(0, 0)

    def test_finishes_single_box(self, single_box):
        state = play(single_box, Move.top(0, 0), Move.right(0, 0), Move.bottom(0, 0))
        assert select_move(state) == Move.left(0, 0)

    def test_none_when_over(self, single_box):
        state = play(
            single_box,
            Move.top(0, 0), Move.right(0, 0), Move.bottom(0, 0), Move.left(0, 0),
        )
        assert select_move(state) is None

    def test_deterministic(self, three_by_three):
        state = play(three_by_three, Move.top(0, 0), Move.left(1, 1), Move.bottom(2, 2))
        assert select_move(state) == select_move(state)

    def test_always_legal(self):
        """Greedy self-play only ever picks legal moves and finishes the game."""
        state = create_game(3, 3)
        while not state.is_over:
            move = select_move(state)
            assert move in legal_moves(state)
            state = apply_move(state, move).unwrap()
        assert select_move(state) is None

    def test_custom_policy(self, open_pair):
        assert select_move(open_pair, policy=FirstLegalPolicy()) == Move.right(0, 0)


class TestPolicies:
    """Tests for the policy implementations."""

    def test_greedy_decision_details(self, capture_available):
        decision = GreedyPolicy().select_move(capture_available, legal_moves(capture_available))
        assert decision.move == Move.right(0, 0)
        assert decision.best_score == 10
        assert decision.evaluated_moves == 4
        assert decision.evaluation_details["gained"] == 1
        assert "Captures" in decision.explanation

    def test_first_legal(self, open_pair):
        decision = FirstLegalPolicy().select_move(open_pair, legal_moves(open_pair))
        assert decision.move == Move.right(0, 0)

    def test_random_selects_legal(self, three_by_three):
        policy = RandomPolicy(seed=42)
        legal = legal_moves(three_by_three)
        for _ in range(10):
            assert policy.select_move(three_by_three, legal).move in legal

    def test_random_seeded_repeatable(self, three_by_three):
        legal = legal_moves(three_by_three)
        a = RandomPolicy(seed=7).select_move(three_by_three, legal).move
        b = RandomPolicy(seed=7).select_move(three_by_three, legal).move
        assert a == b

    @pytest.mark.parametrize("name", sorted(POLICIES))
    def test_empty_moves_raise(self, name, single_box):
        with pytest.raises(ValueError):
            POLICIES[name]().select_move(single_box, [])

    def test_policy_names(self):
        assert GreedyPolicy().get_name() == "GreedyPolicy"
        assert all(issubclass(cls, BotPolicy) for cls in POLICIES.values())
