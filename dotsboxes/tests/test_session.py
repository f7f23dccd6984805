"""
Tests for sessions and the game loop.

Tests:
- Human moves and computer replies
- Turn enforcement against the computer
- Undo/redo over retained snapshots
- Session lifecycle in the manager
"""

import pytest

from ..session import GameLoop, LoopState, SessionManager, SessionState
from ..engine_core.state import Outcome, Player
from ..engine_core.move import Move
from ..engine_core.errors import InvalidDimensions
from ..bots import FirstLegalPolicy, GreedyPolicy


@pytest.fixture
def manager() -> SessionManager:
    return SessionManager()


@pytest.fixture
def single_box_loop(manager) -> GameLoop:
    """Human vs greedy computer on a 1x1 board."""
    session = manager.create_session(rows=1, cols=1)
    return GameLoop(session)


class TestGameLoop:
    """Tests for turn driving."""

    def test_initial_state(self, single_box_loop):
        assert single_box_loop.state == LoopState.WAITING_HUMAN

    def test_computer_replies(self, single_box_loop):
        result = single_box_loop.play_turn(Move.top(0, 0))
        assert result.success
        assert [d.move for d in result.computer_moves] == [Move.right(0, 0)]
        assert result.loop_state == LoopState.WAITING_HUMAN
        assert result.outcome is None
        assert single_box_loop.session.game_state.grid.drawn_count == 2

    def test_computer_finishes_game(self, single_box_loop):
        single_box_loop.play_turn(Move.top(0, 0))
        result = single_box_loop.play_turn(Move.bottom(0, 0))
        assert [d.move for d in result.computer_moves] == [Move.left(0, 0)]
        assert result.loop_state == LoopState.GAME_OVER
        assert result.outcome is Outcome.COMPUTER_WIN
        assert single_box_loop.session.state == SessionState.GAME_OVER

    def test_illegal_move_reported(self, single_box_loop):
        single_box_loop.play_turn(Move.top(0, 0))
        before = single_box_loop.session.game_state
        result = single_box_loop.play_turn(Move.top(0, 0))
        assert not result.success
        assert result.move_result.error_code == "ILLEGAL_MOVE"
        assert result.errors
        assert single_box_loop.session.game_state is before

    def test_not_your_turn(self, manager):
        session = manager.create_session(rows=2, cols=2, first_player=Player.COMPUTER)
        loop = GameLoop(session)
        assert loop.state == LoopState.COMPUTER_TURN

        result = loop.submit_move(Move.top(0, 0))
        assert not result.success
        assert result.error_code == "NOT_YOUR_TURN"

        reply = loop.run_computer_turn()
        assert [d.move for d in reply.computer_moves] == [Move.top(0, 0)]
        assert loop.state == LoopState.WAITING_HUMAN

    def test_computer_keeps_turn_after_capture(self, manager, capture_available):
        """The computer moves again after each capture."""
        session = manager.create_session(rows=1, cols=2, policy=GreedyPolicy())
        session.load(capture_available)
        loop = GameLoop(session)
        assert loop.state == LoopState.COMPUTER_TURN

        result = loop.run_computer_turn()
        assert [d.move for d in result.computer_moves] == [
            Move.right(0, 0),
            Move.top(0, 1),
        ]
        assert session.game_state.scores == (0, 1)
        assert loop.state == LoopState.WAITING_HUMAN
        assert len(session.history) == 2

    def test_two_human_players(self, manager):
        session = manager.create_session(rows=1, cols=1, vs_computer=False)
        loop = GameLoop(session)
        assert loop.submit_move(Move.top(0, 0)).success
        assert session.game_state.current_player is Player.COMPUTER
        assert loop.state == LoopState.WAITING_HUMAN
        assert loop.submit_move(Move.right(0, 0)).success
        assert loop.run_computer_turn().computer_moves == []


class TestUndoRedo:
    """Tests for history navigation."""

    def test_undo_turn_returns_to_human(self, single_box_loop):
        session = single_box_loop.session
        initial = session.game_state
        single_box_loop.play_turn(Move.top(0, 0))

        assert single_box_loop.undo_turn() == 2
        assert session.game_state == initial
        assert not session.can_undo
        assert session.can_redo

    def test_redo(self, single_box_loop):
        session = single_box_loop.session
        single_box_loop.play_turn(Move.top(0, 0))
        after_reply = session.game_state
        single_box_loop.undo_turn()

        assert session.redo(2) == 2
        assert session.game_state == after_reply
        assert not session.can_redo

    def test_new_move_clears_redo(self, single_box_loop):
        session = single_box_loop.session
        single_box_loop.play_turn(Move.top(0, 0))
        single_box_loop.undo_turn()
        single_box_loop.submit_move(Move.left(0, 0))
        assert not session.can_redo

    def test_undo_nothing(self, single_box_loop):
        assert single_box_loop.session.undo() == 0
        assert single_box_loop.undo_turn() == 0

    def test_undo_from_game_over(self, single_box_loop):
        session = single_box_loop.session
        single_box_loop.play_turn(Move.top(0, 0))
        single_box_loop.play_turn(Move.bottom(0, 0))
        assert session.state == SessionState.GAME_OVER
        session.undo()
        assert session.state == SessionState.ACTIVE
        assert not session.game_state.is_over


class TestSessionManager:
    """Tests for the session lifecycle."""

    def test_create_and_get(self, manager):
        session = manager.create_session(rows=2, cols=3)
        assert manager.get_session(session.session_id) is session
        assert session.game_state.rows == 2
        assert session.game_state.cols == 3
        assert session.is_active()

    def test_policy_by_name(self, manager):
        session = manager.create_session(policy="first")
        assert isinstance(session.policy, FirstLegalPolicy)

    def test_unknown_policy(self, manager):
        with pytest.raises(KeyError):
            manager.create_session(policy="minimax")

    def test_invalid_dimensions(self, manager):
        with pytest.raises(InvalidDimensions):
            manager.create_session(rows=0, cols=3)

    def test_end_session(self, manager):
        session = manager.create_session()
        ended = manager.end_session(session.session_id)
        assert ended is session
        assert ended.state == SessionState.ABANDONED
        assert manager.get_session(session.session_id) is None
        assert manager.end_session(session.session_id) is None

    def test_list_active_sessions(self, manager):
        a = manager.create_session()
        b = manager.create_session()
        assert set(manager.list_active_sessions()) == {a.session_id, b.session_id}

    def test_cleanup_only_finished(self, manager):
        active = manager.create_session(rows=1, cols=1)
        finished = manager.create_session(rows=1, cols=1)
        loop = GameLoop(finished)
        loop.play_turn(Move.top(0, 0))
        loop.play_turn(Move.bottom(0, 0))

        assert manager.cleanup_stale_sessions(max_age_seconds=-1) == 1
        assert manager.get_session(active.session_id) is active
        assert manager.get_session(finished.session_id) is None

    def test_restart(self, manager):
        session = manager.create_session(rows=1, cols=1)
        GameLoop(session).play_turn(Move.top(0, 0))
        session.restart(2, 3)
        assert session.game_state.grid.drawn_count == 0
        assert (session.game_state.rows, session.game_state.cols) == (2, 3)
        assert not session.can_undo

    def test_restart_keeps_first_player(self, manager):
        session = manager.create_session(rows=2, cols=2, first_player=Player.COMPUTER)
        GameLoop(session).run_computer_turn()
        session.restart(2, 2)
        assert session.game_state.current_player is Player.COMPUTER
        assert GameLoop(session).state == LoopState.COMPUTER_TURN

    def test_restart_with_new_first_player(self, manager):
        session = manager.create_session(rows=2, cols=2, first_player=Player.COMPUTER)
        session.restart(2, 2, first_player=Player.HUMAN)
        assert session.game_state.current_player is Player.HUMAN
        assert session.first_player is Player.HUMAN
