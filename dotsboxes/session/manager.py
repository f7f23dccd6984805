"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. Caller starts a session -> new GameState for the chosen board
2. During the game:
   - Human moves are submitted through the GameLoop
   - The computer replies through its BotPolicy
   - Every applied move pushes the previous snapshot onto the history
3. Undo/redo walk the retained snapshots
4. Game ends -> session stays readable until ended or cleaned up

Sessions are in-memory only.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
import time
import uuid

from .. import config
from ..engine_core.state import GameState, Player
from ..engine_core.reducer import create_game
from ..bots import BotPolicy, POLICIES

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"  # Game in progress
    GAME_OVER = "game_over"  # Game completed
    ABANDONED = "abandoned"  # Ended before completion


@dataclass
class Session:
    """
    A game session.

    Holds the current snapshot plus the snapshots before it (for
    undo) and the ones undone since the last move (for redo).
    """
    session_id: str
    game_state: GameState
    policy: BotPolicy
    created_at: float = field(default_factory=time.time)

    # False for two players sharing one board
    vs_computer: bool = True

    # Side that moves first, kept for restarts
    first_player: Player = Player.HUMAN

    state: SessionState = SessionState.ACTIVE
    history: list[GameState] = field(default_factory=list)
    future: list[GameState] = field(default_factory=list)

    def is_active(self) -> bool:
        """Check if session is still in progress."""
        return self.state == SessionState.ACTIVE

    @property
    def can_undo(self) -> bool:
        return bool(self.history)

    @property
    def can_redo(self) -> bool:
        return bool(self.future)

    def push(self, new_state: GameState):
        """Make new_state current. Clears the redo stack."""
        self.history.append(self.game_state)
        self.game_state = new_state
        self.future.clear()
        self._sync_state()

    def undo(self, steps: int = 1) -> int:
        """Step back up to `steps` snapshots. Returns how many were undone."""
        undone = 0
        while undone < steps and self.history:
            self.future.append(self.game_state)
            self.game_state = self.history.pop()
            undone += 1
        if undone:
            logger.info("Session %s undid %d move(s)", self.session_id, undone)
        self._sync_state()
        return undone

    def redo(self, steps: int = 1) -> int:
        """Step forward up to `steps` undone snapshots. Returns how many were redone."""
        redone = 0
        while redone < steps and self.future:
            self.history.append(self.game_state)
            self.game_state = self.future.pop()
            redone += 1
        if redone:
            logger.info("Session %s redid %d move(s)", self.session_id, redone)
        self._sync_state()
        return redone

    def restart(self, rows: int, cols: int, first_player: Player | None = None):
        """
        Start a new game in this session, dropping the history.

        The session's first player moves first unless first_player is given,
        in which case it replaces the session's choice.
        """
        if first_player is None:
            first_player = self.first_player
        self.game_state = create_game(rows, cols, first_player)
        self.first_player = first_player
        self.history.clear()
        self.future.clear()
        self.state = SessionState.ACTIVE

    def load(self, game_state: GameState):
        """Replace the current game with a restored snapshot, dropping the history."""
        self.game_state = game_state
        self.history.clear()
        self.future.clear()
        self.state = SessionState.ACTIVE
        self._sync_state()

    def _sync_state(self):
        if self.state == SessionState.ABANDONED:
            return
        if self.game_state.is_over:
            self.state = SessionState.GAME_OVER
        else:
            self.state = SessionState.ACTIVE


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions
    - Track active sessions
    - Clean up finished sessions
    """

    def __init__(self):
        self._sessions: dict[str, Session] = {}

    def create_session(
        self,
        rows: int = config.DOTSBOXES_DEFAULT_ROWS,
        cols: int = config.DOTSBOXES_DEFAULT_COLS,
        first_player: Player = Player.HUMAN,
        policy: str | BotPolicy = "greedy",
        vs_computer: bool = True,
    ) -> Session:
        """
        Create a new game session.

        Args:
            rows: Board rows
            cols: Board columns
            first_player: Side that moves first
            policy: Policy name from POLICIES, or a BotPolicy instance
            vs_computer: False when both sides are human

        Returns:
            New Session ready to play

        Raises InvalidDimensions for a bad board size and KeyError for
        an unknown policy name.
        """
        if isinstance(policy, str):
            policy = POLICIES[policy]()

        session = Session(
            session_id=str(uuid.uuid4()),
            game_state=create_game(rows, cols, first_player),
            policy=policy,
            vs_computer=vs_computer,
            first_player=first_player,
        )
        self._sessions[session.session_id] = session
        logger.info(
            "Session %s started: %dx%d, %s first, policy %s",
            session.session_id, rows, cols, first_player.value, policy.get_name(),
        )
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> Session | None:
        """
        End a session and remove it from memory.

        Returns the removed session, or None if it did not exist.
        """
        session = self._sessions.pop(session_id, None)
        if session:
            if session.game_state.is_over:
                session.state = SessionState.GAME_OVER
            else:
                session.state = SessionState.ABANDONED
            logger.info("Session %s ended (%s)", session_id, reason)
        return session

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        Remove finished sessions older than max_age.

        Returns the number of sessions removed.
        """
        current_time = time.time()
        to_remove = [
            session_id
            for session_id, session in self._sessions.items()
            if current_time - session.created_at > max_age_seconds
            and not session.is_active()
        ]

        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return len(to_remove)
