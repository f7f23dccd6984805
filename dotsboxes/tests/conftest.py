"""
Pytest fixtures for Dots-and-Boxes tests.
"""

import pytest

from ..engine_core.state import GameState, Player
from ..engine_core.move import Move
from ..engine_core.reducer import create_game, apply_move


def play(state: GameState, *moves: Move) -> GameState:
    """Apply moves in order, failing the test on any rejected move."""
    for move in moves:
        state = apply_move(state, move).unwrap()
    return state


@pytest.fixture
def single_box() -> GameState:
    """A 1x1 board: one box, four edges."""
    return create_game(1, 1)


@pytest.fixture
def two_by_two() -> GameState:
    """A fresh 2x2 game, human to move."""
    return create_game(2, 2)


@pytest.fixture
def three_by_three() -> GameState:
    """A fresh 3x3 game, human to move."""
    return create_game(3, 3)


@pytest.fixture
def open_pair() -> GameState:
    """
    1x2 board where both boxes have top and bottom drawn.

    Drawing the shared edge would leave two boxes for the next player.
    Human to move.
    """
    return play(
        create_game(1, 2),
        Move.top(0, 0),
        Move.bottom(0, 0),
        Move.top(0, 1),
        Move.bottom(0, 1),
    )


@pytest.fixture
def capture_available() -> GameState:
    """
    1x2 board where box (0, 0) is one edge from complete.

    Computer to move.
    """
    state = play(
        create_game(1, 2),
        Move.top(0, 0),
        Move.bottom(0, 0),
        Move.left(0, 0),
    )
    assert state.current_player is Player.COMPUTER
    return state
