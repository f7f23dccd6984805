"""
Move System - Moves and move results.

A Move names one side of one box. It carries no validity
information; legality is decided by the reducer against a GameState.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .state import Direction, Edge
from .errors import MoveError

if TYPE_CHECKING:
    from .state import GameState


@dataclass(frozen=True)
class Move:
    """Draw the `direction` side of box (row, col)."""
    row: int
    col: int
    direction: Direction

    @property
    def edge(self) -> Edge:
        return Edge.of(self.row, self.col, self.direction)

    @classmethod
    def parse(cls, text: str) -> Move:
        """Parse "row,col,direction", e.g. "0,1,top" or "2,0,l"."""
        parts = [p.strip() for p in text.split(",")]
        if len(parts) != 3:
            raise ValueError(f"Expected 'row,col,direction', got {text!r}")
        row, col, direction = parts
        return cls(int(row), int(col), Direction.parse(direction))

    @classmethod
    def top(cls, row: int, col: int) -> Move:
        return cls(row, col, Direction.TOP)

    @classmethod
    def right(cls, row: int, col: int) -> Move:
        return cls(row, col, Direction.RIGHT)

    @classmethod
    def bottom(cls, row: int, col: int) -> Move:
        return cls(row, col, Direction.BOTTOM)

    @classmethod
    def left(cls, row: int, col: int) -> Move:
        return cls(row, col, Direction.LEFT)

    def __str__(self) -> str:
        direction = getattr(self.direction, "value", self.direction)
        return f"{self.row},{self.col},{direction}"


@dataclass
class MoveResult:
    """
    Result of applying a move.

    Contains:
    - Whether the move succeeded
    - New state (if succeeded)
    - The MoveError (if failed)
    - Boxes captured by the move and readable changes (for UI updates)
    """
    success: bool
    new_state: GameState | None = None
    error: MoveError | None = None
    error_code: str | None = None

    captured: list[tuple[int, int]] = field(default_factory=list)
    changes: list[str] = field(default_factory=list)

    @property
    def gained(self) -> int:
        return len(self.captured)

    @classmethod
    def failure(cls, error: MoveError) -> MoveResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error.error_code)

    @classmethod
    def success_with_state(
        cls,
        state: GameState,
        captured: list[tuple[int, int]] | None = None,
        changes: list[str] | None = None,
    ) -> MoveResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            captured=captured or [],
            changes=changes or [],
        )

    def unwrap(self) -> GameState:
        """Return the new state, or raise the error that rejected the move."""
        if not self.success:
            raise self.error
        return self.new_state
