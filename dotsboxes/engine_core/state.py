"""
Game State - Grid model and immutable game snapshots.

Design principles:
- Immutable: every mutation returns a new object
- Canonical edges: each physical line is stored once, so two boxes
  sharing an edge can never disagree about it
- Serializable: the api layer round-trips a GameState through pydantic
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Iterator, Mapping

from .. import config
from .errors import GameNotOver, IllegalMove, InvalidDimensions

if TYPE_CHECKING:
    from .move import Move


class Player(Enum):
    """The two sides of a game."""
    HUMAN = "human"
    COMPUTER = "computer"

    @property
    def opponent(self) -> Player:
        return Player.COMPUTER if self is Player.HUMAN else Player.HUMAN


class Outcome(Enum):
    """Final result of a finished game."""
    HUMAN_WIN = "human_win"
    COMPUTER_WIN = "computer_win"
    DRAW = "draw"


class GamePhase(Enum):
    """High-level game phases."""
    IN_PROGRESS = "in_progress"
    GAME_OVER = "game_over"


class Direction(Enum):
    """Side of a box. Declaration order is the enumeration order."""
    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"
    LEFT = "left"

    @classmethod
    def parse(cls, text: str) -> Direction:
        """Parse a direction name or its initial ("t", "r", "b", "l")."""
        value = text.strip().lower()
        for direction in cls:
            if value == direction.value or value == direction.value[0]:
                return direction
        raise ValueError(f"Unknown direction: {text!r}")


class Orientation(Enum):
    HORIZONTAL = "h"
    VERTICAL = "v"


@dataclass(frozen=True)
class Edge:
    """
    Direction-agnostic key for one line of the board.

    Horizontal edge (r, c) runs along the top of box (r, c), so rows
    go from 0 to Rows inclusive. Vertical edge (r, c) runs along the
    left of box (r, c), so cols go from 0 to Cols inclusive.
    """
    orientation: Orientation
    row: int
    col: int

    @classmethod
    def of(cls, row: int, col: int, direction: Direction) -> Edge:
        """Normalize a (box, side) pair to its canonical edge."""
        if direction is Direction.TOP:
            return cls(Orientation.HORIZONTAL, row, col)
        if direction is Direction.BOTTOM:
            return cls(Orientation.HORIZONTAL, row + 1, col)
        if direction is Direction.LEFT:
            return cls(Orientation.VERTICAL, row, col)
        return cls(Orientation.VERTICAL, row, col + 1)

    def on_board(self, rows: int, cols: int) -> bool:
        if self.orientation is Orientation.HORIZONTAL:
            return 0 <= self.row <= rows and 0 <= self.col < cols
        return 0 <= self.row < rows and 0 <= self.col <= cols

    def adjacent_boxes(self, rows: int, cols: int) -> list[tuple[int, int]]:
        """Boxes bounded by this edge, in row-major order (one or two)."""
        if self.orientation is Orientation.HORIZONTAL:
            candidates = [(self.row - 1, self.col), (self.row, self.col)]
        else:
            candidates = [(self.row, self.col - 1), (self.row, self.col)]
        return [
            (r, c) for r, c in candidates
            if 0 <= r < rows and 0 <= c < cols
        ]


@dataclass(frozen=True)
class Box:
    """Read-only view of one grid cell."""
    row: int
    col: int
    top: bool = False
    right: bool = False
    bottom: bool = False
    left: bool = False
    owner: Player | None = None

    @property
    def sides_drawn(self) -> int:
        return sum((self.top, self.right, self.bottom, self.left))

    @property
    def is_complete(self) -> bool:
        return self.sides_drawn == 4


@dataclass(frozen=True)
class Grid:
    """
    Edge and ownership state of a Rows x Cols board.

    `lines` maps every drawn edge to the player who drew it (None when
    set outside of play). `owners` maps captured boxes to their owner.
    Both are stored as read-only mappings.
    """
    rows: int
    cols: int
    lines: Mapping[Edge, Player | None] = field(default_factory=dict)
    owners: Mapping[tuple[int, int], Player] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "lines", MappingProxyType(dict(self.lines)))
        object.__setattr__(self, "owners", MappingProxyType(dict(self.owners)))

    def __hash__(self) -> int:
        return hash((
            self.rows,
            self.cols,
            frozenset(self.lines.items()),
            frozenset(self.owners.items()),
        ))

    @classmethod
    def create(cls, rows: int, cols: int) -> Grid:
        """Create an empty grid. Raises InvalidDimensions."""
        if rows <= 0 or cols <= 0:
            raise InvalidDimensions(rows, cols, "rows and cols must be positive")
        limit = config.DOTSBOXES_MAX_BOARD_SIZE
        if rows > limit or cols > limit:
            raise InvalidDimensions(rows, cols, f"maximum size is {limit}")
        return cls(rows=rows, cols=cols)

    @property
    def total_edges(self) -> int:
        return (self.rows + 1) * self.cols + self.rows * (self.cols + 1)

    @property
    def drawn_count(self) -> int:
        return len(self.lines)

    @property
    def owned_count(self) -> int:
        return len(self.owners)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def has_edge(self, row: int, col: int, direction: Direction) -> bool:
        return Edge.of(row, col, direction) in self.lines

    def drawn_by(self, row: int, col: int, direction: Direction) -> Player | None:
        """Player who drew the given side of box (row, col), if any."""
        return self.lines.get(Edge.of(row, col, direction))

    def set_edge(
        self,
        row: int,
        col: int,
        direction: Direction,
        drawn_by: Player | None = None,
    ) -> Grid:
        """
        Return a new grid with the given side of box (row, col) drawn.

        The neighbour sharing the edge sees it as well. Setting an edge
        that is already drawn returns an equal grid.
        """
        if not self.in_bounds(row, col):
            raise IllegalMove(f"Box ({row}, {col}) is outside a {self.rows}x{self.cols} grid")
        edge = Edge.of(row, col, direction)
        if edge in self.lines:
            return self
        new_lines = self.lines.copy()
        new_lines[edge] = drawn_by
        return replace(self, lines=new_lines)

    def with_owner(self, row: int, col: int, player: Player) -> Grid:
        """Return a new grid with box (row, col) owned by player."""
        new_owners = self.owners.copy()
        new_owners[(row, col)] = player
        return replace(self, owners=new_owners)

    def sides_drawn(self, row: int, col: int) -> int:
        return sum(1 for d in Direction if Edge.of(row, col, d) in self.lines)

    def is_complete(self, row: int, col: int) -> bool:
        return self.sides_drawn(row, col) == 4

    def owner(self, row: int, col: int) -> Player | None:
        return self.owners.get((row, col))

    def box(self, row: int, col: int) -> Box:
        if not self.in_bounds(row, col):
            raise IndexError(f"Box ({row}, {col}) is outside a {self.rows}x{self.cols} grid")
        return Box(
            row=row,
            col=col,
            top=self.has_edge(row, col, Direction.TOP),
            right=self.has_edge(row, col, Direction.RIGHT),
            bottom=self.has_edge(row, col, Direction.BOTTOM),
            left=self.has_edge(row, col, Direction.LEFT),
            owner=self.owner(row, col),
        )

    def boxes(self) -> Iterator[Box]:
        """All boxes in row-major order."""
        for row in range(self.rows):
            for col in range(self.cols):
                yield self.box(row, col)

    def complete_boxes(self) -> list[tuple[int, int]]:
        return [
            (row, col)
            for row in range(self.rows)
            for col in range(self.cols)
            if self.is_complete(row, col)
        ]

    @property
    def is_full(self) -> bool:
        """Every edge drawn, equivalently every box complete."""
        return len(self.lines) == self.total_edges


@dataclass(frozen=True)
class GameState:
    """
    Complete game state at a point in time.

    Never mutated. The reducer produces a new GameState for every
    applied move, so earlier snapshots stay valid for undo and replay.
    """
    grid: Grid
    human_score: int = 0
    computer_score: int = 0
    current_player: Player = Player.HUMAN
    phase: GamePhase = GamePhase.IN_PROGRESS

    # Moves applied since creation (for replay)
    moves: tuple[Move, ...] = ()

    @property
    def rows(self) -> int:
        return self.grid.rows

    @property
    def cols(self) -> int:
        return self.grid.cols

    @property
    def is_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def scores(self) -> tuple[int, int]:
        """(human score, computer score)."""
        return self.human_score, self.computer_score

    def score_of(self, player: Player) -> int:
        if player is Player.HUMAN:
            return self.human_score
        return self.computer_score

    @property
    def result(self) -> Outcome:
        """Outcome of a finished game. Raises GameNotOver otherwise."""
        if not self.is_over:
            raise GameNotOver("The game is still in progress")
        if self.human_score > self.computer_score:
            return Outcome.HUMAN_WIN
        if self.computer_score > self.human_score:
            return Outcome.COMPUTER_WIN
        return Outcome.DRAW

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)


def scores(state: GameState) -> tuple[int, int]:
    """(human score, computer score)."""
    return state.scores


def current_player(state: GameState) -> Player:
    return state.current_player


def is_over(state: GameState) -> bool:
    return state.is_over


def result(state: GameState) -> Outcome:
    """Outcome of a finished game. Raises GameNotOver otherwise."""
    return state.result
