"""
Game State - The canonical state container the engine operates on.

Design principles:
- Immutable-friendly: transitions build new state via _copy_with
- Snapshot-safe: board and factors are value types, so a snapshot
  handed to a bot can never alias the live game
- Rendering-agnostic: renderers read cells, factors and winner only
"""

from __future__ import annotations
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .board import Board, FACTOR_RANGE


class Player(Enum):
    """The two seats. P1 moves first."""
    P1 = "p1"
    P2 = "p2"

    @property
    def opponent(self) -> Player:
        return Player.P2 if self is Player.P1 else Player.P1


class Outcome(Enum):
    """Value of the winner field once a game has ended."""
    P1 = "p1"
    P2 = "p2"
    DRAW = "draw"

    @classmethod
    def for_player(cls, player: Player) -> Outcome:
        return cls(player.value)

    @property
    def player(self) -> Player | None:
        """The winning player, or None for a draw."""
        if self is Outcome.DRAW:
            return None
        return Player(self.value)


class GameStatus(Enum):
    """High-level game status."""
    IN_PROGRESS = "in_progress"
    WON = "won"
    DRAW = "draw"


def player_to_move(turn_count: int) -> Player:
    """Seats strictly alternate, so the turn count names the mover."""
    return Player.P1 if turn_count % 2 == 0 else Player.P2


MIN_WIN_TARGET = 3
MAX_WIN_TARGET = 6


def validate_win_target(win_target: int) -> int:
    if not isinstance(win_target, int) or not MIN_WIN_TARGET <= win_target <= MAX_WIN_TARGET:
        raise ValueError(
            f"win target must be an integer in [{MIN_WIN_TARGET}, {MAX_WIN_TARGET}], got {win_target!r}"
        )
    return win_target


@dataclass(frozen=True)
class Factors:
    """
    The two factor sliders.

    Either slot may be unset (None) during the placement turns.
    """
    a: int | None = None
    b: int | None = None

    def get(self, slot: int) -> int | None:
        return self.a if slot == 0 else self.b

    def other(self, slot: int) -> int | None:
        """Value of the slot that does not move."""
        return self.b if slot == 0 else self.a

    def with_slot(self, slot: int, value: int) -> Factors:
        """Return new factors with one slot moved."""
        if slot == 0:
            return Factors(a=value, b=self.b)
        return Factors(a=self.a, b=value)

    @property
    def product(self) -> int | None:
        if self.a is None or self.b is None:
            return None
        return self.a * self.b

    @property
    def is_complete(self) -> bool:
        return self.a is not None and self.b is not None

    def as_tuple(self) -> tuple[int | None, int | None]:
        return (self.a, self.b)


def is_factor_value(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value in FACTOR_RANGE


@dataclass
class GameState:
    """
    Complete game state at a point in time.

    turn_count 0 and 1 are the placement turns: P1 sets factor A, then
    P2 sets factor B and captures the first product. From turn 2 on every
    move changes exactly one factor and captures its product.
    """
    board: Board
    factors: Factors = field(default_factory=Factors)
    turn_count: int = 0
    active_player: Player = Player.P1
    winner: Outcome | None = None
    win_target: int = 3

    # Cells forming the winning run, for highlighting
    winning_line: tuple[int, ...] = ()

    # MoveRecord entries, oldest first
    history: tuple[Any, ...] = ()

    @property
    def status(self) -> GameStatus:
        if self.winner is None:
            return GameStatus.IN_PROGRESS
        if self.winner is Outcome.DRAW:
            return GameStatus.DRAW
        return GameStatus.WON

    @property
    def is_over(self) -> bool:
        return self.winner is not None

    @property
    def is_placement_turn(self) -> bool:
        return self.turn_count < 2

    @property
    def value_index(self) -> Mapping[int, int]:
        return self.board.value_index

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return GameState(
            board=kwargs.get("board", self.board),
            factors=kwargs.get("factors", self.factors),
            turn_count=kwargs.get("turn_count", self.turn_count),
            active_player=kwargs.get("active_player", self.active_player),
            winner=kwargs.get("winner", self.winner),
            win_target=kwargs.get("win_target", self.win_target),
            winning_line=kwargs.get("winning_line", self.winning_line),
            history=kwargs.get("history", self.history),
        )

    def snapshot(self) -> GameState:
        """Read-only view for evaluators and renderers."""
        return self._copy_with()

    @classmethod
    def new_game(cls, board: Board, win_target: int = 3) -> GameState:
        return cls(board=board, win_target=validate_win_target(win_target))
