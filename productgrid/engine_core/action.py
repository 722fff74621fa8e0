"""
Action System - Moves, history records and step results.

A move changes one factor slider to a new value. The product of the
sliders selects the cell that is contested. All state changes flow
through moves; failures come back as StepResult values, never as
exceptions.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any


class FactorSlot(IntEnum):
    """Which slider a move changes."""
    A = 0
    B = 1

    @property
    def other(self) -> FactorSlot:
        return FactorSlot.B if self is FactorSlot.A else FactorSlot.A


class ErrorKind(Enum):
    """Why a step was rejected."""
    INVALID_VALUE = "invalid_value"
    NO_OP_MOVE = "no_op_move"
    TARGET_OCCUPIED = "target_occupied"
    GAME_ALREADY_OVER = "game_already_over"
    WRONG_SLOT = "wrong_slot"


@dataclass(frozen=True)
class Move:
    """A slider relocation: set `slot` to `value`."""
    slot: FactorSlot
    value: int

    def __str__(self) -> str:
        return f"{self.slot.name}->{self.value}"


@dataclass(frozen=True)
class LegalMove(Move):
    """A move resolved against the board: the product it forms and its cell."""
    product: int = 0
    index: int = -1

    def as_move(self) -> Move:
        return Move(slot=self.slot, value=self.value)


@dataclass(frozen=True)
class MoveRecord:
    """One entry of the game history."""
    player: Any  # Player
    slot: FactorSlot
    value: int
    product: int | None
    captured_index: int | None


@dataclass
class StepResult:
    """
    Result of applying a move.

    Contains:
    - Whether the move succeeded
    - New state (if succeeded)
    - Error kind and message (if failed)
    - Capture and winning run (for UI updates)
    """
    success: bool
    new_state: Any | None = None  # GameState
    winner: Any | None = None  # Outcome
    error_kind: ErrorKind | None = None
    error: str | None = None
    captured_index: int | None = None
    winning_line: tuple[int, ...] = ()

    @classmethod
    def failure(cls, error_kind: ErrorKind, error: str) -> StepResult:
        """Create a failure result."""
        return cls(success=False, error_kind=error_kind, error=error)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        captured_index: int | None = None,
    ) -> StepResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            winner=state.winner,
            captured_index=captured_index,
            winning_line=state.winning_line,
        )
