"""
Game Engine - Stateful wrapper that owns the live GameState.

Usage:
    engine = GameEngine(win_target=4, seed=7)
    result = engine.step(FactorSlot.A, 3)
    if not result.success:
        reprompt(result.error_kind)
    state = engine.get_state()  # snapshot for renderers and bots

The engine only reacts to explicit step() calls. A player with no
legal move is detected by the decision engine, and the caller then
calls resign() on that player's behalf.
"""

from __future__ import annotations
from collections.abc import Mapping
import logging
import random

from .action import ErrorKind, FactorSlot, Move, StepResult
from .board import Board
from .reducer import apply_move
from .state import GameState, Outcome, validate_win_target

logger = logging.getLogger(__name__)


class GameEngine:
    """Turn-based state machine for one game at a time."""

    def __init__(
        self,
        win_target: int = 3,
        seed: int | None = None,
        rng: random.Random | None = None,
        board: Board | None = None,
    ):
        self.rng = rng or random.Random(seed)
        self._win_target = validate_win_target(win_target)
        self._state = GameState.new_game(board or Board.generate(self.rng), self._win_target)

    @property
    def win_target(self) -> int:
        return self._win_target

    @property
    def board(self) -> Board:
        return self._state.board

    @property
    def value_index(self) -> Mapping[int, int]:
        return self._state.board.value_index

    def get_state(self) -> GameState:
        """Read-only snapshot of the current state."""
        return self._state.snapshot()

    def reset(self) -> GameState:
        """Hard reset: new random layout, no owners, turn 0."""
        self._state = GameState.new_game(Board.generate(self.rng), self._win_target)
        logger.debug("Hard reset (win target %d)", self._win_target)
        return self.get_state()

    def soft_reset(self) -> GameState:
        """Keep the layout, clear ownership and restart from turn 0."""
        self._state = GameState.new_game(self._state.board.cleared(), self._win_target)
        logger.debug("Soft reset (win target %d)", self._win_target)
        return self.get_state()

    def set_win_target(self, win_target: int, soft: bool = True) -> GameState:
        """
        Change the run length needed to win.

        The current game is restarted so a game never mixes rules.
        """
        self._win_target = validate_win_target(win_target)
        return self.soft_reset() if soft else self.reset()

    def step(self, slot: FactorSlot | int, value: int) -> StepResult:
        """Apply a move for the active player."""
        if slot in (FactorSlot.A, FactorSlot.B):
            slot = FactorSlot(slot)
        result = apply_move(self._state, Move(slot=slot, value=value))
        if result.success:
            self._state = result.new_state
        return result

    def resign(self, reason: str = "resigned") -> StepResult:
        """The active player forfeits; the opponent wins."""
        if self._state.is_over:
            return StepResult.failure(ErrorKind.GAME_ALREADY_OVER, "Game is over - nothing to resign")

        loser = self._state.active_player
        winner = Outcome.for_player(loser.opponent)
        self._state = self._state._copy_with(winner=winner)
        logger.warning("%s forfeits (%s)", loser.value, reason)
        return StepResult.success_with_state(self._state)
