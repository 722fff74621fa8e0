"""
Game Session - One engine, two seats, one outcome recorder.

A seat is either a BotPolicy or None for a human. The session drives
bot turns, turns "no move" into a forfeit, and reports every finished
game to the recorder exactly once.

Lifecycle:
1. Session created → engine holds a fresh board
2. Humans call human_move, bots are driven by play_bot_turn / play_out
3. Game ends (win, draw or forfeit) → outcome recorded
4. new_game() starts the next game (hard reset, or soft to keep the layout)
"""

from __future__ import annotations
from typing import TYPE_CHECKING
import logging

from ..engine_core.action import ErrorKind, StepResult
from ..engine_core.engine import GameEngine
from ..engine_core.state import GameState, Player

if TYPE_CHECKING:
    from ..bots.policy import BotPolicy
    from ..engine_core.action import FactorSlot
    from .stats import OutcomeRecorder

logger = logging.getLogger(__name__)


class GameSession:
    """
    Drives a game between any mix of humans and bots.

    Usage:
        session = GameSession(engine, {Player.P1: None, Player.P2: bot})
        session.human_move(FactorSlot.A, 3)
        session.play_bot_turn()
    """

    def __init__(
        self,
        engine: GameEngine,
        seats: dict[Player, BotPolicy | None],
        recorder: OutcomeRecorder | None = None,
    ):
        self.engine = engine
        self.seats = {player: seats.get(player) for player in Player}
        self.recorder = recorder
        self._recorded = False

    @property
    def state(self) -> GameState:
        return self.engine.get_state()

    def policy_for(self, player: Player) -> BotPolicy | None:
        return self.seats[player]

    def is_bot_turn(self) -> bool:
        state = self.engine.get_state()
        return not state.is_over and self.seats[state.active_player] is not None

    def human_move(self, slot: FactorSlot | int, value: int) -> StepResult:
        """Apply a move typed in by the human on the active seat."""
        return self._after_step(self.engine.step(slot, value))

    def play_bot_turn(self) -> StepResult:
        """
        Let the active seat's bot move.

        A bot with no legal move, or one whose move the engine rejects,
        forfeits the game.
        """
        state = self.engine.get_state()
        if state.is_over:
            return StepResult.failure(ErrorKind.GAME_ALREADY_OVER, "Game is over - no bot turn to play")

        policy = self.seats[state.active_player]
        if policy is None:
            raise ValueError(f"{state.active_player.value} is a human seat")

        decision = policy.select_action(state)
        if decision is None:
            logger.info("%s (%s) has no move", state.active_player.value, policy.get_name())
            return self._after_step(self.engine.resign("no legal move"))

        result = self.engine.step(decision.move.slot, decision.move.value)
        if not result.success:
            logger.warning(
                "%s proposed a rejected move %s: %s",
                policy.get_name(), decision.move, result.error,
            )
            return self._after_step(self.engine.resign("rejected move"))

        logger.debug("%s: %s", policy.get_name(), decision.explanation)
        return self._after_step(result)

    def play_out(self, max_steps: int = 100) -> GameState:
        """
        Run bot turns until the game ends or max_steps moves were made.

        Returns the final state; it is still in progress if the ceiling
        was hit or a human seat is to move.
        """
        steps = 0
        while self.is_bot_turn() and steps < max_steps:
            self.play_bot_turn()
            steps += 1
        return self.engine.get_state()

    def new_game(self, hard: bool = True) -> GameState:
        self._recorded = False
        return self.engine.reset() if hard else self.engine.soft_reset()

    def set_win_target(self, win_target: int, soft: bool = True) -> GameState:
        self._recorded = False
        return self.engine.set_win_target(win_target, soft=soft)

    def _after_step(self, result: StepResult) -> StepResult:
        state = self.engine.get_state()
        if state.is_over and not self._recorded:
            self._recorded = True
            logger.info("Game over after %d turns: %s", state.turn_count, state.winner.value)
            if self.recorder is not None:
                self.recorder.record_outcome(state.winner)
        return result
