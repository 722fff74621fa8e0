"""
Bot Policy - Interface for bot decision-making.

A BotPolicy reads a board, the factor sliders, the turn count and the
win target, and proposes a move for the player whose turn it is. It
never mutates the state it is given.

Every tier shares the placement handling of turns 0 and 1 and differs
only in how it picks among capturing moves (see _choose).
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any
import random

from ..engine_core.action import LegalMove, Move
from ..engine_core.action_generator import legal_moves, placement_moves
from ..engine_core.state import player_to_move

if TYPE_CHECKING:
    from ..engine_core.board import Board
    from ..engine_core.state import Factors, GameState, Player


@dataclass
class BotDecision:
    """
    A decision made by a bot.

    Contains:
    - The move to make
    - Explanation (for UI/debugging)
    - Score of the chosen move, in the tier's own units
    """
    move: LegalMove
    explanation: str = ""
    score: float = 0.0

    # Evaluation details (for debugging)
    evaluated_moves: int = 0
    evaluation_details: dict[str, Any] = field(default_factory=dict)

    def as_move(self) -> Move:
        return self.move.as_move()


class BotPolicy(ABC):
    """
    Abstract base class for bot policies.

    A policy defines how a bot selects moves. Implementations range
    from uniform random to alpha-beta search.
    """

    def __init__(self, seed: int | None = None, rng: random.Random | None = None):
        self.rng = rng or random.Random(seed)

    def decide(
        self,
        board: Board,
        factors: Factors,
        turn_count: int,
        win_target: int,
    ) -> BotDecision | None:
        """
        Pick a move for the player to act.

        Returns None when that player has no legal move, which the
        caller treats as a forfeit.
        """
        if turn_count < 2:
            return self._place(board, factors, turn_count)

        moves = legal_moves(board, factors)
        if not moves:
            return None

        player = player_to_move(turn_count)
        return self._choose(board, factors, turn_count, player, win_target, moves)

    def propose(
        self,
        board: Board,
        factors: Factors,
        turn_count: int,
        win_target: int,
    ) -> Move | None:
        decision = self.decide(board, factors, turn_count, win_target)
        return decision.as_move() if decision else None

    def select_action(self, state: GameState) -> BotDecision | None:
        """Decide from a state snapshot."""
        return self.decide(state.board, state.factors, state.turn_count, state.win_target)

    @abstractmethod
    def _choose(
        self,
        board: Board,
        factors: Factors,
        turn_count: int,
        player: Player,
        win_target: int,
        moves: list[LegalMove],
    ) -> BotDecision:
        """
        Select one of the (non-empty) capturing moves.

        Args:
            board: Current board
            factors: Current factor sliders
            turn_count: Turns played so far
            player: The player to move
            win_target: Run length needed to win
            moves: Legal capturing moves, slot A first

        Returns:
            BotDecision with the selected move
        """

    def _place(self, board: Board, factors: Factors, turn_count: int) -> BotDecision | None:
        """Placement turns: any A on turn 0, any B with a free product on turn 1."""
        moves = placement_moves(board, factors, turn_count)
        if not moves:
            return None
        move = self.rng.choice(moves)
        return BotDecision(
            move=move,
            explanation=f"Placed factor {move.slot.name} at {move.value}",
            evaluated_moves=len(moves),
        )

    def _random(self, moves: list[LegalMove], reason: str = "Selected randomly") -> BotDecision:
        return BotDecision(
            move=self.rng.choice(moves),
            explanation=reason,
            evaluated_moves=len(moves),
        )

    def get_name(self) -> str:
        """Get the bot's name/identifier."""
        return self.__class__.__name__


class RandomPolicy(BotPolicy):
    """
    Random policy - selects moves uniformly at random.

    Used for:
    - The easiest difficulty
    - Baseline comparison in the arena
    - Fallback for the other tiers
    """

    def _choose(
        self,
        board: Board,
        factors: Factors,
        turn_count: int,
        player: Player,
        win_target: int,
        moves: list[LegalMove],
    ) -> BotDecision:
        return self._random(moves)
