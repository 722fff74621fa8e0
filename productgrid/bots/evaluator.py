"""
Heuristic Evaluator - Scores board positions for the search tiers.

The evaluator assigns a numeric score to a position based on:
- Line potential (run length and open ends, per owned cell and direction)
- Threat features (an immediate winning reply dominates everything)
- Position features (static central-cell bonus)

Scores are from one player's perspective: positive is good for that
player. Opponent lines are weighted more heavily than own lines so the
bot leans toward defense.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..engine_core.board import POSITIONAL_WEIGHTS
from ..engine_core.win_detector import DIRECTIONS, open_ends, run_length
from .tactics import has_winning_move

if TYPE_CHECKING:
    from ..engine_core.board import Board
    from ..engine_core.state import Factors, Player


@dataclass
class EvaluationWeights:
    """
    Weights for the heuristic evaluator.

    Higher values = more importance.
    """
    # Line-related, per owned cell and direction
    complete: float = 5000.0  # Run already at or past the target
    one_short_open_two: float = 500.0
    one_short_open_one: float = 100.0
    two_short: float = 20.0
    nominal: float = 5.0

    # Opponent-related
    defense_weight: float = 1.5  # Multiply opponent line scores by this

    # Position-related
    positional: float = 2.0  # Per point of positional weight

    # Threat-related
    veto: float = -50000.0  # Player to move can win right away


class HeuristicEvaluator:
    """
    Evaluates positions using weighted line heuristics.

    Used at the depth cutoff of the minimax tier, in place of searching
    further.
    """

    def __init__(self, weights: EvaluationWeights | None = None):
        self.weights = weights or EvaluationWeights()

    def evaluate(
        self,
        board: Board,
        factors: Factors,
        player: Player,
        win_target: int,
        to_move: Player | None = None,
    ) -> float:
        """
        Evaluate a position from player's perspective.

        to_move is whoever acts next (default: the opponent, i.e. the
        position right after player moved). If that side has an
        immediate win available, the veto score decides the position.
        """
        to_move = to_move or player.opponent
        if has_winning_move(board, factors, to_move, win_target):
            return self.weights.veto if to_move is not player else -self.weights.veto

        total = 0.0
        for index, owner in enumerate(board.owners):
            if owner is None:
                continue
            cell_score = self._score_cell(board, index, owner, win_target)
            cell_score += POSITIONAL_WEIGHTS[index] * self.weights.positional
            if owner is player:
                total += cell_score
            else:
                total -= cell_score * self.weights.defense_weight

        bound = abs(self.weights.veto)
        return max(-bound, min(bound, total))

    def score_position(
        self,
        board: Board,
        factors: Factors,
        turn_count: int,
        win_target: int,
        player: Player,
        to_move: Player,
    ) -> float:
        """Search leaf hook; the heuristic has no use for turn_count."""
        return self.evaluate(board, factors, player, win_target, to_move=to_move)

    def _score_cell(self, board: Board, index: int, owner: Player, win_target: int) -> float:
        """Line potential of one owned cell over all four directions."""
        w = self.weights
        score = 0.0
        for direction in DIRECTIONS:
            length = run_length(board.owners, index, owner, direction)
            if length >= win_target:
                score += w.complete
            elif length == win_target - 1:
                ends = open_ends(board.owners, index, owner, direction)
                if ends == 2:
                    score += w.one_short_open_two
                elif ends == 1:
                    score += w.one_short_open_one
                else:
                    score += w.nominal
            elif length == win_target - 2:
                score += w.two_short
            else:
                score += w.nominal
        return score
