"""
Greedy tiers - One-ply bots.

GreedyPolicy takes a win, else blocks, else plays randomly.
ScoredGreedyPolicy scores every capturing move on a weighted blend of
winning, blocking, not handing the opponent a win, line building and
central position, then picks a top-scoring move at random.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING
import logging

from ..engine_core.board import POSITIONAL_WEIGHTS
from ..engine_core.win_detector import is_winning_capture, longest_line
from .policy import BotPolicy, BotDecision
from .tactics import opponent_can_win_after, wins_immediately

if TYPE_CHECKING:
    from ..engine_core.action import LegalMove
    from ..engine_core.board import Board
    from ..engine_core.state import Factors, Player

logger = logging.getLogger(__name__)


class GreedyPolicy(BotPolicy):
    """Win if possible, else block the opponent's winning cell, else random."""

    def _choose(
        self,
        board: Board,
        factors: Factors,
        turn_count: int,
        player: Player,
        win_target: int,
        moves: list[LegalMove],
    ) -> BotDecision:
        for move in moves:
            if wins_immediately(board, move, player, win_target):
                return BotDecision(move=move, explanation="Winning move", evaluated_moves=len(moves))

        for move in moves:
            if is_winning_capture(board.owners, move.index, player.opponent, win_target):
                return BotDecision(move=move, explanation="Blocking move", evaluated_moves=len(moves))

        return self._random(moves, reason="No win or block, selected randomly")


@dataclass
class MoveScoreWeights:
    """
    Weights for scoring a single capturing move.

    Higher values = more importance.
    """
    win: float = 100000.0
    block: float = 50000.0
    risk: float = -80000.0  # Opponent can win right after this move
    line: float = 10.0  # Per cell of the longest run through the target
    open_threat: float = 500.0  # Run is exactly one short of the target
    center: float = 10.0  # Per point of positional weight


class ScoredGreedyPolicy(BotPolicy):
    """
    One-ply scoring bot.

    The risk check replays the move on a private copy of the board and
    factors before asking whether the opponent can win, so a move that
    itself fills the opponent's winning cell is not penalised.
    """

    def __init__(self, weights: MoveScoreWeights | None = None, **kwargs):
        super().__init__(**kwargs)
        self.weights = weights or MoveScoreWeights()

    def score_move(
        self,
        board: Board,
        factors: Factors,
        move: LegalMove,
        player: Player,
        win_target: int,
    ) -> float:
        w = self.weights
        score = 0.0

        if wins_immediately(board, move, player, win_target):
            score += w.win
        else:
            if opponent_can_win_after(board, factors, move, player, win_target):
                score += w.risk

        if is_winning_capture(board.owners, move.index, player.opponent, win_target):
            score += w.block

        line = longest_line(board.owners, move.index, player)
        score += line * w.line
        if line == win_target - 1:
            score += w.open_threat

        score += POSITIONAL_WEIGHTS[move.index] * w.center
        return score

    def _choose(
        self,
        board: Board,
        factors: Factors,
        turn_count: int,
        player: Player,
        win_target: int,
        moves: list[LegalMove],
    ) -> BotDecision:
        scored = [
            (move, self.score_move(board, factors, move, player, win_target))
            for move in moves
        ]
        best_score = max(score for _, score in scored)
        best = [move for move, score in scored if score == best_score]
        move = self.rng.choice(best)

        logger.debug("Scored %d moves, %d tied at %.1f", len(moves), len(best), best_score)
        return BotDecision(
            move=move,
            explanation=f"Best scored move ({best_score:.1f}, {len(best)} tied)",
            score=best_score,
            evaluated_moves=len(moves),
            evaluation_details={str(m): s for m, s in scored},
        )
