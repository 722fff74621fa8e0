"""
Search tiers - Fixed-depth minimax with alpha-beta pruning.

The searching player maximizes, the opponent minimizes. Every child is
explored on a copy-on-write board and a fresh Factors, so sibling
branches never see each other's captures and the live game is never
touched.

Terminal scoring, with ply counted from the root:
- mover has no legal move: mover loses (LOSS + ply / WIN - ply)
- a move that wins on the spot: WIN - ply for the searcher,
  LOSS + ply for the opponent, so faster wins and slower losses rank higher
- board full after a non-winning capture: DRAW
- last ply of the search: a reply that wins on the spot is scored as
  that win, one ply deeper
- depth exhausted: the static evaluator's score for the searcher
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Protocol
import logging
import math

from ..engine_core.action_generator import legal_moves
from ..engine_core.board import POSITIONAL_WEIGHTS
from .evaluator import HeuristicEvaluator
from .policy import BotPolicy, BotDecision
from .tactics import has_winning_move, play, wins_immediately

if TYPE_CHECKING:
    from ..engine_core.action import LegalMove
    from ..engine_core.board import Board
    from ..engine_core.state import Factors, Player

logger = logging.getLogger(__name__)


WIN = 100000
LOSS = -100000
DRAW = 0

DEFAULT_DEPTH = 4


class LeafEvaluator(Protocol):
    """Anything that can score a cutoff position for the searching player."""

    def score_position(
        self,
        board: Board,
        factors: Factors,
        turn_count: int,
        win_target: int,
        player: Player,
        to_move: Player,
    ) -> float:
        ...


def order_moves(moves: list[LegalMove]) -> list[LegalMove]:
    """Central cells first; stable, so ties keep generator order."""
    return sorted(moves, key=lambda m: POSITIONAL_WEIGHTS[m.index], reverse=True)


class MinimaxPolicy(BotPolicy):
    """
    Alpha-beta search to a fixed ply depth.

    The leaf evaluator is the only difference between the heuristic and
    neural tiers. With prune=False the same tree is searched as plain
    minimax, which is useful for checking that pruning never changes
    the root score.
    """

    def __init__(
        self,
        depth: int = DEFAULT_DEPTH,
        evaluator: LeafEvaluator | None = None,
        prune: bool = True,
        **kwargs,
    ):
        super().__init__(**kwargs)
        if depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {depth}")
        self.depth = depth
        self.evaluator = evaluator or HeuristicEvaluator()
        self.prune = prune
        self.nodes_visited = 0

    def search_root(
        self,
        board: Board,
        factors: Factors,
        turn_count: int,
        player: Player,
        win_target: int,
        moves: list[LegalMove] | None = None,
    ) -> tuple[LegalMove | None, float, dict[str, float]]:
        """
        Search every root move.

        Returns (best move, its score, per-move scores). With pruning on,
        scores of moves that were cut off are bounds rather than exact
        values; the best score is always exact.
        """
        self.nodes_visited = 1
        moves = legal_moves(board, factors) if moves is None else moves
        if not moves:
            return None, LOSS, {}

        alpha, beta = -math.inf, math.inf
        best_move: LegalMove | None = None
        best_score = -math.inf
        scores: dict[str, float] = {}

        for move in order_moves(moves):
            score = self._score_move(
                board, factors, move, player, player,
                self.depth, alpha, beta, 0, turn_count, win_target,
            )
            scores[str(move)] = score
            if score > best_score:
                best_move, best_score = move, score
            alpha = max(alpha, best_score)

        return best_move, best_score, scores

    def _score_move(
        self,
        board: Board,
        factors: Factors,
        move: LegalMove,
        mover: Player,
        me: Player,
        depth: int,
        alpha: float,
        beta: float,
        ply: int,
        turn_count: int,
        win_target: int,
    ) -> float:
        if wins_immediately(board, move, mover, win_target):
            return WIN - ply if mover is me else LOSS + ply

        child_board, child_factors = play(board, factors, move, mover)
        if child_board.is_full:
            return DRAW
        if depth <= 1:
            # A reply that wins on the spot is a terminal, not a leaf
            replier = mover.opponent
            if has_winning_move(child_board, child_factors, replier, win_target):
                return WIN - (ply + 1) if replier is me else LOSS + (ply + 1)
            return self.evaluator.score_position(
                child_board, child_factors, turn_count + 1, win_target, me, mover.opponent,
            )
        return self._minimax(
            child_board, child_factors, mover.opponent, me,
            depth - 1, alpha, beta, ply + 1, turn_count + 1, win_target,
        )

    def _minimax(
        self,
        board: Board,
        factors: Factors,
        mover: Player,
        me: Player,
        depth: int,
        alpha: float,
        beta: float,
        ply: int,
        turn_count: int,
        win_target: int,
    ) -> float:
        self.nodes_visited += 1

        moves = legal_moves(board, factors)
        if not moves:
            return LOSS + ply if mover is me else WIN - ply

        maximizing = mover is me
        best = -math.inf if maximizing else math.inf

        for move in order_moves(moves):
            score = self._score_move(
                board, factors, move, mover, me,
                depth, alpha, beta, ply, turn_count, win_target,
            )
            if maximizing:
                best = max(best, score)
                alpha = max(alpha, best)
            else:
                best = min(best, score)
                beta = min(beta, best)
            if self.prune and beta <= alpha:
                break

        return best

    def _choose(
        self,
        board: Board,
        factors: Factors,
        turn_count: int,
        player: Player,
        win_target: int,
        moves: list[LegalMove],
    ) -> BotDecision:
        move, score, scores = self.search_root(board, factors, turn_count, player, win_target, moves)
        if move is None:
            return self._random(moves, reason="Search found nothing, selected randomly")

        logger.debug(
            "%s depth %d searched %d nodes, best %s = %.1f",
            self.get_name(), self.depth, self.nodes_visited, move, score,
        )
        return BotDecision(
            move=move,
            explanation=f"Minimax depth {self.depth} ({score:.1f})",
            score=score,
            evaluated_moves=self.nodes_visited,
            evaluation_details=scores,
        )

    def get_name(self) -> str:
        return f"{self.__class__.__name__}[{type(self.evaluator).__name__}]"
