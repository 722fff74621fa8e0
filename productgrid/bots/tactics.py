"""
Tactics - Pure one-ply simulations shared by the bot tiers.

Nothing here touches a live GameState: every question is answered on
the board and factors passed in, with captures applied to copies.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from ..engine_core.action_generator import legal_moves
from ..engine_core.win_detector import is_winning_capture

if TYPE_CHECKING:
    from ..engine_core.action import LegalMove
    from ..engine_core.board import Board
    from ..engine_core.state import Factors, Player


def wins_immediately(board: Board, move: LegalMove, player: Player, win_target: int) -> bool:
    """Would capturing the move's cell complete a winning run for player?"""
    return is_winning_capture(board.owners, move.index, player, win_target)


def winning_moves(
    board: Board,
    factors: Factors,
    player: Player,
    win_target: int,
) -> list[LegalMove]:
    """Every legal move from factors that wins on the spot for player."""
    return [
        m for m in legal_moves(board, factors)
        if wins_immediately(board, m, player, win_target)
    ]


def has_winning_move(board: Board, factors: Factors, player: Player, win_target: int) -> bool:
    for m in legal_moves(board, factors):
        if wins_immediately(board, m, player, win_target):
            return True
    return False


def play(board: Board, factors: Factors, move: LegalMove, player: Player) -> tuple[Board, Factors]:
    """Apply a capturing move to copies of board and factors."""
    return board.with_owner(move.index, player), factors.with_slot(move.slot, move.value)


def opponent_can_win_after(
    board: Board,
    factors: Factors,
    move: LegalMove,
    player: Player,
    win_target: int,
) -> bool:
    """
    After player makes move, does the opponent have an immediate win?

    Checked on the post-move board and factors, so a move that fills
    the opponent's only winning cell counts as safe.
    """
    next_board, next_factors = play(board, factors, move, player)
    return has_winning_move(next_board, next_factors, player.opponent, win_target)
