"""
Move Generator - Enumerates legal slider relocations.

The move generator is used by:
1. Bots to enumerate possible moves
2. UI to grey out forbidden numbers
3. Search, at every node

A move is legal when it changes the slot's value and the product it
forms with the unmoved slot names a cell nobody owns yet.
"""

from __future__ import annotations

from .action import FactorSlot, LegalMove
from .board import Board, FACTOR_RANGE
from .state import Factors


def legal_moves(board: Board, factors: Factors) -> list[LegalMove]:
    """
    All capturing moves from the current factors, slot A first.

    Needs both factors set (turn 2 onward). An empty list means the
    mover is stuck, which the caller scores as a loss.
    """
    if not factors.is_complete:
        return []

    moves = []
    for slot in (FactorSlot.A, FactorSlot.B):
        current = factors.get(slot)
        fixed = factors.other(slot)
        for value in FACTOR_RANGE:
            if value == current:
                continue
            product = value * fixed
            index = board.index_of(product)
            if index is None or board.owners[index] is not None:
                continue
            moves.append(LegalMove(slot=slot, value=value, product=product, index=index))
    return moves


def placement_moves(board: Board, factors: Factors, turn_count: int) -> list[LegalMove]:
    """
    Moves for the two placement turns.

    Turn 0 places factor A anywhere and captures nothing (index -1).
    Turn 1 places factor B on any value whose product is still free.
    """
    if turn_count == 0:
        return [LegalMove(slot=FactorSlot.A, value=v) for v in FACTOR_RANGE]

    if turn_count == 1:
        moves = []
        for value in FACTOR_RANGE:
            if factors.a is None:
                break
            product = factors.a * value
            if board.is_occupied(product):
                continue
            moves.append(
                LegalMove(
                    slot=FactorSlot.B,
                    value=value,
                    product=product,
                    index=board.index_of(product),
                )
            )
        return moves

    return []


def moves_for_turn(board: Board, factors: Factors, turn_count: int) -> list[LegalMove]:
    """Dispatch between placement and capturing moves."""
    if turn_count < 2:
        return placement_moves(board, factors, turn_count)
    return legal_moves(board, factors)


def is_legal(board: Board, factors: Factors, turn_count: int, slot: FactorSlot, value: int) -> bool:
    """Check if a specific move is legal."""
    return any(
        m.slot == slot and m.value == value
        for m in moves_for_turn(board, factors, turn_count)
    )
