"""
Reducer - Applies moves to game state.

The reducer is the single point of state transition.
All state changes must go through apply_move().

Design principles:
- Pure function: (state, move) -> StepResult with a new state
- Validates before applying
- Rejections are results with an ErrorKind, never exceptions
"""

from __future__ import annotations
import logging

from .action import ErrorKind, FactorSlot, Move, MoveRecord, StepResult
from .state import GameState, Outcome, is_factor_value
from .win_detector import find_winning_line

logger = logging.getLogger(__name__)


def validate_move(state: GameState, move: Move) -> StepResult | None:
    """
    Validate that a move is legal in the current state.

    Returns a failure result if invalid, None if valid.
    """
    if state.is_over:
        return StepResult.failure(ErrorKind.GAME_ALREADY_OVER, "Game is over - no moves allowed")

    if not is_factor_value(move.value):
        return StepResult.failure(
            ErrorKind.INVALID_VALUE, f"Factor value must be in [1, 9], got {move.value!r}"
        )

    if move.slot not in (FactorSlot.A, FactorSlot.B):
        return StepResult.failure(ErrorKind.INVALID_VALUE, f"Unknown factor slot {move.slot!r}")

    slot = FactorSlot(move.slot)
    if state.factors.get(slot) == move.value:
        return StepResult.failure(ErrorKind.NO_OP_MOVE, "Must move to a new number")

    if state.turn_count == 0 and slot is not FactorSlot.A:
        return StepResult.failure(ErrorKind.WRONG_SLOT, "First move must place factor A")
    if state.turn_count == 1 and slot is not FactorSlot.B:
        return StepResult.failure(ErrorKind.WRONG_SLOT, "Second move must place factor B")

    if state.turn_count >= 1:
        product = state.factors.with_slot(slot, move.value).product
        if product is None or state.board.is_occupied(product):
            return StepResult.failure(
                ErrorKind.TARGET_OCCUPIED, f"Product {product} is not available"
            )

    return None


def apply_move(state: GameState, move: Move) -> StepResult:
    """
    Apply a move to the game state.

    Returns StepResult with the new state or the rejection reason.
    """
    rejection = validate_move(state, move)
    if rejection:
        logger.debug("Rejected slot %r value %r at turn %d: %s", move.slot, move.value, state.turn_count, rejection.error)
        return rejection

    slot = FactorSlot(move.slot)
    player = state.active_player
    factors = state.factors.with_slot(slot, move.value)
    product = factors.product

    board = state.board
    captured = None
    winner = None
    line: tuple[int, ...] = ()

    if state.turn_count >= 1:
        captured = board.index_of(product)
        board = board.with_owner(captured, player)
        found = find_winning_line(board.owners, captured, player, state.win_target)
        if found:
            winner = Outcome.for_player(player)
            line = tuple(found)
        elif board.is_full:
            winner = Outcome.DRAW

    record = MoveRecord(
        player=player,
        slot=slot,
        value=move.value,
        product=product,
        captured_index=captured,
    )

    new_state = state._copy_with(
        board=board,
        factors=factors,
        turn_count=state.turn_count if winner else state.turn_count + 1,
        active_player=player if winner else player.opponent,
        winner=winner,
        winning_line=line,
        history=state.history + (record,),
    )

    logger.debug(
        "%s moved %s to %d (product %s, captured %s)",
        player.value, slot.name, move.value, product, captured,
    )
    if winner:
        logger.info("Game over at turn %d: %s", new_state.turn_count, winner.value)

    return StepResult.success_with_state(new_state, captured_index=captured)
