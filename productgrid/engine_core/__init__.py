"""
Engine Core - Deterministic game state management for the product grid.

The engine is the runtime that:
1. Generates the board
2. Manages GameState
3. Generates legal moves
4. Applies moves via the reducer
5. Detects wins from the last capture
"""

from .board import Board, Cell, GRID_SIZE, CELL_COUNT, FACTOR_RANGE, PRODUCTS, POSITIONAL_WEIGHTS
from .state import GameState, GameStatus, Factors, Outcome, Player, player_to_move
from .action import ErrorKind, FactorSlot, LegalMove, Move, MoveRecord, StepResult
from .action_generator import legal_moves, moves_for_turn, placement_moves, is_legal
from .win_detector import find_winning_line, is_winning_capture
from .reducer import apply_move, validate_move
from .engine import GameEngine

__all__ = [
    "Board",
    "Cell",
    "GRID_SIZE",
    "CELL_COUNT",
    "FACTOR_RANGE",
    "PRODUCTS",
    "POSITIONAL_WEIGHTS",
    "GameState",
    "GameStatus",
    "Factors",
    "Outcome",
    "Player",
    "player_to_move",
    "ErrorKind",
    "FactorSlot",
    "LegalMove",
    "Move",
    "MoveRecord",
    "StepResult",
    "legal_moves",
    "moves_for_turn",
    "placement_moves",
    "is_legal",
    "find_winning_line",
    "is_winning_capture",
    "apply_move",
    "validate_move",
    "GameEngine",
]
