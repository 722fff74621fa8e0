"""
Shared builders for positions and weight artifacts used across tests.
"""

import numpy as np

from ..bots.policy import RandomPolicy
from ..bots.weights import INPUT_SIZE, LAYER_NAMES, LAYER_SIZES
from ..engine_core.board import Board, PRODUCTS
from ..engine_core.engine import GameEngine
from ..engine_core.state import Factors, GameState, Player, player_to_move


def board_with(owned: dict[int, Player]) -> Board:
    """Sorted board with the given cells already captured."""
    board = Board.from_values(PRODUCTS)
    for index, player in owned.items():
        board = board.with_owner(index, player)
    return board


def state_with(
    owned: dict[int, Player],
    factors: tuple[int | None, int | None],
    turn_count: int,
    win_target: int = 3,
) -> GameState:
    """Mid-game state on the sorted board; the mover follows from turn_count."""
    return GameState(
        board=board_with(owned),
        factors=Factors(*factors),
        turn_count=turn_count,
        active_player=player_to_move(turn_count),
        win_target=win_target,
    )


def play_random_game(seed: int, plies: int, win_target: int = 3) -> GameEngine:
    """An engine after up to `plies` random moves (stops early if the game ends)."""
    engine = GameEngine(win_target=win_target, seed=seed)
    policy = RandomPolicy(seed=seed)
    for _ in range(plies):
        state = engine.get_state()
        if state.is_over:
            break
        decision = policy.select_action(state)
        if decision is None:
            engine.resign()
            break
        engine.step(decision.move.slot, decision.move.value)
    return engine


def random_weights(seed: int = 0, scale: float = 0.1) -> dict:
    """Random value network parameters in the nested JSON layout."""
    rng = np.random.default_rng(seed)
    params = {}
    fan_in = INPUT_SIZE
    for name in LAYER_NAMES:
        out = LAYER_SIZES[name]
        params[name] = {
            "weight": (rng.standard_normal((out, fan_in)) * scale).tolist(),
            "bias": (rng.standard_normal(out) * scale).tolist(),
        }
        fan_in = out
    return params
