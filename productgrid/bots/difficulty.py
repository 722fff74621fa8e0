"""
Difficulty - Closed set of bot tiers and the factory that builds them.

Each tier is a BotPolicy; callers pick one by Difficulty and never
branch on the tier themselves.
"""

from __future__ import annotations
from collections.abc import Mapping
from enum import IntEnum
from pathlib import Path
from typing import TYPE_CHECKING
import logging
import random

from .evaluator import HeuristicEvaluator
from .greedy import GreedyPolicy, ScoredGreedyPolicy
from .neural import NeuralEvaluator
from .policy import BotPolicy, RandomPolicy
from .search import DEFAULT_DEPTH, MinimaxPolicy
from .weights import ValueNetWeights

if TYPE_CHECKING:
    from ..engine_core.action import Move
    from ..engine_core.board import Board
    from ..engine_core.state import Factors

logger = logging.getLogger(__name__)


class Difficulty(IntEnum):
    RANDOM = 1
    GREEDY = 2
    SCORED_GREEDY = 3
    MINIMAX = 4
    MINIMAX_NEURAL = 5

    @classmethod
    def parse(cls, value: Difficulty | int | str) -> Difficulty:
        """
        Accept an enum member, its number, its name, or one of the
        legacy keys (random, greedy, smartGreedy, minmax, nn-minmax).
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                raise ValueError(f"Unknown difficulty: {value}") from None
        if isinstance(value, str):
            key = value.strip()
            if key.isdigit():
                return cls.parse(int(key))
            if key in _LEGACY_KEYS:
                return _LEGACY_KEYS[key]
            normalized = key.upper().replace("-", "_")
            if normalized in cls.__members__:
                return cls[normalized]
        raise ValueError(f"Unknown difficulty: {value!r}")


_LEGACY_KEYS = {
    "random": Difficulty.RANDOM,
    "greedy": Difficulty.GREEDY,
    "smartGreedy": Difficulty.SCORED_GREEDY,
    "minmax": Difficulty.MINIMAX,
    "nn-minmax": Difficulty.MINIMAX_NEURAL,
}


def _neural_evaluator(
    weights: NeuralEvaluator | ValueNetWeights | str | Path | None,
) -> NeuralEvaluator | None:
    if weights is None or isinstance(weights, NeuralEvaluator):
        return weights
    if isinstance(weights, ValueNetWeights):
        return NeuralEvaluator(weights)
    return NeuralEvaluator.from_file(weights)


def create_policy(
    difficulty: Difficulty | int | str,
    depth: int = DEFAULT_DEPTH,
    weights: NeuralEvaluator | ValueNetWeights | str | Path | None = None,
    seed: int | None = None,
    rng: random.Random | None = None,
) -> BotPolicy:
    """
    Build the policy for a tier.

    weights only matters for MINIMAX_NEURAL; it may be a loaded
    evaluator, loaded weights, or a path to the JSON artifact. Without
    it the neural tier searches with heuristic leaves.
    """
    difficulty = Difficulty.parse(difficulty)

    if difficulty is Difficulty.RANDOM:
        return RandomPolicy(seed=seed, rng=rng)
    if difficulty is Difficulty.GREEDY:
        return GreedyPolicy(seed=seed, rng=rng)
    if difficulty is Difficulty.SCORED_GREEDY:
        return ScoredGreedyPolicy(seed=seed, rng=rng)
    if difficulty is Difficulty.MINIMAX:
        return MinimaxPolicy(depth=depth, seed=seed, rng=rng)

    evaluator = _neural_evaluator(weights)
    if evaluator is None:
        logger.warning("No value network weights configured, using heuristic leaves")
        return MinimaxPolicy(depth=depth, evaluator=HeuristicEvaluator(), seed=seed, rng=rng)
    return MinimaxPolicy(depth=depth, evaluator=evaluator, seed=seed, rng=rng)


def select_move(
    board: Board,
    factors: Factors,
    turn_count: int,
    value_index: Mapping[int, int] | None,
    win_target: int,
    difficulty: Difficulty | int | str,
    **policy_kwargs,
) -> Move | None:
    """
    One-shot move selection for the player to act.

    value_index, when given, must be the board's own value map. Returns
    None when the player to act has no legal move.
    """
    if value_index is not None and value_index != board.value_index:
        raise ValueError("value_index does not belong to this board")
    policy = create_policy(difficulty, **policy_kwargs)
    return policy.propose(board, factors, turn_count, win_target)
