"""
Neural Evaluator - Fixed feed-forward value network (inference only).

The network maps a 56-feature encoding of a position to the probability
that the player about to act wins:

    36 ownership values (+1 mine, -1 theirs, 0 empty)
    9 one-hot for factor A, 9 one-hot for factor B (zeros when unset)
    turn_count / 36
    (win_target - 3) / 3

Ownership is relative to the perspective player so one parameter set
serves both seats. Layers are 128, 64 and 32 ReLU units followed by a
single sigmoid output.
"""

from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np

from ..engine_core.board import CELL_COUNT
from ..engine_core.state import MIN_WIN_TARGET
from .weights import INPUT_SIZE, ValueNetWeights, load_weights

if TYPE_CHECKING:
    from ..engine_core.board import Board
    from ..engine_core.state import Factors, Player


SCORE_SCALE = 20000.0
SCORE_OFFSET = -10000.0


def relu(x: np.ndarray) -> np.ndarray:
    return np.maximum(0.0, x)


def sigmoid(x: np.ndarray) -> np.ndarray:
    # tanh form does not overflow for large negative logits
    return 0.5 * (1.0 + np.tanh(0.5 * x))


def encode_features(
    board: Board,
    factors: Factors,
    turn_count: int,
    win_target: int,
    perspective: Player,
) -> np.ndarray:
    """Build the 56-feature input vector for perspective."""
    features = np.zeros(INPUT_SIZE, dtype=np.float32)

    for index, owner in enumerate(board.owners):
        if owner is not None:
            features[index] = 1.0 if owner is perspective else -1.0

    if factors.a is not None:
        features[CELL_COUNT + factors.a - 1] = 1.0
    if factors.b is not None:
        features[CELL_COUNT + 9 + factors.b - 1] = 1.0

    features[CELL_COUNT + 18] = turn_count / CELL_COUNT
    features[CELL_COUNT + 19] = (win_target - MIN_WIN_TARGET) / 3.0
    return features


class NeuralEvaluator:
    """
    Scores positions with the value network.

    The weights are shared and never written, so one evaluator can be
    handed to any number of policies.
    """

    def __init__(self, weights: ValueNetWeights):
        self.weights = weights

    @classmethod
    def from_file(cls, path: str | Path) -> NeuralEvaluator:
        return cls(load_weights(path))

    def forward(self, features: np.ndarray) -> float:
        x = features
        *hidden, (out_weight, out_bias) = self.weights.layers
        for weight, bias in hidden:
            x = relu(weight @ x + bias)
        return float(sigmoid(out_weight @ x + out_bias)[0])

    def evaluate(
        self,
        board: Board,
        factors: Factors,
        turn_count: int,
        win_target: int,
        perspective: Player,
    ) -> float:
        """Win probability in [0, 1] for perspective, the player about to act."""
        features = encode_features(board, factors, turn_count, win_target, perspective)
        return self.forward(features)

    @staticmethod
    def score(probability: float) -> float:
        """Rescale a probability onto the heuristic's score range."""
        return probability * SCORE_SCALE + SCORE_OFFSET

    def score_position(
        self,
        board: Board,
        factors: Factors,
        turn_count: int,
        win_target: int,
        player: Player,
        to_move: Player,
    ) -> float:
        """Leaf score from player's side; the network always sees to_move's view."""
        value = self.score(self.evaluate(board, factors, turn_count, win_target, to_move))
        return value if to_move is player else -value
