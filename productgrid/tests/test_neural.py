"""
Tests for the value network: feature encoding, weight loading and
inference.
"""

import json
import warnings

import numpy as np
import pytest

from ..bots.neural import NeuralEvaluator, encode_features, sigmoid
from ..bots.weights import INPUT_SIZE, ValueNetWeights, WeightsError, load_weights
from ..engine_core.state import Factors, Player
from .helpers import board_with, random_weights


def zero_weights(output_bias: float = 0.0) -> ValueNetWeights:
    params = random_weights(scale=0.0)
    params["output"]["bias"] = [output_bias]
    return ValueNetWeights.from_dict(params)


class TestFeatures:
    """Tests for the 56-feature encoding."""

    def test_layout(self):
        board = board_with({0: Player.P1, 1: Player.P2})
        features = encode_features(board, Factors(a=3), 5, 6, Player.P1)

        assert features.shape == (INPUT_SIZE,)
        assert features[0] == 1.0
        assert features[1] == -1.0
        assert not features[2:36].any()
        assert features[36 + 2] == 1.0
        assert features[36:45].sum() == 1.0
        assert not features[45:54].any()
        assert features[54] == pytest.approx(5 / 36)
        assert features[55] == pytest.approx(1.0)

    def test_perspective_flips_ownership_only(self):
        board = board_with({0: Player.P1, 7: Player.P2, 14: Player.P2})
        mine = encode_features(board, Factors(2, 9), 9, 3, Player.P1)
        theirs = encode_features(board, Factors(2, 9), 9, 3, Player.P2)

        np.testing.assert_array_equal(mine[:36], -theirs[:36])
        np.testing.assert_array_equal(mine[36:], theirs[36:])
        assert theirs[45 + 8] == 1.0
        assert mine[55] == 0.0


class TestWeights:
    """Tests for loading and validating the weight artifact."""

    def test_load_nested(self, weights_file):
        weights = load_weights(weights_file)
        shapes = [(w.shape, b.shape) for w, b in weights.layers]
        assert shapes == [
            ((128, 56), (128,)),
            ((64, 128), (64,)),
            ((32, 64), (32,)),
            ((1, 32), (1,)),
        ]
        assert all(w.dtype == np.float32 for w, _ in weights.layers)

    def test_load_flat_keys(self, tmp_path):
        nested = random_weights(seed=4)
        flat = {
            f"{layer}.{param}": values
            for layer, params in nested.items()
            for param, values in params.items()
        }
        path = tmp_path / "flat.json"
        path.write_text(json.dumps(flat), encoding="utf-8")

        weights = load_weights(path)
        expected = ValueNetWeights.from_dict(nested)
        for (w1, b1), (w2, b2) in zip(weights.layers, expected.layers):
            np.testing.assert_array_equal(w1, w2)
            np.testing.assert_array_equal(b1, b2)

    def test_weights_are_read_only(self, weights_file):
        weight, bias = load_weights(weights_file).layers[0]
        with pytest.raises(ValueError):
            weight[0, 0] = 1.0
        with pytest.raises(ValueError):
            bias[0] = 1.0

    def test_wrong_shape(self):
        params = random_weights()
        params["fc2"]["weight"] = [row[:10] for row in params["fc2"]["weight"]]
        with pytest.raises(WeightsError):
            ValueNetWeights.from_dict(params)

    def test_bias_mismatch(self):
        params = random_weights()
        params["fc3"]["bias"] = params["fc3"]["bias"][:-1]
        with pytest.raises(WeightsError):
            ValueNetWeights.from_dict(params)

    def test_missing_layer(self):
        params = random_weights()
        del params["output"]
        with pytest.raises(WeightsError):
            ValueNetWeights.from_dict(params)

    def test_missing_file(self, tmp_path):
        with pytest.raises(WeightsError):
            load_weights(tmp_path / "nope.json")

    def test_not_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(WeightsError):
            load_weights(path)

    def test_weights_error_is_value_error(self):
        assert issubclass(WeightsError, ValueError)


class TestInference:
    """Tests for the forward pass and score scaling."""

    def test_probability_in_unit_interval(self, weights_file, sorted_board):
        evaluator = NeuralEvaluator.from_file(weights_file)
        board = sorted_board.with_owner(14, Player.P1).with_owner(21, Player.P2)
        prob = evaluator.evaluate(board, Factors(3, 7), 4, 3, Player.P1)
        assert 0.0 <= prob <= 1.0

    def test_zero_network_is_even(self, sorted_board):
        evaluator = NeuralEvaluator(zero_weights())
        assert evaluator.evaluate(sorted_board, Factors(), 0, 3, Player.P1) == pytest.approx(0.5)
        assert NeuralEvaluator.score(0.5) == pytest.approx(0.0)

    def test_score_range(self):
        assert NeuralEvaluator.score(1.0) == pytest.approx(10000.0)
        assert NeuralEvaluator.score(0.0) == pytest.approx(-10000.0)

    def test_sigmoid_saturates_without_overflow(self):
        logits = np.array([-1000.0, 0.0, 1000.0], dtype=np.float32)
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            probs = sigmoid(logits)
        assert probs.tolist() == pytest.approx([0.0, 0.5, 1.0])

    def test_large_weights_stay_in_unit_interval(self, sorted_board):
        evaluator = NeuralEvaluator(ValueNetWeights.from_dict(random_weights(seed=4, scale=5.0)))
        board = sorted_board.with_owner(14, Player.P1).with_owner(21, Player.P2)
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            prob = evaluator.evaluate(board, Factors(3, 7), 4, 3, Player.P1)
        assert 0.0 <= prob <= 1.0

    def test_matches_manual_forward_pass(self, weights_file, sorted_board):
        weights = load_weights(weights_file)
        evaluator = NeuralEvaluator(weights)
        board = sorted_board.with_owner(3, Player.P2)
        x = encode_features(board, Factors(1, 4), 2, 4, Player.P2)

        expected = x
        for i, (w, b) in enumerate(weights.layers):
            expected = w @ expected + b
            if i < len(weights.layers) - 1:
                expected = np.maximum(expected, 0.0)
        expected = 1.0 / (1.0 + np.exp(-expected[0]))

        got = evaluator.evaluate(board, Factors(1, 4), 2, 4, Player.P2)
        assert got == pytest.approx(float(expected), rel=1e-5)

    def test_score_position_is_from_searcher_side(self, sorted_board):
        evaluator = NeuralEvaluator(zero_weights(output_bias=3.0))
        favoured = evaluator.score_position(sorted_board, Factors(), 0, 3, Player.P1, Player.P1)
        against = evaluator.score_position(sorted_board, Factors(), 0, 3, Player.P1, Player.P2)
        assert favoured > 0
        assert against == pytest.approx(-favoured)
