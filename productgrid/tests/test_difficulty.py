"""
Tests for difficulty dispatch and the one-shot select_move entry point.
"""

import logging

import pytest

from ..bots import (
    Difficulty,
    GreedyPolicy,
    HeuristicEvaluator,
    MinimaxPolicy,
    NeuralEvaluator,
    RandomPolicy,
    ScoredGreedyPolicy,
    create_policy,
    select_move,
)
from ..engine_core.action import FactorSlot, Move
from ..engine_core.board import Board, PRODUCTS
from ..engine_core.state import Factors, Player
from .helpers import state_with


class TestDifficultyParse:
    """Tests for parsing tier names."""

    @pytest.mark.parametrize(
        "key, expected",
        [
            ("random", Difficulty.RANDOM),
            ("greedy", Difficulty.GREEDY),
            ("smartGreedy", Difficulty.SCORED_GREEDY),
            ("minmax", Difficulty.MINIMAX),
            ("nn-minmax", Difficulty.MINIMAX_NEURAL),
            ("MINIMAX_NEURAL", Difficulty.MINIMAX_NEURAL),
            ("scored_greedy", Difficulty.SCORED_GREEDY),
            ("4", Difficulty.MINIMAX),
            (2, Difficulty.GREEDY),
            (Difficulty.RANDOM, Difficulty.RANDOM),
        ],
    )
    def test_parse(self, key, expected):
        assert Difficulty.parse(key) is expected

    @pytest.mark.parametrize("key", ["expert", 0, 6, "", True])
    def test_unknown(self, key):
        with pytest.raises(ValueError):
            Difficulty.parse(key)


class TestCreatePolicy:
    """Tests for the policy factory."""

    @pytest.mark.parametrize(
        "difficulty, policy_cls",
        [
            (Difficulty.RANDOM, RandomPolicy),
            (Difficulty.GREEDY, GreedyPolicy),
            (Difficulty.SCORED_GREEDY, ScoredGreedyPolicy),
            (Difficulty.MINIMAX, MinimaxPolicy),
        ],
    )
    def test_tier_classes(self, difficulty, policy_cls):
        assert type(create_policy(difficulty, seed=1)) is policy_cls

    def test_depth_is_passed_through(self):
        assert create_policy("minmax", depth=2).depth == 2

    def test_neural_tier_with_weights(self, weights_file):
        policy = create_policy(Difficulty.MINIMAX_NEURAL, weights=weights_file)
        assert isinstance(policy, MinimaxPolicy)
        assert isinstance(policy.evaluator, NeuralEvaluator)

    def test_neural_tier_without_weights_falls_back(self, caplog):
        with caplog.at_level(logging.WARNING):
            policy = create_policy(Difficulty.MINIMAX_NEURAL)
        assert isinstance(policy.evaluator, HeuristicEvaluator)
        assert "weights" in caplog.text

    def test_shared_evaluator_is_reused(self, weights_file):
        evaluator = NeuralEvaluator.from_file(weights_file)
        policy = create_policy("nn-minmax", weights=evaluator)
        assert policy.evaluator is evaluator


class TestSelectMove:
    """Tests for the module-level entry point."""

    def test_turn_zero_places_a(self, sorted_board):
        move = select_move(sorted_board, Factors(), 0, sorted_board.value_index, 3, "minmax", seed=1)
        assert isinstance(move, Move)
        assert move.slot is FactorSlot.A

    @pytest.mark.parametrize("difficulty", list(Difficulty))
    def test_every_tier_takes_an_immediate_win(self, difficulty, weights_file):
        state = state_with({0: Player.P1, 1: Player.P1, 4: Player.P2}, (1, 5), turn_count=4)
        move = select_move(
            state.board, state.factors, 4, state.value_index, 3, difficulty,
            depth=2, weights=weights_file, seed=0,
        )
        if difficulty is Difficulty.RANDOM:
            assert move is not None
        else:
            assert move == Move(FactorSlot.B, 3)

    def test_no_move_is_none(self):
        owned = {i: Player.P2 for i in range(36) if i != 35}
        state = state_with(owned, (1, 1), turn_count=6)
        assert select_move(state.board, state.factors, 6, None, 3, Difficulty.GREEDY) is None

    def test_foreign_value_index_rejected(self, sorted_board):
        other = Board.from_values(tuple(reversed(PRODUCTS)))
        with pytest.raises(ValueError):
            select_move(sorted_board, Factors(), 0, other.value_index, 3, "random")
