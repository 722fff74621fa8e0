"""
Bots - Computer opponents, from uniform random to alpha-beta search.

Every tier implements the BotPolicy contract; Difficulty picks one.
"""

from .policy import BotPolicy, BotDecision, RandomPolicy
from .greedy import GreedyPolicy, ScoredGreedyPolicy, MoveScoreWeights
from .evaluator import HeuristicEvaluator, EvaluationWeights
from .weights import ValueNetWeights, WeightsError, load_weights
from .neural import NeuralEvaluator, encode_features
from .search import MinimaxPolicy, WIN, LOSS, DRAW
from .difficulty import Difficulty, create_policy, select_move

__all__ = [
    "BotPolicy",
    "BotDecision",
    "RandomPolicy",
    "GreedyPolicy",
    "ScoredGreedyPolicy",
    "MoveScoreWeights",
    "HeuristicEvaluator",
    "EvaluationWeights",
    "ValueNetWeights",
    "WeightsError",
    "load_weights",
    "NeuralEvaluator",
    "encode_features",
    "MinimaxPolicy",
    "WIN",
    "LOSS",
    "DRAW",
    "Difficulty",
    "create_policy",
    "select_move",
]
