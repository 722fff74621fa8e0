"""
Pytest fixtures for Product Grid tests.

The sorted board places the products in ascending order, row-major:

     1  2  3  4  5  6
     7  8  9 10 12 14
    15 16 18 20 21 24
    25 27 28 30 32 35
    36 40 42 45 48 49
    54 56 63 64 72 81
"""

import json
import random

import pytest

from ..engine_core.board import Board, PRODUCTS
from ..engine_core.engine import GameEngine
from .helpers import random_weights


@pytest.fixture
def sorted_board() -> Board:
    return Board.from_values(PRODUCTS)


@pytest.fixture
def engine(sorted_board: Board) -> GameEngine:
    """Engine on the sorted board, win target 3."""
    return GameEngine(win_target=3, seed=7, board=sorted_board)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def weights_file(tmp_path):
    """Random value network weights written as JSON."""
    path = tmp_path / "value_net.json"
    path.write_text(json.dumps(random_weights()), encoding="utf-8")
    return path


@pytest.fixture
def no_productgrid_env(monkeypatch):
    for suffix in ("WIN_COUNT", "SEARCH_DEPTH", "WEIGHTS", "MAX_STEPS", "LOG_LEVEL"):
        monkeypatch.delenv(f"PRODUCTGRID_{suffix}", raising=False)
