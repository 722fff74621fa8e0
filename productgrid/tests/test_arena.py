"""
Tests for the self-play arena.
"""

import pytest

from ..bots import Difficulty, RandomPolicy
from ..engine_core.state import Player, player_to_move
from ..session import Arena, ArenaReport, InMemoryOutcomeRecorder


class SeatSpy(RandomPolicy):
    """Random policy that remembers which seat it played each game."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.seats = []

    def decide(self, board, factors, turn_count, win_target):
        if turn_count < 2:
            self.seats.append(player_to_move(turn_count))
        return super().decide(board, factors, turn_count, win_target)


class TestArena:
    """Tests for batches of games."""

    def test_every_game_is_accounted_for(self):
        report = Arena(seed=1).run("random", "greedy", 6)
        assert report.games == 6
        assert report.wins_a + report.wins_b + report.draws + report.timeouts == 6
        assert report.p1_wins + report.p2_wins == report.wins_a + report.wins_b

    def test_seats_alternate_by_half(self):
        spy_a = SeatSpy(seed=1)
        spy_b = SeatSpy(seed=2)
        Arena(seed=3).run(spy_a, spy_b, 4)
        assert spy_a.seats == [Player.P1, Player.P1, Player.P2, Player.P2]
        assert spy_b.seats == [Player.P2, Player.P2, Player.P1, Player.P1]

    def test_step_ceiling_counts_timeouts(self):
        report = Arena(seed=1, max_steps=2).run(Difficulty.RANDOM, Difficulty.RANDOM, 3)
        assert report.timeouts == 3
        assert report.wins_a == report.wins_b == 0

    def test_stronger_tier_wins_more(self):
        report = Arena(seed=7, depth=2).run("minmax", "random", 10)
        assert report.wins_a > report.wins_b

    def test_outcomes_recorded(self):
        recorder = InMemoryOutcomeRecorder()
        report = Arena(seed=5, recorder=recorder).run("greedy", "random", 4)
        assert recorder.total == report.games - report.timeouts

    def test_rejects_zero_ceiling(self):
        with pytest.raises(ValueError):
            Arena(max_steps=0)


class TestArenaReport:
    """Tests for the report."""

    def test_summary_and_verdict(self):
        report = ArenaReport(agent_a="minimax", agent_b="random", games=4, wins_a=3, wins_b=1, p1_wins=2, p2_wins=2)
        assert report.win_rate("a") == 0.75
        assert report.verdict == "minimax is stronger"
        text = report.summary()
        assert "minimax" in text and "75.0%" in text
        assert "Timeouts" not in text

    def test_even_verdict(self):
        assert ArenaReport(agent_a="a", agent_b="b").verdict == "Evenly matched"
