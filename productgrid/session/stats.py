"""
Outcome statistics - The recorder interface sessions report to.

Where outcomes are persisted (browser storage, a file, a database) is
the host's business; the core only calls record_outcome once per
finished game.
"""

from __future__ import annotations
from collections import Counter
from typing import Protocol

from ..engine_core.state import Outcome, Player


class OutcomeRecorder(Protocol):
    def record_outcome(self, outcome: Outcome) -> None:
        ...


class InMemoryOutcomeRecorder:
    """Tallies outcomes in a Counter; the default for tests and the CLI."""

    def __init__(self):
        self.counts: Counter[Outcome] = Counter()

    def record_outcome(self, outcome: Outcome) -> None:
        self.counts[outcome] += 1

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def wins_for(self, player: Player) -> int:
        return self.counts[Outcome.for_player(player)]

    def as_dict(self, human: Player = Player.P1) -> dict[str, int]:
        """Human-vs-computer view: human wins, computer wins, games played."""
        return {
            "human_wins": self.wins_for(human),
            "ai_wins": self.wins_for(human.opponent),
            "draws": self.counts[Outcome.DRAW],
            "total": self.total,
        }

    def reset(self) -> None:
        self.counts.clear()
