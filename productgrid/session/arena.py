"""
Arena - Bot-vs-bot self-play harness.

Plays a batch of games between two agents. Agent A takes the first
seat for the first half of the batch and the second seat for the rest.
A game is cut off after max_steps moves and counted as a timeout.
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING
import logging
import random
import time

from ..bots.difficulty import Difficulty, create_policy
from ..bots.policy import BotPolicy
from ..bots.search import DEFAULT_DEPTH
from ..engine_core.engine import GameEngine
from ..engine_core.state import Outcome, Player
from .manager import GameSession

if TYPE_CHECKING:
    from ..bots.neural import NeuralEvaluator
    from ..bots.weights import ValueNetWeights
    from .stats import OutcomeRecorder

logger = logging.getLogger(__name__)


DEFAULT_MAX_STEPS = 100


@dataclass
class ArenaReport:
    """Tallies for one arena run."""
    agent_a: str
    agent_b: str
    games: int = 0
    wins_a: int = 0
    wins_b: int = 0
    p1_wins: int = 0
    p2_wins: int = 0
    draws: int = 0
    timeouts: int = 0
    elapsed: float = 0.0

    def win_rate(self, agent: str) -> float:
        if not self.games:
            return 0.0
        wins = self.wins_a if agent == "a" else self.wins_b
        return wins / self.games

    @property
    def verdict(self) -> str:
        if self.wins_a > self.wins_b:
            return f"{self.agent_a} is stronger"
        if self.wins_b > self.wins_a:
            return f"{self.agent_b} is stronger"
        return "Evenly matched"

    def summary(self) -> str:
        width = max(len(self.agent_a), len(self.agent_b), 12)
        lines = [
            f"Games      : {self.games} ({self.elapsed:.2f}s)",
            f"{self.agent_a.ljust(width)}: {self.wins_a} wins ({self.win_rate('a') * 100:.1f}%)",
            f"{self.agent_b.ljust(width)}: {self.wins_b} wins ({self.win_rate('b') * 100:.1f}%)",
            f"First seat : {self.p1_wins} wins, second seat: {self.p2_wins} wins",
            f"Draws      : {self.draws}",
        ]
        if self.timeouts:
            lines.append(f"Timeouts   : {self.timeouts}")
        lines.append(f"Verdict    : {self.verdict}")
        return "\n".join(lines)


class Arena:
    """
    Runs self-play batches.

    Agents may be given as BotPolicy instances or as anything
    Difficulty.parse accepts; the latter are built with this arena's
    depth and weights.
    """

    def __init__(
        self,
        win_target: int = 3,
        max_steps: int = DEFAULT_MAX_STEPS,
        depth: int = DEFAULT_DEPTH,
        weights: NeuralEvaluator | ValueNetWeights | str | Path | None = None,
        seed: int | None = None,
        recorder: OutcomeRecorder | None = None,
    ):
        if max_steps < 1:
            raise ValueError(f"max_steps must be at least 1, got {max_steps}")
        self.win_target = win_target
        self.max_steps = max_steps
        self.depth = depth
        self.weights = weights
        self.rng = random.Random(seed)
        self.recorder = recorder

    def _policy(self, agent: BotPolicy | Difficulty | int | str) -> BotPolicy:
        if isinstance(agent, BotPolicy):
            return agent
        return create_policy(
            agent,
            depth=self.depth,
            weights=self.weights,
            rng=random.Random(self.rng.getrandbits(64)),
        )

    @staticmethod
    def _label(agent: BotPolicy | Difficulty | int | str) -> str:
        if isinstance(agent, BotPolicy):
            return agent.get_name()
        return Difficulty.parse(agent).name.lower()

    def run(
        self,
        agent_a: BotPolicy | Difficulty | int | str,
        agent_b: BotPolicy | Difficulty | int | str,
        games: int,
    ) -> ArenaReport:
        policy_a = self._policy(agent_a)
        policy_b = self._policy(agent_b)
        report = ArenaReport(agent_a=self._label(agent_a), agent_b=self._label(agent_b))
        engine = GameEngine(win_target=self.win_target, rng=random.Random(self.rng.getrandbits(64)))
        session = GameSession(engine, {Player.P1: policy_a, Player.P2: policy_b}, self.recorder)

        started = time.perf_counter()
        for game in range(games):
            a_first = game < games / 2
            session.seats = (
                {Player.P1: policy_a, Player.P2: policy_b}
                if a_first
                else {Player.P1: policy_b, Player.P2: policy_a}
            )
            session.new_game(hard=True)
            final = session.play_out(self.max_steps)
            self._tally(report, final.winner, a_first)
            logger.debug("Game %d/%d: %s", game + 1, games, final.winner.value if final.winner else "timeout")

        report.elapsed = time.perf_counter() - started
        logger.info(
            "Arena %s vs %s: %d-%d (%d draws, %d timeouts)",
            report.agent_a, report.agent_b, report.wins_a, report.wins_b,
            report.draws, report.timeouts,
        )
        return report

    @staticmethod
    def _tally(report: ArenaReport, winner: Outcome | None, a_first: bool) -> None:
        report.games += 1
        if winner is None:
            report.timeouts += 1
            return
        if winner is Outcome.DRAW:
            report.draws += 1
            return

        if winner is Outcome.P1:
            report.p1_wins += 1
        else:
            report.p2_wins += 1
        if (winner is Outcome.P1) == a_first:
            report.wins_a += 1
        else:
            report.wins_b += 1
