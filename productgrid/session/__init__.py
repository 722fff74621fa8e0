"""
Session Module - Drives games between humans and bots.

A session owns one engine and the policy for each seat. Outcomes are
handed to an injected recorder; nothing here persists anything.
"""

from .stats import OutcomeRecorder, InMemoryOutcomeRecorder
from .manager import GameSession
from .arena import Arena, ArenaReport

__all__ = [
    "OutcomeRecorder",
    "InMemoryOutcomeRecorder",
    "GameSession",
    "Arena",
    "ArenaReport",
]
