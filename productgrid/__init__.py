"""
Product Grid - Connect-N on a multiplication grid.

Two players move one of two factor sliders per turn and capture the
cell holding the product. The package provides:
- The rule engine (board, state, legality, win detection)
- Bot policies from uniform random to alpha-beta search
- A heuristic and a neural static evaluator
- Sessions and a self-play arena
"""

__version__ = "0.1.0"
