"""
Product Grid CLI - Command-line interface for bot play.

Usage:
    productgrid arena <agent_a> <agent_b>     Run a self-play batch
    productgrid selfplay <p1> <p2>            Play one game and show the board

Agents are difficulty names or numbers: random, greedy, smartGreedy,
minmax, nn-minmax (or 1-5).
"""

import argparse
import logging
import sys

from pydantic import ValidationError

from .bots import Difficulty, WeightsError, create_policy
from .config import Settings
from .engine_core import GameEngine, Player
from .session import Arena, GameSession, InMemoryOutcomeRecorder


def _difficulty(value: str) -> Difficulty:
    try:
        return Difficulty.parse(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--depth", type=int, default=None, help="Minimax search depth")
    parser.add_argument("--weights", default=None, help="Path to value network weights (JSON)")
    parser.add_argument("--win-count", type=int, default=None, help="Run length needed to win (3-6)")
    parser.add_argument("--log-level", default=None, help="Logging level (DEBUG, INFO, ...)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Product Grid - connect-N on a multiplication grid",
        prog="productgrid",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Arena command
    arena_parser = subparsers.add_parser("arena", help="Pit two bots against each other")
    arena_parser.add_argument("agent_a", type=_difficulty, help="First agent")
    arena_parser.add_argument("agent_b", type=_difficulty, help="Second agent")
    arena_parser.add_argument("--games", type=int, default=10, help="Number of games")
    arena_parser.add_argument("--max-steps", type=int, default=None, help="Move ceiling per game")
    _add_common(arena_parser)

    # Selfplay command
    selfplay_parser = subparsers.add_parser("selfplay", help="Play one bot-vs-bot game")
    selfplay_parser.add_argument("p1", type=_difficulty, help="First seat")
    selfplay_parser.add_argument("p2", type=_difficulty, help="Second seat")
    _add_common(selfplay_parser)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    try:
        settings = Settings.from_env().with_overrides(
            win_target=args.win_count,
            search_depth=args.depth,
            weights_path=args.weights,
            log_level=args.log_level,
            max_steps=getattr(args, "max_steps", None),
        )
    except ValidationError as e:
        print(f"Error: invalid settings\n{e}")
        sys.exit(2)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "arena":
            cmd_arena(args, settings)
        elif args.command == "selfplay":
            cmd_selfplay(args, settings)
    except WeightsError as e:
        print(f"Error: {e}")
        sys.exit(1)


def cmd_arena(args, settings: Settings):
    """Run a self-play batch and print the tallies."""
    arena = Arena(
        win_target=settings.win_target,
        max_steps=settings.max_steps,
        depth=settings.search_depth,
        weights=settings.weights_path,
        seed=args.seed,
    )

    print(f"Arena: {args.agent_a.name} vs {args.agent_b.name}")
    print(f"Rules: first to {settings.win_target} in a row, {args.games} games")
    print("-" * 40)
    report = arena.run(args.agent_a, args.agent_b, args.games)
    print(report.summary())


def cmd_selfplay(args, settings: Settings):
    """Play one game and print the final board."""
    engine = GameEngine(win_target=settings.win_target, seed=args.seed)
    seats = {
        player: create_policy(
            difficulty,
            depth=settings.search_depth,
            weights=settings.weights_path,
            seed=None if args.seed is None else args.seed + offset,
        )
        for offset, (player, difficulty) in enumerate(((Player.P1, args.p1), (Player.P2, args.p2)))
    }
    recorder = InMemoryOutcomeRecorder()
    session = GameSession(engine, seats, recorder)

    final = session.play_out(settings.max_steps)

    print(final.board.render())
    print()
    print(f"Turns : {final.turn_count}")
    if final.winner is None:
        print("Result: no result within the move ceiling")
    elif final.winner.player is None:
        print("Result: draw")
    else:
        winner = final.winner.player
        print(f"Result: {winner.value} ({seats[winner].get_name()}) wins")
    if final.winning_line:
        print(f"Line  : {', '.join(str(final.board.values[i]) for i in final.winning_line)}")


if __name__ == "__main__":
    main()
