"""
Dots-and-Boxes CLI - Command-line interface for the engine.

Usage:
    dotsboxes selfplay [--rows R] [--cols C]     Play a full game between two bots
    dotsboxes suggest --moves "0,0,top;0,0,l"    Replay moves and print the greedy pick
"""

import argparse
import logging
import sys

from . import config


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Dots-and-Boxes engine",
        prog="dotsboxes",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Self-play command
    selfplay_parser = subparsers.add_parser("selfplay", help="Play a full game between two bots")
    selfplay_parser.add_argument("--rows", type=int, default=config.DOTSBOXES_DEFAULT_ROWS)
    selfplay_parser.add_argument("--cols", type=int, default=config.DOTSBOXES_DEFAULT_COLS)
    selfplay_parser.add_argument(
        "--human-policy",
        choices=["greedy", "first", "random"],
        default="first",
        help="Policy playing the human side",
    )
    selfplay_parser.add_argument(
        "--computer-policy",
        choices=["greedy", "first", "random"],
        default="greedy",
        help="Policy playing the computer side",
    )
    selfplay_parser.add_argument("--seed", type=int, default=None, help="Seed for the random policy")
    selfplay_parser.add_argument("--computer-first", action="store_true")

    # Suggest command
    suggest_parser = subparsers.add_parser("suggest", help="Suggest the computer's next move")
    suggest_parser.add_argument("--rows", type=int, default=config.DOTSBOXES_DEFAULT_ROWS)
    suggest_parser.add_argument("--cols", type=int, default=config.DOTSBOXES_DEFAULT_COLS)
    suggest_parser.add_argument(
        "--moves",
        default="",
        help="Moves played so far, as 'row,col,direction' separated by ';'",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.DOTSBOXES_LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "selfplay":
        return cmd_selfplay(args)
    elif args.command == "suggest":
        return cmd_suggest(args)
    else:
        parser.print_help()
        return 1


def _make_policy(name, seed):
    from .bots import POLICIES, RandomPolicy

    if name == "random":
        return RandomPolicy(seed=seed)
    return POLICIES[name]()


def cmd_selfplay(args):
    """Play a full game between two policies."""
    from .engine_core import InvalidDimensions, Player, create_game, apply_move, legal_moves

    try:
        state = create_game(
            args.rows,
            args.cols,
            Player.COMPUTER if args.computer_first else Player.HUMAN,
        )
    except InvalidDimensions as e:
        print(f"Error: {e}")
        return 1

    policies = {
        Player.HUMAN: _make_policy(args.human_policy, args.seed),
        Player.COMPUTER: _make_policy(args.computer_policy, args.seed),
    }

    print(f"{args.rows}x{args.cols}: {args.human_policy} (human) vs {args.computer_policy} (computer)")
    while not state.is_over:
        mover = state.current_player
        decision = policies[mover].select_move(state, legal_moves(state))
        result = apply_move(state, decision.move)
        state = result.unwrap()
        captured = f" captures {result.gained}" if result.gained else ""
        print(f"{len(state.moves):3d}. {mover.value:8s} {decision.move}{captured}")

    human, computer = state.scores
    print(f"\nFinal score: human {human} - computer {computer}")
    print(f"Result: {state.result.value}")
    return 0


def cmd_suggest(args):
    """Replay moves and print the greedy suggestion for the player to move."""
    from .engine_core import DotsBoxesError, Move, replay
    from .bots import select_move

    try:
        moves = [Move.parse(text) for text in args.moves.split(";") if text.strip()]
        state = replay(args.rows, args.cols, moves)
    except (ValueError, DotsBoxesError) as e:
        print(f"Error: {e}")
        return 1

    move = select_move(state)
    if move is None:
        print(f"Game over: {state.result.value}")
        return 0

    print(f"{state.current_player.value} to move: {move}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
