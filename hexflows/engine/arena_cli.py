"""CLI for running bot-vs-bot arena matches.

Usage::

    python -m hexflows.engine.arena_cli --p1 random --p2 heuristic --games 20

    # Larger board with supermove
    python -m hexflows.engine.arena_cli --p1 heuristic --p2 heuristic \\
        --radius 4 --supermove --games 10

    # Four-player team game
    python -m hexflows.engine.arena_cli --players 4 --games 10
"""

from __future__ import annotations

import argparse
import logging
import sys

from hexflows.config import settings
from hexflows.engine.arena import run_arena
from hexflows.engine.bot_strategy import available_strategies, get_strategy
from hexflows.engine.registry import PluginRegistry


def _game_options(args: argparse.Namespace) -> dict:
    options: dict = {
        "board_radius": args.radius,
        "supermove": args.supermove,
        "single_supermove": args.single_supermove,
    }
    if args.no_teams:
        options["teams"] = False
    return options


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Bot-vs-Bot Arena")
    parser.add_argument("--game", default="flows")
    parser.add_argument("--games", type=int, default=50)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--players", type=int, default=2, help="Seats at the table (2-6)")
    parser.add_argument("--p1", default="random", help="Strategy for player 1")
    parser.add_argument("--p2", default="heuristic", help="Strategy for player 2")
    parser.add_argument("--radius", type=int, default=settings.board_radius)
    parser.add_argument(
        "--supermove",
        action=argparse.BooleanOptionalAction,
        default=settings.supermove,
        help="Let blocked players replace a placed tile",
    )
    parser.add_argument(
        "--single-supermove",
        action=argparse.BooleanOptionalAction,
        default=settings.single_supermove,
        help="Return the displaced tile to the deck instead of replaying it",
    )
    parser.add_argument(
        "--no-teams",
        action="store_true",
        help="Play 4 and 6 player games without teams",
    )
    parser.add_argument("--log-level", default=settings.log_level)
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    registry = PluginRegistry()
    registry.register_builtin_games()
    try:
        plugin = registry.get(args.game)
    except KeyError:
        print(f"Unknown game: {args.game}", file=sys.stderr)
        sys.exit(1)

    for name in (args.p1, args.p2):
        if name not in available_strategies():
            print(
                f"Unknown strategy: {name}. Available: {', '.join(available_strategies())}",
                file=sys.stderr,
            )
            sys.exit(1)

    p1_label, p2_label = args.p1, args.p2
    if p1_label == p2_label:
        p1_label = f"{p1_label}_1"
        p2_label = f"{p2_label}_2"

    names = {
        p1_label: get_strategy(args.p1, seed=args.seed),
        p2_label: get_strategy(args.p2, seed=args.seed + 1),
    }

    print(f"Arena: {' vs '.join(names.keys())}, {args.games} games, {args.players} players")
    print(
        f"  Board radius {args.radius}, supermove "
        f"{'on' if args.supermove else 'off'}"
        f"{' (single)' if args.single_supermove else ''}"
    )
    print()

    result = run_arena(
        plugin=plugin,
        strategies=names,
        num_games=args.games,
        base_seed=args.seed,
        num_players=args.players,
        game_options=_game_options(args),
        progress_callback=lambda done, total: print(
            f"\r  Game {done}/{total}", end="", flush=True
        ),
    )
    print()
    print()
    print(result.summary())


if __name__ == "__main__":
    main()
