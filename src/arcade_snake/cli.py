"""Command-line tools for Arcade Snake."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from arcade_snake.config import GameConfig
from arcade_snake.persistence import JsonFileHighScoreStore

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="arcade-snake",
        description="Arcade Snake high score and configuration tools.",
    )
    parser.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- highscore ---
    hs_p = sub.add_parser("highscore", help="Inspect the stored high score.")
    hs_sub = hs_p.add_subparsers(dest="action", required=True)
    hs_sub.add_parser("show", help="Print the stored high score.")
    hs_sub.add_parser("reset", help="Remove the stored high score.")

    # --- config ---
    cfg_p = sub.add_parser("config", help="Write or check a config file.")
    cfg_sub = cfg_p.add_subparsers(dest="action", required=True)
    dump_p = cfg_sub.add_parser(
        "dump", help="Write the effective config as JSON.",
    )
    dump_p.add_argument(
        "output", nargs="?", default=None,
        help="Destination file (stdout when omitted).",
    )
    dump_p.add_argument("--grid-size", type=int, default=None)
    dump_p.add_argument("--tick-ms", type=int, default=None)
    dump_p.add_argument("--food-reward", type=int, default=None)
    check_p = cfg_sub.add_parser("check", help="Validate a config file.")
    check_p.add_argument("path")

    return parser


def _load_config(args: argparse.Namespace) -> GameConfig:
    return GameConfig.load(args.config) if args.config else GameConfig()


def _run_highscore(args: argparse.Namespace) -> int:
    config = _load_config(args)
    store = JsonFileHighScoreStore(
        config.high_score_path, key=config.high_score_key,
    )
    if args.action == "show":
        print(store.read())  # noqa: T201
    else:
        store.clear()
        logger.info("High score cleared in %s.", store.path)
    return 0


def _run_config(args: argparse.Namespace) -> int:
    if args.action == "check":
        try:
            GameConfig.load(args.path)
        except (OSError, ValueError, TypeError) as exc:
            print(f"Invalid config: {exc}", file=sys.stderr)  # noqa: T201
            return 1
        print(f"{args.path}: OK")  # noqa: T201
        return 0

    config = _load_config(args).with_overrides(
        grid_size=args.grid_size,
        tick_ms=args.tick_ms,
        food_reward=args.food_reward,
    )
    if args.output:
        config.save(args.output)
    else:
        print(json.dumps(config.to_dict(), indent=2))  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``arcade-snake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "highscore": _run_highscore,
        "config": _run_config,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
