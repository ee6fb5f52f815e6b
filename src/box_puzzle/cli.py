from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

import yaml

from .api import new_game
from .config import GameConfig
from .console import ConsolePresentation
from .yaml_io import load_config_yaml, write_config_template


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="box-puzzle",
        description="Roll letter boxes across an 8x8 grid to match a target letter.",
    )
    parser.add_argument(
        "--config",
        type=str,
        default="box_puzzle.yaml",
        help="Path to YAML game config (used if it exists)",
    )
    parser.add_argument(
        "--write-template",
        action="store_true",
        help="Write a config YAML with the default values and exit",
    )
    parser.add_argument(
        "--layout",
        type=str,
        default=None,
        help="Path to YAML starting grid (target + 8x8 rows of cell specs)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--turns", type=int, default=None, help="Number of turns to play"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="DEBUG, INFO, WARNING, ERROR or CRITICAL",
    )
    args = parser.parse_args(argv)

    if args.write_template:
        try:
            write_config_template(args.config)
        except OSError as e:
            print(e)
            return 1
        print(f"Wrote template config to {args.config}")
        return 0

    try:
        config_path = Path(args.config)
        config = load_config_yaml(config_path) if config_path.exists() else GameConfig()
        overrides = {
            k: v
            for k, v in (
                ("seed", args.seed),
                ("turns", args.turns),
                ("log_level", args.log_level),
            )
            if v is not None
        }
        if overrides:
            config = replace(config, **overrides)
    except (OSError, TypeError, ValueError, yaml.YAMLError) as e:
        print(f"Invalid configuration: {e}")
        return 1

    logging.basicConfig(level=config.logging_level)

    try:
        game = new_game(config, ConsolePresentation(), layout_path=args.layout)
    except (OSError, TypeError, ValueError, yaml.YAMLError) as e:
        print(f"Could not load layout: {e}")
        return 1

    try:
        game.play()
    except (EOFError, KeyboardInterrupt):
        print()
        print("Game aborted.")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
