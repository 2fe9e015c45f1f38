"""
Entry point for the Tetris engine.

Supports two modes:
  - play:     Play Tetris manually with keyboard controls (pygame window).
  - simulate: Run headless games with a random placement policy and print stats.

Usage:
    python main.py --mode play
    python main.py --mode play --config config/game.yaml --seed 7
    python main.py --mode simulate --games 50
"""

from __future__ import annotations

import argparse
import pathlib
import sys

import yaml


def load_config(config_path: str | pathlib.Path) -> dict:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        Dict of configuration key-value pairs (empty if the file is empty).

    Raises:
        FileNotFoundError: If the config file does not exist.
    """
    config_path = pathlib.Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Namespace with mode, config, seed, and games attributes.
    """
    parser = argparse.ArgumentParser(
        description="Tetris: play the game or run headless simulations.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--mode",
        type=str,
        choices=["play", "simulate"],
        default="play",
        help="Run mode: 'play' (manual play), 'simulate' (headless random games).",
    )
    parser.add_argument(
        "--config",
        type=str,
        default="config/game.yaml",
        help="Path to the YAML configuration file.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the piece randomizer (overrides the config value).",
    )
    parser.add_argument(
        "--games",
        type=int,
        default=None,
        help="Number of games to run in 'simulate' mode (default: config simulate_games).",
    )
    return parser.parse_args(argv)


def main() -> None:
    """Main entry point: parse args, load config, and dispatch to the selected mode."""
    args = parse_args()
    config = load_config(args.config)
    if args.seed is not None:
        config["seed"] = args.seed

    if args.mode == "play":
        from tetris_core.play import play_manual
        play_manual(config)

    elif args.mode == "simulate":
        from tetris_core.simulate import simulate
        games = args.games if args.games is not None else config.get("simulate_games", 10)
        simulate(config, num_games=games)

    else:
        print(f"Unknown mode: {args.mode}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
