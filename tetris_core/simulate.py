"""
Headless simulation: plays complete games with a seeded random placement
policy and prints per-game and aggregate statistics.

For each piece the policy rotates it a random number of times, shifts it
toward a random column, lets gravity run for a few ticks, and hard drops.
"""

from __future__ import annotations

import random
import time
from typing import Any

import numpy as np

from tetris_core.game.session import Command, GameSession


def play_random_game(session: GameSession, rng: random.Random, max_pieces: int = 1000) -> dict[str, Any]:
    """Play one game to game over (or `max_pieces`) and return its record."""
    clears = {0: 0, 1: 0, 2: 0, 3: 0, 4: 0}
    pieces = 0

    while not session.state.game_over and pieces < max_pieces:
        serial = session.state.active.serial
        lines_before = session.state.lines

        for _ in range(rng.randrange(4)):
            session.dispatch(Command.ROTATE, serial=serial)

        target = rng.randrange(session.cols)
        step = Command.MOVE_LEFT if target < session.state.active.x else Command.MOVE_RIGHT
        for _ in range(abs(target - session.state.active.x)):
            if not session.dispatch(step, serial=serial):
                break

        for _ in range(rng.randrange(3)):
            session.tick(serial=serial)

        if session.state.active is not None and session.state.active.serial == serial:
            session.dispatch(Command.HARD_DROP, serial=serial)
        clears[session.state.lines - lines_before] += 1
        pieces += 1

    state = session.state
    return {
        "score": state.score,
        "lines": state.lines,
        "level": state.level,
        "pieces": pieces,
        "tetrises": clears[4],
        "triples": clears[3],
        "doubles": clears[2],
        "singles": clears[1],
        "game_over": state.game_over,
    }


def simulate(config: dict[str, Any], num_games: int = 10, seed: int | None = None) -> list[dict[str, Any]]:
    """Run `num_games` headless games and print statistics.

    Args:
        config: Config dict loaded from game.yaml.
        num_games: Number of games to play.
        seed: Seed for both the piece source and the policy. Falls back to
            config["seed"].

    Returns:
        List of per-game records.
    """
    if seed is None:
        seed = config.get("seed")
    rng = random.Random(seed)
    max_pieces = config.get("simulate_max_pieces", 1000)

    session = GameSession(
        cols=config.get("cols", 10),
        rows=config.get("rows", 20),
        initial_period=config.get("initial_period_ms", 1000.0),
        speed_increment=config.get("speed_increment", 0.9),
        seed=seed,
        randomizer=config.get("randomizer", "uniform"),
    )

    print(f"Running {num_games} games (seed={seed})...\n")
    start_time = time.time()

    records = []
    for game in range(num_games):
        if game > 0:
            session.restart()
        record = play_random_game(session, rng, max_pieces=max_pieces)
        records.append(record)
        print(f"  Game {game + 1}/{num_games} | Score: {record['score']} | "
              f"Lines: {record['lines']} | Pieces: {record['pieces']}")

    elapsed = time.time() - start_time
    print(f"\nSimulation complete in {elapsed:.1f}s\n")

    scores = np.array([r["score"] for r in records])
    lines = np.array([r["lines"] for r in records])
    pieces = np.array([r["pieces"] for r in records])
    print(f"Score:  mean {scores.mean():.1f} | max {scores.max()} | min {scores.min()}")
    print(f"Lines:  mean {lines.mean():.1f} | max {lines.max()}")
    print(f"Pieces: mean {pieces.mean():.1f}")
    print(f"Clears: singles {sum(r['singles'] for r in records)} | "
          f"doubles {sum(r['doubles'] for r in records)} | "
          f"triples {sum(r['triples'] for r in records)} | "
          f"tetrises {sum(r['tetrises'] for r in records)}")

    return records
