"""Seedable piece sources: independent uniform draws or a shuffled 7-bag."""

from __future__ import annotations

import random

from tetris_core.game.pieces import PIECE_KINDS

RANDOMIZERS: tuple[str, ...] = ("uniform", "bag")


class PieceSource:
    """Produces the sequence of upcoming piece kinds.

    Attributes:
        mode: "uniform" draws each kind independently (repeats allowed);
            "bag" deals all 7 kinds in shuffled batches.
        seed: Seed passed to the private random.Random, or None.
    """

    def __init__(self, seed: int | None = None, mode: str = "uniform") -> None:
        if mode not in RANDOMIZERS:
            raise ValueError(f"Unknown randomizer {mode!r}, expected one of {RANDOMIZERS}")
        self.mode = mode
        self.seed = seed
        self._rng = random.Random(seed)
        self._bag: list[str] = []

    def next(self) -> str:
        """Draw the next piece kind."""
        if self.mode == "uniform":
            return self._rng.choice(PIECE_KINDS)
        if not self._bag:
            self._fill_bag()
        return self._bag.pop()

    def _fill_bag(self) -> None:
        bag = list(PIECE_KINDS)
        self._rng.shuffle(bag)
        self._bag = bag
